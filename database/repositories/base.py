import uuid
from typing import Any, Optional

from sqlalchemy.orm import Session


def as_uuid(value: Any) -> Optional[uuid.UUID]:
    """Accept UUIDs or their string form; anything unparsable is None (never matches a row)."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


class BaseRepository:
    """Shares one Session; the unit of work owns commit/rollback."""

    def __init__(self, db: Session):
        self.db = db
