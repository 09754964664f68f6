import logging
from typing import Any, List, Optional

from sqlalchemy import select

from database.models import ScoringEvent
from database.repositories.base import BaseRepository, as_uuid

logger = logging.getLogger(__name__)


class ScoringEventRepository(BaseRepository):
    def add_event(self, **fields: Any) -> ScoringEvent:
        """Append one audit record. Events are never updated or deleted here."""
        event = ScoringEvent(**fields)
        self.db.add(event)
        self.db.flush()
        return event

    def list_for_application(self, application_id: Any, limit: Optional[int] = None) -> List[ScoringEvent]:
        """Newest first."""
        stmt = (
            select(ScoringEvent)
            .where(ScoringEvent.application_id == as_uuid(application_id))
            .order_by(ScoringEvent.created_at.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def latest_for_application(self, application_id: Any) -> Optional[ScoringEvent]:
        events = self.list_for_application(application_id, limit=1)
        return events[0] if events else None
