import contextlib
import logging
from typing import Callable, Optional

from sqlalchemy.orm import Session

from database.database import SessionLocal
from database.repository import ScoringRepository

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def scoring_uow(session_factory: Optional[Callable[[], Session]] = None):
    """Per-unit-of-work transaction scope.

    Yields a ScoringRepository bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.

    Usage:
        with scoring_uow() as repo:
            application = repo.applications.get_for_scoring(application_id)
            # perform operations...
        # commit happens automatically on successful exit
    """
    session = (session_factory or SessionLocal)()
    try:
        repo = ScoringRepository(session)
        yield repo
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
