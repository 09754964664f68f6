import logging
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from database.models import Job, JobApplication
from database.repositories.base import BaseRepository, as_uuid

logger = logging.getLogger(__name__)


class ApplicationRepository(BaseRepository):
    def get_for_scoring(self, application_id: Any) -> Optional[JobApplication]:
        """Load an application with its job, the job's tenant and the candidate in one query."""
        key = as_uuid(application_id)
        if key is None:
            return None
        stmt = (
            select(JobApplication)
            .options(
                joinedload(JobApplication.job).joinedload(Job.tenant),
                joinedload(JobApplication.candidate),
            )
            .where(JobApplication.id == key)
        )
        return self.db.execute(stmt).unique().scalar_one_or_none()

    def get_by_id(self, application_id: Any) -> Optional[JobApplication]:
        key = as_uuid(application_id)
        return self.db.get(JobApplication, key) if key is not None else None

    def update_match(self, application: JobApplication, score: int, reason: str) -> None:
        """Overwrite the latest verdict. No locking: concurrent evaluations are last-write-wins."""
        application.match_score = score
        application.match_reason = reason
