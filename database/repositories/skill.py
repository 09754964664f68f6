from typing import Any, List

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from database.models import CandidateSkill, JobSkill
from database.repositories.base import BaseRepository, as_uuid


class SkillRepository(BaseRepository):
    """Read-only access to the structured skill links."""

    def get_job_skills(self, tenant_id: Any, job_id: Any) -> List[JobSkill]:
        stmt = (
            select(JobSkill)
            .options(joinedload(JobSkill.skill))
            .where(JobSkill.tenant_id == as_uuid(tenant_id), JobSkill.job_id == as_uuid(job_id))
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_candidate_skills(self, tenant_id: Any, candidate_id: Any) -> List[CandidateSkill]:
        if candidate_id is None:
            return []
        stmt = (
            select(CandidateSkill)
            .options(joinedload(CandidateSkill.skill))
            .where(
                CandidateSkill.tenant_id == as_uuid(tenant_id),
                CandidateSkill.candidate_id == as_uuid(candidate_id),
            )
        )
        return list(self.db.execute(stmt).scalars().all())
