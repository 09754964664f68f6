import logging

from sqlalchemy.orm import Session

from database.repositories import (
    ApplicationRepository,
    ScoringEventRepository,
    SkillRepository,
    TenantRepository,
)

logger = logging.getLogger(__name__)


class ScoringRepository:
    """
    Facade over the per-aggregate repositories, all bound to one Session.

    The scoring orchestrator and the web services receive one of these per
    unit of work (see database.uow.scoring_uow).
    """

    def __init__(self, db: Session):
        self.db = db
        self.applications = ApplicationRepository(db)
        self.skills = SkillRepository(db)
        self.events = ScoringEventRepository(db)
        self.tenants = TenantRepository(db)

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
