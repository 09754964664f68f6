from database.repositories.base import BaseRepository, as_uuid
from database.repositories.application import ApplicationRepository
from database.repositories.skill import SkillRepository
from database.repositories.scoring_event import ScoringEventRepository
from database.repositories.tenant import TenantRepository

__all__ = [
    'BaseRepository',
    'as_uuid',
    'ApplicationRepository',
    'SkillRepository',
    'ScoringEventRepository',
    'TenantRepository',
]
