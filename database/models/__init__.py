from .base import Base, JSONType
from .tenant import Tenant
from .job import Job
from .candidate import Candidate
from .application import JobApplication
from .skill import Skill, JobSkill, CandidateSkill
from .scoring_event import ScoringEvent

__all__ = [
    'Base',
    'JSONType',
    'Tenant',
    'Job',
    'Candidate',
    'JobApplication',
    'Skill',
    'JobSkill',
    'CandidateSkill',
    'ScoringEvent',
]
