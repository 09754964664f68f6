import uuid

from sqlalchemy import Column, Text, ForeignKey, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship

from .base import Base


class Skill(Base):
    """Skill taxonomy entry. external_source is e.g. 'esco'; NULL means locally defined."""
    __tablename__ = 'skill'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Uuid, ForeignKey('tenant.id', ondelete='CASCADE'), nullable=True, index=True)
    name = Column(Text, nullable=False)
    category = Column(Text, nullable=True)
    external_source = Column(Text, nullable=True)
    external_id = Column(Text, nullable=True)


class JobSkill(Base):
    __tablename__ = 'job_skill'
    __table_args__ = (
        UniqueConstraint('job_id', 'skill_id', name='uq_job_skill'),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Uuid, ForeignKey('tenant.id', ondelete='CASCADE'), nullable=False)
    job_id = Column(Uuid, ForeignKey('job.id', ondelete='CASCADE'), nullable=False, index=True)
    skill_id = Column(Uuid, ForeignKey('skill.id', ondelete='CASCADE'), nullable=False)

    job = relationship("Job", back_populates="skills")
    skill = relationship("Skill")


class CandidateSkill(Base):
    __tablename__ = 'candidate_skill'
    __table_args__ = (
        UniqueConstraint('candidate_id', 'skill_id', name='uq_candidate_skill'),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Uuid, ForeignKey('tenant.id', ondelete='CASCADE'), nullable=False)
    candidate_id = Column(Uuid, ForeignKey('candidate.id', ondelete='CASCADE'), nullable=False, index=True)
    skill_id = Column(Uuid, ForeignKey('skill.id', ondelete='CASCADE'), nullable=False)

    candidate = relationship("Candidate", back_populates="skills")
    skill = relationship("Skill")
