import uuid

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Uuid, func
from sqlalchemy.orm import relationship

from .base import Base, JSONType


class Job(Base):
    __tablename__ = 'job'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Uuid, ForeignKey('tenant.id', ondelete='CASCADE'), nullable=False, index=True)

    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    # Free-text skills; "!" prefix or the word "must" marks a must-have
    required_skills = Column(JSONType, nullable=True, default=list)

    experience_level = Column(Text, nullable=True)
    seniority = Column(Text, nullable=True)
    location = Column(Text, nullable=True)
    location_type = Column(Text, nullable=True)
    work_mode = Column(Text, nullable=True)

    hiring_mode = Column(Text, nullable=True)
    scoring_overrides = Column(JSONType, nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    tenant = relationship("Tenant")
    skills = relationship("JobSkill", back_populates="job", cascade="all, delete-orphan")
