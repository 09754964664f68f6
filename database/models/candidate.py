import uuid

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Uuid, func
from sqlalchemy.orm import relationship

from .base import Base


class Candidate(Base):
    __tablename__ = 'candidate'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Uuid, ForeignKey('tenant.id', ondelete='CASCADE'), nullable=False, index=True)

    full_name = Column(Text, nullable=True)
    email = Column(Text, nullable=True)
    location = Column(Text, nullable=True)
    current_title = Column(Text, nullable=True)
    current_company = Column(Text, nullable=True)
    cv_url = Column(Text, nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    skills = relationship("CandidateSkill", back_populates="candidate", cascade="all, delete-orphan")
