import uuid

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Integer, Uuid, func
from sqlalchemy.orm import relationship

from .base import Base, JSONType


class JobApplication(Base):
    """
    A candidate's application to a job.

    match_score / match_reason hold the latest scoring verdict and are
    overwritten on every evaluation (last write wins). The history lives in
    scoring_event.
    """
    __tablename__ = 'job_application'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    job_id = Column(Uuid, ForeignKey('job.id', ondelete='CASCADE'), nullable=False, index=True)
    candidate_id = Column(Uuid, ForeignKey('candidate.id', ondelete='SET NULL'), nullable=True)

    full_name = Column(Text, nullable=True)
    email = Column(Text, nullable=True)
    location = Column(Text, nullable=True)
    cv_url = Column(Text, nullable=True)
    cover_letter = Column(Text, nullable=True)
    github_url = Column(Text, nullable=True)
    linkedin_url = Column(Text, nullable=True)
    how_heard = Column(Text, nullable=True)
    source = Column(Text, nullable=True)
    screening_answers = Column(JSONType, nullable=True)
    notice_period = Column(Text, nullable=True)

    match_score = Column(Integer, nullable=True)
    match_reason = Column(Text, nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    job = relationship("Job")
    candidate = relationship("Candidate")
