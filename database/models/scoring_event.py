import uuid

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Integer, Uuid, Index, func

from .base import Base, JSONType, utcnow


class ScoringEvent(Base):
    """
    Append-only audit record of one scoring evaluation.

    config_snapshot is the resolved policy as it was at scoring time, so a
    later change to tenant or job settings never rewrites history.
    """
    __tablename__ = 'scoring_event'
    __table_args__ = (
        Index('ix_scoring_event_application_created', 'application_id', 'created_at'),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Uuid, ForeignKey('tenant.id', ondelete='CASCADE'), nullable=False, index=True)
    job_id = Column(Uuid, ForeignKey('job.id', ondelete='CASCADE'), nullable=False)
    application_id = Column(Uuid, ForeignKey('job_application.id', ondelete='CASCADE'), nullable=False)

    engine = Column(Text, nullable=False)
    engine_version = Column(Text, nullable=True)
    outcome = Column(Text, nullable=False, default='success')
    mode = Column(Text, nullable=False)

    score = Column(Integer, nullable=False)
    tier = Column(Text, nullable=False)

    config_snapshot = Column(JSONType, nullable=False)
    input_summary = Column(JSONType, nullable=False)

    reason = Column(Text, nullable=True)
    risks = Column(JSONType, nullable=False, default=list)
    red_flags = Column(JSONType, nullable=False, default=list)
    interview_focus = Column(JSONType, nullable=False, default=list)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, server_default=func.now())
