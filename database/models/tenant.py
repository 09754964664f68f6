import uuid

from sqlalchemy import Column, Text, TIMESTAMP, Uuid, func

from .base import Base, JSONType


class Tenant(Base):
    """
    A hiring organisation (workspace).

    Scoring-relevant columns:
    - plan: free / pro / trial_pro / enterprise, selects policy defaults
    - hiring_mode: volume / balanced / executive
    - scoring_config: tenant override blob, loosely typed
    """
    __tablename__ = 'tenant'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    slug = Column(Text, nullable=False, unique=True)
    plan = Column(Text, nullable=False, default='free')
    hiring_mode = Column(Text, nullable=True)
    scoring_config = Column(JSONType, nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
