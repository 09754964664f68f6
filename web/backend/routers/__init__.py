"""API route handlers."""

from .scoring import router as scoring_router
from .settings import router as settings_router
from .semantic import router as semantic_router
