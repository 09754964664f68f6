"""Business logic services."""

from .application_scoring import ApplicationScoringService
from .scoring_settings import ScoringSettingsService
