#!/usr/bin/env python3
"""
Scoring endpoints - run an evaluation and read stored verdicts.
"""

import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from core.app_context import AppContext
from database.repository import ScoringRepository
from ..config import get_config
from ..dependencies import get_app_context, get_repository
from ..services.application_scoring import ApplicationScoringService
from ..models.responses import ScoredApplicationResponse, ScoringEventsResponse

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

router = APIRouter(prefix="/api/applications", tags=["scoring"])


def add_rate_limit_handlers(app):
    """Add rate limit exception handlers to the FastAPI app."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


async def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": f"Rate limit exceeded: {exc.detail}",
            "type": "RateLimitExceeded"
        }
    )


def _score_rate_limit() -> str:
    return get_config().web.score_rate_limit


@router.post("/{application_id}/score", response_model=ScoredApplicationResponse)
@limiter.limit(_score_rate_limit)
def score_application(
    request: Request,
    application_id: str,
    repo: ScoringRepository = Depends(get_repository),
    context: AppContext = Depends(get_app_context)
):
    """
    Score (or re-score) one application.

    Calls the configured engine, overwrites the application's match score and
    reason, and appends a scoring event. A failing external engine still
    produces a stored score of 0 with an explanatory reason.
    """
    return ApplicationScoringService(repo, context).score_application(application_id)


@router.get("/{application_id}/score", response_model=ScoredApplicationResponse)
def get_application_score(
    application_id: str,
    repo: ScoringRepository = Depends(get_repository),
    context: AppContext = Depends(get_app_context)
):
    """Stored verdict without re-scoring. Risks and flags come from the latest scoring event."""
    return ApplicationScoringService(repo, context).get_score(application_id)


@router.get("/{application_id}/scoring-events", response_model=ScoringEventsResponse)
def get_scoring_events(
    application_id: str,
    repo: ScoringRepository = Depends(get_repository),
    context: AppContext = Depends(get_app_context)
):
    """Audit history for one application, newest first."""
    return ApplicationScoringService(repo, context).list_events(application_id)
