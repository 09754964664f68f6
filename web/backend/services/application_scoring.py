#!/usr/bin/env python3
"""
Application scoring service - run and read scoring verdicts for the API.
"""

import logging
from typing import List

from core.app_context import AppContext
from core.scorer.models import ScoredApplicationView
from core.scorer.policy import resolve_policy_for_job
from core.scorer.service import build_stored_view
from database.repository import ScoringRepository
from ..exceptions import ApplicationNotFoundException
from ..models.responses import (
    ScoredApplicationResponse,
    ScoringEventResponse,
    ScoringEventsResponse,
)

logger = logging.getLogger(__name__)


def _view_response(application_id: str, view: ScoredApplicationView) -> ScoredApplicationResponse:
    return ScoredApplicationResponse(
        application_id=application_id,
        score=view.score,
        tier=view.tier,
        risks=view.risks,
        red_flags=view.red_flags,
        interview_focus=view.interview_focus,
        reason=view.reason,
    )


class ApplicationScoringService:
    """Service for scoring applications and reading their audit trail."""

    def __init__(self, repo: ScoringRepository, context: AppContext):
        self.repo = repo
        self.context = context

    def score_application(self, application_id: str) -> ScoredApplicationResponse:
        """
        Run a fresh evaluation and persist it.

        Raises:
            ApplicationNotFoundException: If the application does not exist.
        """
        with self.context.scoring_service(self.repo) as service:
            view = service.score_and_persist_application(application_id, trigger="manual_rescore")
        if view is None:
            raise ApplicationNotFoundException(f"Application not found: {application_id}")
        self.repo.commit()
        return _view_response(application_id, view)

    def get_score(self, application_id: str) -> ScoredApplicationResponse:
        """Stored verdict, tiered against the job's current thresholds."""
        application = self.repo.applications.get_for_scoring(application_id)
        if application is None:
            raise ApplicationNotFoundException(f"Application not found: {application_id}")

        policy = resolve_policy_for_job(application.job, application.job.tenant)
        latest = self.repo.events.latest_for_application(application.id)
        return _view_response(application_id, build_stored_view(application, policy, latest))

    def list_events(self, application_id: str) -> ScoringEventsResponse:
        application = self.repo.applications.get_by_id(application_id)
        if application is None:
            raise ApplicationNotFoundException(f"Application not found: {application_id}")

        events: List[ScoringEventResponse] = [
            ScoringEventResponse(
                id=str(event.id),
                engine=event.engine,
                engine_version=event.engine_version,
                outcome=event.outcome,
                mode=event.mode,
                score=event.score,
                tier=event.tier,
                reason=event.reason,
                risks=event.risks or [],
                red_flags=event.red_flags or [],
                interview_focus=event.interview_focus or [],
                config_snapshot=event.config_snapshot or {},
                input_summary=event.input_summary or {},
                created_at=event.created_at.isoformat() if event.created_at else None,
            )
            for event in self.repo.events.list_for_application(application.id)
        ]
        return ScoringEventsResponse(application_id=application_id, count=len(events), events=events)
