#!/usr/bin/env python3
"""
Scoring Service - Evaluate one job application end to end.

Pipeline for score_and_persist_application:
1. Load application + job + tenant + candidate
2. Resolve the effective ScoringPolicy (default < tenant < job)
3. Compute structured skill coverage for the audit trail
4. Score: external semantic service, or the embedded heuristic engine
5. Clamp, tier, persist match fields and one ScoringEvent
6. Return a ScoredApplicationView

The external call is bounded by the client's timeout and never raises, so a
failing scorer still yields a persisted score-0 verdict with a readable reason.
"""

import logging
from typing import Any, Optional

from core.utils import clamp_score
from core.scorer.aggregation import tier_from_score
from core.scorer.coverage import analyze_skill_coverage
from core.scorer.heuristic import compute_application_score, heuristic_verdict
from core.scorer.models import (
    TIERS,
    ApplicationProfile,
    CandidateProfile,
    EngineVerdict,
    JobProfile,
    ScoredApplicationView,
)
from core.scorer.persistence import build_input_summary, persist_scoring_outcome
from core.scorer.policy import ScoringPolicy, resolve_policy_for_job
from core.scorer.semantic_client import SemanticScoringClient, build_scoring_payload

logger = logging.getLogger(__name__)

DEFAULT_REASON = "Scored by semantic CV/JD engine."
NO_SCORE_REASON = "No semantic score has been recorded for this candidate yet."

ENGINE_MODES = ("external", "heuristic")


class ScoringService:
    """
    Orchestrates one evaluation per call.

    Holds no state between calls beyond its collaborators; a fresh
    ScoringRepository (one Session) is expected per unit of work, and the
    owner of that unit of work commits. Heuristic mode needs no HTTP client.
    """

    def __init__(
        self,
        repo: Any,
        client: Optional[SemanticScoringClient] = None,
        engine_mode: str = "external",
        trigger: str = "application_created"
    ):
        if engine_mode not in ENGINE_MODES:
            raise ValueError(f"Unknown scoring engine mode: {engine_mode}")
        self.repo = repo
        if client is None and engine_mode == "external":
            client = SemanticScoringClient()
        self.client = client
        self.engine_mode = engine_mode
        self.trigger = trigger

    def _run_engine(
        self,
        tenant: Any,
        job: Any,
        candidate: Optional[Any],
        application: Any,
        policy: ScoringPolicy,
        trigger: str
    ) -> EngineVerdict:
        if self.engine_mode == "heuristic":
            result = compute_application_score(
                JobProfile.from_row(job),
                CandidateProfile.from_row(candidate),
                ApplicationProfile.from_row(application),
                policy,
            )
            return heuristic_verdict(result)

        payload = build_scoring_payload(tenant, job, candidate, application, policy, trigger)
        return self.client.score(payload)

    def score_and_persist_application(
        self,
        application_id: Any,
        trigger: Optional[str] = None
    ) -> Optional[ScoredApplicationView]:
        """
        Score one application and persist the verdict.

        Returns:
            ScoredApplicationView, or None when the application does not exist
        """
        trigger = trigger or self.trigger
        application = self.repo.applications.get_for_scoring(application_id)
        if application is None:
            logger.warning(f"Application not found for scoring: {application_id}")
            return None

        job = application.job
        tenant = job.tenant
        candidate = application.candidate

        policy = resolve_policy_for_job(job, tenant)

        job_skills = self.repo.skills.get_job_skills(tenant.id, job.id)
        candidate_skills = (
            self.repo.skills.get_candidate_skills(tenant.id, candidate.id)
            if candidate is not None else []
        )
        coverage = analyze_skill_coverage(job_skills, candidate_skills)

        verdict = self._run_engine(tenant, job, candidate, application, policy, trigger)

        score = clamp_score(verdict.score)
        tier = verdict.tier if verdict.tier in TIERS else tier_from_score(score, policy.tier_thresholds)
        reason = verdict.reason or DEFAULT_REASON

        input_summary = build_input_summary(job, application, candidate, coverage, trigger)
        persist_scoring_outcome(
            self.repo, application, job, tenant, verdict,
            score=score, tier=tier, reason=reason,
            policy=policy, input_summary=input_summary,
        )

        return ScoredApplicationView(
            score=score,
            tier=tier,
            risks=list(verdict.risks),
            red_flags=list(verdict.red_flags),
            interview_focus=list(verdict.interview_focus),
            reason=reason,
        )


def build_stored_view(
    application: Any,
    policy: ScoringPolicy,
    latest_event: Optional[Any] = None
) -> ScoredApplicationView:
    """
    Read-side view of an application's last verdict, without re-scoring.

    Tier is recomputed from the stored score against the current thresholds,
    so it follows threshold changes made after the evaluation.
    """
    raw = application.match_score
    score = clamp_score(raw) if raw is not None else 0
    reason = application.match_reason
    if not reason:
        reason = NO_SCORE_REASON if score == 0 else DEFAULT_REASON

    return ScoredApplicationView(
        score=score,
        tier=tier_from_score(score, policy.tier_thresholds),
        risks=list(latest_event.risks or []) if latest_event is not None else [],
        red_flags=list(latest_event.red_flags or []) if latest_event is not None else [],
        interview_focus=list(latest_event.interview_focus or []) if latest_event is not None else [],
        reason=reason,
    )
