#!/usr/bin/env python3
"""
Embedded Heuristic Engine - Score an application locally with the five category scorers.

Used when the deployment runs without the external scoring service
(scoring.engine_mode = "heuristic").
"""

import logging
from typing import Optional

from core.scorer import categories
from core.scorer.aggregation import (
    aggregate_category_scores,
    build_summary,
    derive_interview_focus,
    tier_from_score,
)
from core.scorer.models import (
    ApplicationProfile,
    CandidateProfile,
    CategoryScores,
    EngineVerdict,
    JobProfile,
    ScoringFlags,
    ScoringOutcome,
    ScoringResult,
)
from core.scorer.policy import ScoringPolicy
from core.scorer.skills import build_candidate_corpus

logger = logging.getLogger(__name__)

ENGINE_NAME = "heuristic-local"
ENGINE_VERSION = "v1"


def compute_application_score(
    job: JobProfile,
    candidate: Optional[CandidateProfile],
    application: ApplicationProfile,
    policy: ScoringPolicy
) -> ScoringResult:
    """Run all category scorers, aggregate, tier and explain.

    Deterministic: identical inputs give identical scores and flag lists (order included).
    """
    flags = ScoringFlags()
    corpus = build_candidate_corpus(
        application.cover_letter,
        application.screening_answers,
        candidate.current_title if candidate else None,
        candidate.current_company if candidate else None,
    )

    core_score, skill_match = categories.score_core_competencies(
        job, corpus, flags, policy.strict_must_have_skills
    )
    scores = CategoryScores(
        core_competencies=core_score,
        experience_quality=categories.score_experience_quality(job, candidate, flags),
        education=categories.score_education(corpus, flags),
        achievements=categories.score_achievements(corpus, flags),
        cultural_fit=categories.score_cultural_fit(job, candidate, application, corpus, flags),
    )

    score = aggregate_category_scores(scores, policy.weights)
    tier = tier_from_score(score, policy.tier_thresholds)
    derive_interview_focus(scores, flags)

    summary = build_summary(tier, score, scores, skill_match, flags)
    logger.debug(f"Heuristic score {score} (tier {tier}) categories={scores.as_dict()}")

    return ScoringResult(
        score=score,
        tier=tier,
        category_scores=scores,
        risk_flags=flags.risk_flags,
        red_flags=flags.red_flags,
        interview_focus=flags.interview_focus,
        summary=summary,
        skill_match=skill_match,
    )


def heuristic_verdict(result: ScoringResult) -> EngineVerdict:
    """Express a local result in the same shape as an external engine's verdict."""
    return EngineVerdict(
        score=result.score,
        reason=result.summary,
        tier=result.tier,
        risks=list(result.risk_flags),
        red_flags=list(result.red_flags),
        interview_focus=list(result.interview_focus),
        engine=ENGINE_NAME,
        engine_version=ENGINE_VERSION,
        outcome=ScoringOutcome.SUCCESS,
        category_scores=result.category_scores,
    )
