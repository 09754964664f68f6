#!/usr/bin/env python3
"""
Aggregation & Tiering - Combine category scores into a final score, tier and explanation.
"""

import logging
from typing import Optional

from core.utils import clamp_score
from core.scorer.models import (
    CATEGORY_FIELDS,
    CategoryScores,
    ScoringFlags,
    SkillMatchResult,
)
from core.scorer.policy import CategoryWeights, TierThresholds

logger = logging.getLogger(__name__)

FOCUS_THRESHOLD = 70

# One fixed suggestion per category, appended in this order when that category scores < 70.
INTERVIEW_FOCUS_BY_CATEGORY = {
    "core_competencies": "Drill into core technical/functional competencies via case or technical deep-dive.",
    "experience_quality": "Validate seniority, scope of roles, and relevance of past mandates.",
    "education": "Confirm the formal or self-directed learning behind the claimed skills.",
    "achievements": "Push for quantified achievements (revenue, cost, efficiency, growth).",
    "cultural_fit": "Explore working style, team environment and organisational context fit.",
}


def aggregate_category_scores(scores: CategoryScores, weights: CategoryWeights) -> int:
    """Weighted average normalized by the weight sum, rounded and clamped to [0, 100].

    With all weights at zero the categories count equally.
    """
    total_weight = weights.total
    if total_weight <= 0:
        logger.warning("All category weights are zero; falling back to an unweighted mean")
        values = [getattr(scores, name) for name in CATEGORY_FIELDS]
        return clamp_score(sum(values) / len(values))

    weighted = sum(getattr(scores, name) * getattr(weights, name) for name in CATEGORY_FIELDS)
    return clamp_score(weighted / total_weight)


def tier_from_score(score: float, thresholds: Optional[TierThresholds]) -> str:
    """Derive the tier letter. Ties go to the higher tier."""
    if thresholds is None:
        thresholds = TierThresholds()
    if score >= thresholds.A:
        return "A"
    if score >= thresholds.B:
        return "B"
    if score >= thresholds.C:
        return "C"
    return "D"


def derive_interview_focus(scores: CategoryScores, flags: ScoringFlags) -> None:
    for name in CATEGORY_FIELDS:
        if getattr(scores, name) < FOCUS_THRESHOLD:
            flags.add_focus(INTERVIEW_FOCUS_BY_CATEGORY[name])


def build_summary(
    tier: str,
    score: int,
    scores: CategoryScores,
    skill_match: Optional[SkillMatchResult],
    flags: ScoringFlags
) -> str:
    """Human-readable explanation stored as the application's match reason."""
    parts = [
        f"Tier {tier} ({score}/100). "
        f"Core competencies {scores.core_competencies}/100, "
        f"Experience {scores.experience_quality}/100, "
        f"Education {scores.education}/100, "
        f"Achievements {scores.achievements}/100, "
        f"Cultural fit {scores.cultural_fit}/100."
    ]

    if skill_match is not None and skill_match.total > 0:
        if skill_match.matched:
            parts.append(f"Matched skills: {', '.join(skill_match.matched)}.")
        if skill_match.missing:
            parts.append(f"Missing skills: {', '.join(skill_match.missing)}.")

    if flags.risk_flags:
        parts.append(f"Risks: {' | '.join(flags.risk_flags)}.")
    if flags.red_flags:
        parts.append(f"Red flags: {' | '.join(flags.red_flags)}.")
    if flags.interview_focus:
        parts.append(f"Interview focus: {' | '.join(flags.interview_focus)}.")

    return " ".join(parts)
