#!/usr/bin/env python3
"""
Reference Scoring Engine - The engine side of the external scoring contract.

A presence-based heuristic (engine "heuristic-v1"): it
looks at which inputs the application carries, not at their content. It is
served at POST /api/scoring/semantic so a deployment can point
SCORING_SERVICE_URL at itself until a real semantic model is available.
"""

import logging
from typing import Any, Dict, List, Mapping

from core.utils import clamp_score, is_finite_number
from core.scorer.aggregation import tier_from_score
from core.scorer.policy import TierThresholds, normalize_hiring_mode

logger = logging.getLogger(__name__)

ENGINE_NAME = "heuristic-v1"
ENGINE_VERSION = "v1"

BASELINE_SCORE = 50
CV_BONUS = 15
COVER_LETTER_BONUS = 10
LINKEDIN_BONUS = 5
LOCATION_BONUS = 10
SKILL_BONUS_PER_SKILL = 3
SKILL_BONUS_CAP = 15


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _text(value: Any) -> str:
    return str(value).strip().lower() if value is not None else ""


def thresholds_from_config(config: Mapping[str, Any]) -> TierThresholds:
    """Read thresholds from either snapshot spelling; missing or non-numeric values use 80/65/50."""
    fallback = TierThresholds()
    block = config.get("tierThresholds")
    names = {"A": "A", "B": "B", "C": "C"}
    if not isinstance(block, Mapping):
        block = config.get("thresholds")
        names = {"A": "tierA", "B": "tierB", "C": "tierC"}
    if not isinstance(block, Mapping):
        return fallback

    values = {}
    for tier, key in names.items():
        raw = block.get(key)
        values[tier] = raw if is_finite_number(raw) else getattr(fallback, tier)
    return TierThresholds(**values)


def _hiring_mode(tenant: Mapping, job: Mapping, config: Mapping) -> str:
    for raw in (config.get("hiringMode"), job.get("hiringMode"), tenant.get("hiringMode")):
        mode = normalize_hiring_mode(raw)
        if mode:
            return mode
    return "balanced"


def score_semantic_request(body: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Score one request payload and build the response body.

    Tolerates missing or null sections; only a non-object body is rejected
    (by the caller, before this is reached).
    """
    tenant = _mapping(body.get("tenant"))
    job = _mapping(body.get("job"))
    candidate = _mapping(body.get("candidate"))
    application = _mapping(body.get("application"))
    config = _mapping(body.get("config"))

    thresholds = thresholds_from_config(config)

    has_cv = bool(application.get("cvUrl"))
    has_cover_letter = bool(application.get("coverLetter"))
    linkedin = application.get("linkedinUrl")
    has_linkedin = isinstance(linkedin, str) and bool(linkedin.strip())

    job_location = _text(job.get("location"))
    candidate_location = _text(application.get("location") or candidate.get("location"))
    location_match = bool(job_location and candidate_location and job_location in candidate_location)

    required = job.get("requiredSkills")
    required_skills: List[Any] = required if isinstance(required, list) else []

    score = float(BASELINE_SCORE)
    if has_cv:
        score += CV_BONUS
    if has_cover_letter:
        score += COVER_LETTER_BONUS
    if has_linkedin:
        score += LINKEDIN_BONUS
    if location_match:
        score += LOCATION_BONUS
    if required_skills:
        score += min(SKILL_BONUS_CAP, len(required_skills) * SKILL_BONUS_PER_SKILL)

    mode = _hiring_mode(tenant, job, config)
    if mode == "executive":
        # pull toward the middle
        score = 40 + (score - 40) * 0.85
    elif mode == "volume":
        score = 45 + (score - 45) * 1.05

    final_score = clamp_score(score)
    tier = tier_from_score(final_score, thresholds)

    reasons = [
        "CV provided." if has_cv else "No CV provided.",
        "Cover letter provided." if has_cover_letter else "No cover letter provided.",
    ]
    if has_linkedin:
        reasons.append("LinkedIn profile provided.")
    if required_skills:
        reasons.append(f"Role has {len(required_skills)} listed required skill(s).")
    if job_location:
        if location_match:
            reasons.append("Candidate location appears to match role location.")
        else:
            reasons.append("Candidate location does not clearly match role location.")

    interview_focus = []
    if not has_cv:
        interview_focus.append("Request a CV or detailed career history.")
    if not has_cover_letter:
        interview_focus.append("Probe candidate motivation and context for applying.")
    if required_skills:
        interview_focus.append("Walk through concrete examples covering the required skills.")

    logger.debug(f"Reference engine scored {final_score} (tier {tier}, mode {mode})")

    return {
        'score': final_score,
        'tier': tier,
        'reason': " ".join(reasons),
        'risks': [],
        'redFlags': [],
        'interviewFocus': interview_focus,
        'engine': ENGINE_NAME,
        'engineVersion': ENGINE_VERSION,
    }
