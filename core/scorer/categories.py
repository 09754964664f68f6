#!/usr/bin/env python3
"""
Category Scorers - Five independent heuristics, each producing a 0-100 sub-score.

- Core competencies: required-skill overlap with must-have enforcement
- Experience quality: inferred seniority level vs the job's target level
- Education: soft credential signal (never institution pedigree)
- Achievements: quantified impact and leadership language
- Cultural fit: location and remote-work affinity

Bias guard: none of these read candidate name, email, gender, photo, age or
institution names. Every scorer is total over its inputs and clamps its output.
"""

import logging
import re
from typing import List, Optional, Pattern, Tuple

from core.utils import clamp_score
from core.scorer.models import (
    ApplicationProfile,
    CandidateProfile,
    JobProfile,
    ScoringFlags,
    SkillMatchResult,
)
from core.scorer.skills import compute_skill_match

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 70
DEFAULT_LEVEL = 2

# Ordered: the first rule that matches decides the level.
SENIORITY_LADDER: List[Tuple[int, Pattern]] = [
    (0, re.compile(r"\b(intern|internship|trainee)\b")),
    (1, re.compile(r"\b(junior|jr)\b")),
    (2, re.compile(r"\b(associate|mid|mid[-\s]?level)\b")),
    (3, re.compile(r"\b(senior|sr|lead|manager)\b")),
    (4, re.compile(r"\b(head|director|vp|vice president|chief)\b|^(ceo|cto|cfo|coo)\b")),
]

DEGREE_PATTERN = re.compile(r"\b(bsc|ba|msc|ma|mba|phd|b\.sc|m\.sc|b\.eng|llb)\b")
SELF_TAUGHT_PATTERN = re.compile(r"\bself[-\s]?taught\b")

PERCENT_PATTERN = re.compile(r"\d+(\.\d+)?\s*%")
MONEY_PATTERN = re.compile(r"(\$|£|€|₦|\bngn|\busd|\beur|\bgbp)\s*\d+", re.IGNORECASE)
IMPACT_PATTERN = re.compile(r"\b(increased|grew|reduced|improved|saved|boosted|cut)\b")
LEADERSHIP_PATTERN = re.compile(r"\b(led|managed|headed|mentored|supervised)\b")

REMOTE_AFFINITY_PATTERN = re.compile(r"\bremote\b|\bdistributed\b|\bglobal team\b")


def infer_level_from_text(text: Optional[str]) -> Optional[int]:
    """Map free text to 0 (intern) .. 4 (exec). None when there is no text at all."""
    if not text or not text.strip():
        return None
    t = text.strip().lower()
    for level, pattern in SENIORITY_LADDER:
        if pattern.search(t):
            return level
    return DEFAULT_LEVEL


def _first_level(*texts: Optional[str]) -> Optional[int]:
    for text in texts:
        level = infer_level_from_text(text)
        if level is not None:
            return level
    return None


def score_core_competencies(
    job: JobProfile,
    corpus: str,
    flags: ScoringFlags,
    strict_must_have: bool
) -> Tuple[int, SkillMatchResult]:
    """Skill-overlap score in [30, 100] before must-have enforcement."""
    skill_match = compute_skill_match(job.required_skills, corpus)

    if skill_match.total == 0:
        flags.add_risk(
            "Job has no explicit 'required skills' configured - ranking may be less precise."
        )
        return NEUTRAL_SCORE, skill_match

    ratio = skill_match.ratio
    score = 30 + ratio * 70

    if skill_match.must_have_missing:
        missing = ", ".join(skill_match.must_have_missing)
        if strict_must_have:
            score = min(score, 40)
            flags.add_red_flag(f"Missing must-have skills: {missing}")
        else:
            score = max(20, score - 20)
            flags.add_risk(f"Missing some must-have skills: {missing}")

    if ratio == 0:
        flags.add_red_flag("No overlap with required skills.")

    return clamp_score(score), skill_match


def score_experience_quality(
    job: JobProfile,
    candidate: Optional[CandidateProfile],
    flags: ScoringFlags
) -> int:
    job_level = _first_level(job.experience_level, job.seniority, job.title)
    candidate_level = None
    if candidate is not None:
        candidate_level = _first_level(candidate.current_title, candidate.current_company)

    if job_level is None or candidate_level is None:
        flags.add_risk(
            "Experience level could not be cleanly inferred from the job or candidate title."
        )
        return NEUTRAL_SCORE

    diff = candidate_level - job_level
    if diff >= 1:
        score = 80 + min(diff, 2) * 5
    elif diff == 0:
        score = 75
    elif diff == -1:
        score = 65
        flags.add_risk(
            "Candidate is slightly below the target seniority - validate growth potential in interview."
        )
    else:
        score = 50
        flags.add_risk(
            "Candidate appears materially below the target seniority - ensure expectations are aligned."
        )

    return clamp_score(score)


def score_education(corpus: str, flags: ScoringFlags) -> int:
    score = NEUTRAL_SCORE

    if DEGREE_PATTERN.search(corpus):
        score = 75

    # Self-taught is not penalised, only flagged for validation.
    if SELF_TAUGHT_PATTERN.search(corpus):
        flags.add_risk(
            "Candidate is self-taught - validate depth of knowledge via technical case/interview."
        )
        score = 72

    return clamp_score(score)


def score_achievements(corpus: str, flags: ScoringFlags) -> int:
    has_percent = PERCENT_PATTERN.search(corpus) is not None
    has_money = MONEY_PATTERN.search(corpus) is not None
    has_impact = IMPACT_PATTERN.search(corpus) is not None
    has_leadership = LEADERSHIP_PATTERN.search(corpus) is not None

    if (has_percent or has_money) and has_impact:
        score = 85
    elif has_impact or has_leadership:
        score = 70
    else:
        score = 55

    if score < 70:
        flags.add_risk(
            "Limited explicit, quantified achievements - probe for concrete impact and metrics."
        )

    return clamp_score(score)


def score_cultural_fit(
    job: JobProfile,
    candidate: Optional[CandidateProfile],
    application: ApplicationProfile,
    corpus: str,
    flags: ScoringFlags
) -> int:
    """Exact location equality and remote-work language only."""
    score = NEUTRAL_SCORE

    job_location = (job.location or "").strip().lower()
    candidate_location = (
        application.location or (candidate.location if candidate else None) or ""
    ).strip().lower()

    if job_location and candidate_location and job_location == candidate_location:
        score += 5

    location_type = (job.location_type or "").lower()
    if "remote" in location_type or "hybrid" in location_type:
        if REMOTE_AFFINITY_PATTERN.search(corpus):
            score += 5

    if "3 month" in (application.notice_period or "").lower():
        flags.add_risk(
            "Long notice period - align on start date and assess urgency of the mandate."
        )

    return clamp_score(score)
