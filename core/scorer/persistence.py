#!/usr/bin/env python3
"""
Persistence Operations - Write a scoring verdict back to the database.

Two writes per evaluation:
- overwrite the application's match_score / match_reason (last write wins)
- append one ScoringEvent with the policy snapshot and the input summary

Storage errors are not caught here; they propagate to the unit of work,
which rolls back.
"""

import logging
from typing import Any, Dict, Optional

from core.scorer.coverage import SkillCoverage
from core.scorer.models import EngineVerdict
from core.scorer.policy import ScoringPolicy

logger = logging.getLogger(__name__)


def build_input_summary(
    job: Any,
    application: Any,
    candidate: Optional[Any],
    coverage: SkillCoverage,
    trigger: str
) -> Dict[str, Any]:
    """Which inputs were available to the engine. Stored as the event's input_summary."""
    has_cv = bool(application.cv_url or (candidate.cv_url if candidate is not None else None))
    has_cover_letter = bool(application.cover_letter)
    required_skills = list(job.required_skills or [])

    return {
        'hasCv': has_cv,
        'hasCoverLetter': has_cover_letter,
        'jobRequiredSkills': required_skills,
        'source': application.source,
        'trigger': trigger,
        'features': {
            'usedCv': has_cv,
            'usedCoverLetter': has_cover_letter,
            'hasJobSkills': coverage.job_skill_count > 0,
            'hasCandidateSkills': coverage.candidate_skill_count > 0,
            'hasRequiredSkills': len(required_skills) > 0,
        },
        'skills': coverage.as_summary(),
    }


def persist_scoring_outcome(
    repo: Any,
    application: Any,
    job: Any,
    tenant: Any,
    verdict: EngineVerdict,
    score: int,
    tier: str,
    reason: str,
    policy: ScoringPolicy,
    input_summary: Dict[str, Any]
):
    """
    Update the application's match fields and append the audit event.

    Args:
        repo: ScoringRepository bound to the current unit of work
        verdict: engine verdict (risks, flags, engine tags, outcome)
        score: final clamped score
        tier: final tier
        reason: match reason written to the application
        policy: resolved policy, snapshotted into the event
        input_summary: see build_input_summary

    Returns:
        The new ScoringEvent row
    """
    repo.applications.update_match(application, score, reason)

    event = repo.events.add_event(
        tenant_id=tenant.id,
        job_id=job.id,
        application_id=application.id,
        engine=verdict.engine,
        engine_version=verdict.engine_version,
        outcome=verdict.outcome.value,
        mode=policy.hiring_mode,
        score=score,
        tier=tier,
        config_snapshot=policy.snapshot(),
        input_summary=input_summary,
        reason=verdict.reason,
        risks=list(verdict.risks),
        red_flags=list(verdict.red_flags),
        interview_focus=list(verdict.interview_focus),
    )

    logger.info(
        f"Scored application {application.id}: {score} (tier {tier}) "
        f"via {verdict.engine} [{verdict.outcome.value}]"
    )
    return event
