"""
End-to-end scoring against an in-memory database.

Exercises ScoringService with real repositories: loading, policy resolution,
skill coverage, persistence of the match fields and the audit trail.
"""

import pytest

from core.scorer import ScoringService, SemanticScoringClient
from core.scorer.aggregation import INTERVIEW_FOCUS_BY_CATEGORY
from database.models import JobApplication, ScoringEvent
from database.uow import scoring_uow
from tests import (
    link_candidate_skills,
    link_job_skills,
    make_application,
    make_candidate,
    make_job,
    make_skill,
    make_tenant,
)

pytestmark = pytest.mark.db


@pytest.fixture
def seeded(session_factory):
    session = session_factory()
    tenant = make_tenant(session)
    job = make_job(session, tenant)
    candidate = make_candidate(session, tenant)
    python = make_skill(session, "Python", category="Languages", external_source="ESCO")
    sql = make_skill(session, "SQL", category="Data")
    link_job_skills(session, job, [python, sql])
    link_candidate_skills(session, candidate, [python])
    application = make_application(session, job, candidate)
    session.commit()
    application_id = application.id
    session.close()
    return application_id


def _events(session_factory, application_id):
    session = session_factory()
    try:
        return (
            session.query(ScoringEvent)
            .filter(ScoringEvent.application_id == application_id)
            .all()
        )
    finally:
        session.close()


def test_heuristic_scoring_persists_verdict(session_factory, seeded):
    with scoring_uow(session_factory) as repo:
        service = ScoringService(repo, engine_mode="heuristic")
        view = service.score_and_persist_application(seeded)

    assert view.score == 80
    assert view.tier == "A"
    assert INTERVIEW_FOCUS_BY_CATEGORY["achievements"] in view.interview_focus

    session = session_factory()
    application = session.get(JobApplication, seeded)
    assert application.match_score == 80
    assert application.match_reason.startswith("Tier A (80/100).")
    session.close()

    events = _events(session_factory, seeded)
    assert len(events) == 1
    event = events[0]
    assert event.engine == "heuristic-local"
    assert event.outcome == "success"
    assert event.mode == "balanced"
    assert event.config_snapshot["tierThresholds"] == {"A": 80.0, "B": 65.0, "C": 50.0}
    assert event.input_summary["hasCv"] is True
    assert event.input_summary["skills"]["matchedSkillCount"] == 1
    assert event.input_summary["skills"]["matchedSkillNames"] == ["Python"]
    assert event.input_summary["skills"]["externalSources"]["esco"]["matchedSkills"] == 1


def test_unconfigured_external_engine_scores_zero(session_factory, seeded):
    with scoring_uow(session_factory) as repo:
        service = ScoringService(repo, client=SemanticScoringClient(url=None, api_key=None))
        view = service.score_and_persist_application(str(seeded))

    assert view.score == 0
    assert view.tier == "D"
    assert view.reason == "Scoring service not configured."

    events = _events(session_factory, seeded)
    assert len(events) == 1
    assert events[0].outcome == "unconfigured"
    assert events[0].score == 0


def test_each_evaluation_appends_an_event(session_factory, seeded):
    for trigger in ("application_created", "manual_rescore"):
        with scoring_uow(session_factory) as repo:
            ScoringService(repo, engine_mode="heuristic").score_and_persist_application(
                seeded, trigger=trigger
            )

    events = _events(session_factory, seeded)
    assert len(events) == 2
    assert {e.input_summary["trigger"] for e in events} == {"application_created", "manual_rescore"}

    with scoring_uow(session_factory) as repo:
        latest = repo.events.latest_for_application(seeded)
        assert latest.input_summary["trigger"] == "manual_rescore"


def test_unknown_application(session_factory):
    with scoring_uow(session_factory) as repo:
        service = ScoringService(repo, engine_mode="heuristic")
        assert service.score_and_persist_application("not-a-uuid") is None
