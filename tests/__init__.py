#!/usr/bin/env python3
"""
Test suite configuration and utilities.

All tests run without external services:

    # Run all tests
    python -m pytest tests/ -v

    # Skip the SQLite-backed tests
    python -m pytest tests/ -v -m "not db"

Database tests use an in-memory SQLite database (see tests/conftest.py);
the ORM models use portable column types so the same schema works on
PostgreSQL and SQLite.
"""

from typing import Any, Iterable, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from database.models import (
    Base,
    Candidate,
    CandidateSkill,
    Job,
    JobApplication,
    JobSkill,
    Skill,
    Tenant,
)


def create_test_engine():
    """One shared in-memory SQLite connection, with all tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return engine


def create_session_factory(engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


def make_tenant(db: Session, **fields: Any) -> Tenant:
    values = dict(name="Acme Talent", slug="acme", plan="free")
    values.update(fields)
    tenant = Tenant(**values)
    db.add(tenant)
    db.flush()
    return tenant


def make_job(db: Session, tenant: Tenant, **fields: Any) -> Job:
    values = dict(
        title="Senior Backend Engineer",
        description="Build and run our APIs.",
        required_skills=["!Python", "SQL"],
        experience_level="Senior",
        location="Lagos",
        location_type="hybrid",
    )
    values.update(fields)
    job = Job(tenant_id=tenant.id, **values)
    db.add(job)
    db.flush()
    return job


def make_candidate(db: Session, tenant: Tenant, **fields: Any) -> Candidate:
    values = dict(
        full_name="Ada Example",
        email="ada@example.com",
        location="Lagos",
        current_title="Senior Software Engineer",
        current_company="Fintech Co",
    )
    values.update(fields)
    candidate = Candidate(tenant_id=tenant.id, **values)
    db.add(candidate)
    db.flush()
    return candidate


def make_application(
    db: Session,
    job: Job,
    candidate: Optional[Candidate] = None,
    **fields: Any
) -> JobApplication:
    values = dict(
        full_name="Ada Example",
        email="ada@example.com",
        location="Lagos",
        cv_url="https://files.example.com/cv.pdf",
        cover_letter="I have shipped Python and SQL services for a distributed team.",
        source="careers_site",
    )
    values.update(fields)
    application = JobApplication(
        job_id=job.id,
        candidate_id=candidate.id if candidate is not None else None,
        **values
    )
    db.add(application)
    db.flush()
    return application


def make_skill(db: Session, name: str, category: Optional[str] = None,
               external_source: Optional[str] = None, tenant: Optional[Tenant] = None) -> Skill:
    skill = Skill(
        name=name,
        category=category,
        external_source=external_source,
        tenant_id=tenant.id if tenant is not None else None,
    )
    db.add(skill)
    db.flush()
    return skill


def link_job_skills(db: Session, job: Job, skills: Iterable[Skill]) -> None:
    for skill in skills:
        db.add(JobSkill(tenant_id=job.tenant_id, job_id=job.id, skill_id=skill.id))
    db.flush()


def link_candidate_skills(db: Session, candidate: Candidate, skills: Iterable[Skill]) -> None:
    for skill in skills:
        db.add(CandidateSkill(tenant_id=candidate.tenant_id, candidate_id=candidate.id, skill_id=skill.id))
    db.flush()
