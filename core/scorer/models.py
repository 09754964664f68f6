#!/usr/bin/env python3
"""
Scoring Models - Data structures shared by the scorers, the client and the orchestrator.
"""

from enum import Enum
from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field

TIERS = ("A", "B", "C", "D")

# Ascending order, used for tier comparisons (D < C < B < A)
TIER_ORDER = {"D": 0, "C": 1, "B": 2, "A": 3}

CATEGORY_FIELDS = (
    "core_competencies",
    "experience_quality",
    "education",
    "achievements",
    "cultural_fit",
)


@dataclass(frozen=True)
class SkillToken:
    """A required skill after normalization."""
    token: str
    must_have: bool = False


@dataclass
class SkillMatchResult:
    """Overlap between a job's required skills and a candidate corpus."""
    total: int = 0
    matched: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
    must_have_matched: List[str] = field(default_factory=list)
    must_have_missing: List[str] = field(default_factory=list)

    @property
    def ratio(self) -> float:
        return len(self.matched) / self.total if self.total > 0 else 0.0


@dataclass
class CategoryScores:
    """The five category sub-scores, each 0-100."""
    core_competencies: int = 70
    experience_quality: int = 70
    education: int = 70
    achievements: int = 70
    cultural_fit: int = 70

    def as_dict(self) -> Dict[str, int]:
        return {
            'coreCompetencies': self.core_competencies,
            'experienceQuality': self.experience_quality,
            'education': self.education,
            'achievements': self.achievements,
            'culturalFit': self.cultural_fit,
        }


@dataclass
class ScoringFlags:
    """Side-channel lists accumulated while scoring. Order of insertion is preserved."""
    risk_flags: List[str] = field(default_factory=list)
    red_flags: List[str] = field(default_factory=list)
    interview_focus: List[str] = field(default_factory=list)

    def add_risk(self, message: str) -> None:
        self.risk_flags.append(message)

    def add_red_flag(self, message: str) -> None:
        self.red_flags.append(message)

    def add_focus(self, message: str) -> None:
        self.interview_focus.append(message)


@dataclass
class JobProfile:
    """Job fields the heuristic scorers read."""
    title: str = ""
    location: Optional[str] = None
    location_type: Optional[str] = None
    experience_level: Optional[str] = None
    seniority: Optional[str] = None
    required_skills: List[str] = field(default_factory=list)

    @classmethod
    def from_row(cls, job: Any) -> "JobProfile":
        return cls(
            title=getattr(job, 'title', None) or "",
            location=getattr(job, 'location', None),
            location_type=getattr(job, 'location_type', None) or getattr(job, 'work_mode', None),
            experience_level=getattr(job, 'experience_level', None),
            seniority=getattr(job, 'seniority', None),
            required_skills=[s for s in (getattr(job, 'required_skills', None) or []) if isinstance(s, str)],
        )


@dataclass
class CandidateProfile:
    location: Optional[str] = None
    current_title: Optional[str] = None
    current_company: Optional[str] = None

    @classmethod
    def from_row(cls, candidate: Any) -> Optional["CandidateProfile"]:
        if candidate is None:
            return None
        return cls(
            location=getattr(candidate, 'location', None),
            current_title=getattr(candidate, 'current_title', None),
            current_company=getattr(candidate, 'current_company', None),
        )


@dataclass
class ApplicationProfile:
    location: Optional[str] = None
    cover_letter: Optional[str] = None
    screening_answers: Any = None
    notice_period: Optional[str] = None

    @classmethod
    def from_row(cls, application: Any) -> "ApplicationProfile":
        return cls(
            location=getattr(application, 'location', None),
            cover_letter=getattr(application, 'cover_letter', None),
            screening_answers=getattr(application, 'screening_answers', None),
            notice_period=getattr(application, 'notice_period', None),
        )


@dataclass
class ScoringResult:
    """Output of the embedded heuristic engine."""
    score: int
    tier: str
    category_scores: CategoryScores
    risk_flags: List[str] = field(default_factory=list)
    red_flags: List[str] = field(default_factory=list)
    interview_focus: List[str] = field(default_factory=list)
    summary: str = ""
    skill_match: Optional[SkillMatchResult] = None


class ScoringOutcome(str, Enum):
    """Which branch of the external call produced a verdict."""
    UNCONFIGURED = "unconfigured"
    SUCCESS = "success"
    HTTP_ERROR = "http_error"
    TIMEOUT = "timeout"
    MALFORMED = "malformed"
    TRANSPORT_ERROR = "transport_error"


@dataclass
class EngineVerdict:
    """Normalized verdict from whichever engine scored the application."""
    score: float
    reason: Optional[str] = None
    tier: Optional[str] = None
    risks: List[str] = field(default_factory=list)
    red_flags: List[str] = field(default_factory=list)
    interview_focus: List[str] = field(default_factory=list)
    engine: str = "semantic-external"
    engine_version: Optional[str] = None
    outcome: ScoringOutcome = ScoringOutcome.SUCCESS
    category_scores: Optional[CategoryScores] = None

    @property
    def is_fallback(self) -> bool:
        return self.outcome != ScoringOutcome.SUCCESS


@dataclass
class ScoredApplicationView:
    """What callers of the orchestrator get back."""
    score: int
    tier: str
    risks: List[str] = field(default_factory=list)
    red_flags: List[str] = field(default_factory=list)
    interview_focus: List[str] = field(default_factory=list)
    reason: str = ""

    def as_dict(self) -> Dict[str, Any]:
        return {
            'score': self.score,
            'tier': self.tier,
            'risks': list(self.risks),
            'redFlags': list(self.red_flags),
            'interviewFocus': list(self.interview_focus),
            'reason': self.reason,
        }
