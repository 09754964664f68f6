#!/usr/bin/env python3
"""
Skill Coverage - Overlap between a job's tagged skills and a candidate's tagged skills.

Works on the structured skill links (JobSkill / CandidateSkill rows), not on
free text. The result only feeds the audit input summary; it never changes
the score.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)

UNCATEGORISED = "uncategorised"
LOCAL_SOURCE = "local"


@dataclass
class CoverageStats:
    job_skills: int = 0
    candidate_skills: int = 0
    matched_skills: int = 0

    def as_dict(self) -> Dict[str, int]:
        return {
            'jobSkills': self.job_skills,
            'candidateSkills': self.candidate_skills,
            'matchedSkills': self.matched_skills,
        }


@dataclass
class SkillCoverage:
    job_skill_count: int = 0
    candidate_skill_count: int = 0
    matched_skill_ids: List[str] = field(default_factory=list)
    matched_skill_names: List[str] = field(default_factory=list)
    categories: Dict[str, CoverageStats] = field(default_factory=dict)
    external_sources: Dict[str, CoverageStats] = field(default_factory=dict)

    @property
    def matched_skill_count(self) -> int:
        return len(self.matched_skill_ids)

    def as_summary(self) -> Dict[str, Any]:
        """The 'skills' block of the audit input summary."""
        return {
            'jobSkillCount': self.job_skill_count,
            'candidateSkillCount': self.candidate_skill_count,
            'matchedSkillCount': self.matched_skill_count,
            'matchedSkillNames': list(self.matched_skill_names),
            'categories': {k: v.as_dict() for k, v in self.categories.items()},
            'externalSources': {k: v.as_dict() for k, v in self.external_sources.items()},
        }


def category_key(category: Optional[str]) -> str:
    return (category or "").strip() or UNCATEGORISED


def external_source_key(source: Optional[str]) -> str:
    return (source or "").strip().lower() or LOCAL_SOURCE


def _skill_id(link: Any) -> str:
    return str(link.skill_id)


def analyze_skill_coverage(job_skills: Iterable[Any], candidate_skills: Iterable[Any]) -> SkillCoverage:
    """
    Compute skill coverage from skill links.

    Args:
        job_skills: rows with .skill_id and .skill (name, category, external_source)
        candidate_skills: same shape, for the candidate

    Returns:
        SkillCoverage with matched ids in job order (deduplicated) and
        per-category / per-source counts
    """
    job_skills = list(job_skills or [])
    candidate_skills = list(candidate_skills or [])

    skills_by_id: Dict[str, Any] = {}
    for link in candidate_skills + job_skills:
        # job-side entity wins when both sides carry the same skill
        skills_by_id[_skill_id(link)] = link.skill

    candidate_ids = {_skill_id(link) for link in candidate_skills}
    matched_ids: List[str] = []
    for link in job_skills:
        skill_id = _skill_id(link)
        if skill_id in candidate_ids and skill_id not in matched_ids:
            matched_ids.append(skill_id)

    coverage = SkillCoverage(
        job_skill_count=len(job_skills),
        candidate_skill_count=len(candidate_skills),
        matched_skill_ids=matched_ids,
    )

    def bump(skill: Any, attr: str) -> None:
        cat = category_key(getattr(skill, 'category', None))
        src = external_source_key(getattr(skill, 'external_source', None))
        for stats, key in ((coverage.categories, cat), (coverage.external_sources, src)):
            entry = stats.setdefault(key, CoverageStats())
            setattr(entry, attr, getattr(entry, attr) + 1)

    for link in job_skills:
        bump(link.skill, 'job_skills')
    for link in candidate_skills:
        bump(link.skill, 'candidate_skills')
    for skill_id in matched_ids:
        skill = skills_by_id.get(skill_id)
        bump(skill, 'matched_skills')
        name = getattr(skill, 'name', None)
        if name:
            coverage.matched_skill_names.append(name)

    logger.debug(
        f"Skill coverage: {coverage.matched_skill_count}/{coverage.job_skill_count} job skills matched"
    )
    return coverage
