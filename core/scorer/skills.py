#!/usr/bin/env python3
"""
Skill Normalization - Turn raw required-skill strings into comparable tokens.

Conventions for marking a skill as must-have:
- Leading "!"  e.g. "!Python"
- The standalone word "must", e.g. "Python (must have)", "[must] SQL", "Must: Go"
"""

import json
import logging
import re
from typing import Any, Dict, Iterable, List, Optional, Tuple

from core.scorer.models import SkillToken, SkillMatchResult

logger = logging.getLogger(__name__)

# Canonical token -> aliases that also count as a hit.
SKILL_SYNONYMS: Dict[str, Tuple[str, ...]] = {
    "javascript": ("js", "nodejs", "node.js"),
    "typescript": ("ts",),
    "project management": ("pm", "pmp"),
    "product management": ("pm", "product manager"),
    "human resources": ("hr", "people ops"),
}

_MUST_WORD = re.compile(r"\bmust\b", re.IGNORECASE)
_MUST_MARKER = re.compile(
    r"[\[(]?\s*\bmust(?:[\s-]+have)?\b\s*[\])]?\s*:?",
    re.IGNORECASE,
)


def normalize_skill_token(raw: str) -> SkillToken:
    """Normalize one required-skill string.

    Never raises; an empty token is returned for blank input and callers skip it.
    """
    s = (raw or "").strip()
    must_have = False

    if s.startswith("!"):
        must_have = True
        s = s[1:].strip()

    if _MUST_WORD.search(s):
        must_have = True
        s = _MUST_MARKER.sub(" ", s)

    token = re.sub(r"\s+", " ", s).strip(" -:,").lower()
    return SkillToken(token=token, must_have=must_have)


def normalize_skills(raw_skills: Iterable[Any]) -> List[SkillToken]:
    """Normalize a list of raw skills, dropping non-strings and empty tokens."""
    tokens = []
    for raw in raw_skills or []:
        if not isinstance(raw, str):
            continue
        skill = normalize_skill_token(raw)
        if skill.token:
            tokens.append(skill)
    return tokens


def _contains_alias(text: str, alias: str) -> bool:
    # Short aliases ("js", "pm") only count as whole words.
    return re.search(r"(?<![a-z0-9])" + re.escape(alias) + r"(?![a-z0-9])", text) is not None


def text_contains_skill(text: str, skill_token: str) -> bool:
    """Check whether the lower-cased corpus mentions the skill or one of its aliases."""
    if not text or not skill_token:
        return False
    t = text.lower()

    if skill_token in t:
        return True

    aliases = SKILL_SYNONYMS.get(skill_token, ())
    return any(_contains_alias(t, alias) for alias in aliases)


def compute_skill_match(required_skills: Iterable[Any], candidate_text: str) -> SkillMatchResult:
    """Match each required skill against the candidate corpus."""
    result = SkillMatchResult()

    for skill in normalize_skills(required_skills):
        result.total += 1
        if text_contains_skill(candidate_text, skill.token):
            result.matched.append(skill.token)
            if skill.must_have:
                result.must_have_matched.append(skill.token)
        else:
            result.missing.append(skill.token)
            if skill.must_have:
                result.must_have_missing.append(skill.token)

    return result


def _answers_text(screening_answers: Any) -> str:
    if not screening_answers:
        return ""
    if isinstance(screening_answers, str):
        return screening_answers
    try:
        return json.dumps(screening_answers, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        logger.warning("Screening answers could not be serialized; ignoring them for scoring")
        return ""


def build_candidate_corpus(
    cover_letter: Optional[str],
    screening_answers: Any,
    current_title: Optional[str] = None,
    current_company: Optional[str] = None
) -> str:
    """Concatenate the free-text signals the heuristic scorers read, lower-cased."""
    parts = [cover_letter, _answers_text(screening_answers), current_title, current_company]
    return " ".join(p for p in parts if p).lower()
