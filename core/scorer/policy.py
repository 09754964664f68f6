#!/usr/bin/env python3
"""
Scoring Policy - Resolve the effective policy for one scoring request.

Three layers, resolved field by field:

    built-in default (plan defaults + hiring-mode preset)
        < tenant override (tenant.scoring_config)
        < job override   (job.scoring_overrides)

Stored overrides are loosely-typed JSON written by admin forms over time, so
nothing in them is trusted: non-mapping blobs count as empty, non-numeric or
non-finite values fall through to the next lower layer, and accepted numbers
are clamped into range. Resolution never raises.
"""

import logging
from typing import Any, Dict, Iterable, List, Literal, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from core.utils import clamp_number, is_finite_number

logger = logging.getLogger(__name__)

POLICY_VERSION = 1

HiringMode = Literal["volume", "balanced", "executive"]
PlanTier = Literal["free", "pro", "enterprise"]

WEIGHT_RANGE = (0.0, 100.0)
THRESHOLD_RANGE = (1.0, 100.0)


class CategoryWeights(BaseModel):
    """Relative category weights. They need not sum to 100; aggregation divides by the sum."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    core_competencies: float = 30.0
    experience_quality: float = 25.0
    education: float = 15.0
    achievements: float = 15.0
    cultural_fit: float = 15.0

    @property
    def total(self) -> float:
        return (self.core_competencies + self.experience_quality + self.education
                + self.achievements + self.cultural_fit)


class TierThresholds(BaseModel):
    """Cut points on the 0-100 scale. Below C is tier D."""
    model_config = ConfigDict(frozen=True)

    A: float = 80.0
    B: float = 65.0
    C: float = 50.0


class ScoringPolicy(BaseModel):
    """Normalized scoring configuration, snapshotted into every ScoringEvent."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    version: int = POLICY_VERSION
    plan: PlanTier = "free"
    hiring_mode: HiringMode = "balanced"
    weights: CategoryWeights = Field(default_factory=CategoryWeights)
    tier_thresholds: TierThresholds = Field(default_factory=TierThresholds)
    strict_must_have_skills: bool = False
    enable_nlp_boost: bool = False

    def snapshot(self) -> Dict[str, Any]:
        """JSON-ready camelCase form, as sent to the external scorer and stored in the audit log."""
        return self.model_dump(mode="json", by_alias=True)


# Weight presets per hiring mode. Thresholds are shared.
HIRING_MODE_WEIGHTS: Dict[str, CategoryWeights] = {
    "volume": CategoryWeights(
        core_competencies=40, experience_quality=30, education=10, achievements=10, cultural_fit=10
    ),
    "balanced": CategoryWeights(),
    "executive": CategoryWeights(
        core_competencies=30, experience_quality=25, education=15, achievements=20, cultural_fit=10
    ),
}

# (strict_must_have_skills, enable_nlp_boost) per plan
PLAN_DEFAULTS: Dict[str, Tuple[bool, bool]] = {
    "free": (False, False),
    "pro": (True, True),
    "enterprise": (True, True),
}

_MODE_ALIASES = {
    "volume": "volume",
    "balanced": "balanced",
    "hybrid": "balanced",
    "executive": "executive",
    "exec": "executive",
}

_PLAN_ALIASES = {
    "free": "free",
    "pro": "pro",
    "trial_pro": "pro",
    "enterprise": "enterprise",
}

# Stored blobs have used both spellings over time.
_WEIGHT_BLOCK_KEYS = ("weights", "categoryWeights")
_WEIGHT_FIELDS = {
    "core_competencies": "coreCompetencies",
    "experience_quality": "experienceQuality",
    "education": "education",
    "achievements": "achievements",
    "cultural_fit": "culturalFit",
}
_THRESHOLD_BLOCKS = (
    ("tierThresholds", {"A": "A", "B": "B", "C": "C"}),
    ("thresholds", {"A": "tierA", "B": "tierB", "C": "tierC"}),
)


def normalize_hiring_mode(raw: Any) -> Optional[str]:
    """Return the canonical hiring mode, or None if raw is not a recognised mode."""
    if not isinstance(raw, str):
        return None
    return _MODE_ALIASES.get(raw.strip().lower())


def normalize_plan(raw: Any) -> str:
    if not isinstance(raw, str):
        return "free"
    return _PLAN_ALIASES.get(raw.strip().lower(), "free")


def default_policy(plan: Any = None, hiring_mode: Any = None) -> ScoringPolicy:
    """Built-in default layer for a plan and hiring mode."""
    plan_tier = normalize_plan(plan)
    mode = normalize_hiring_mode(hiring_mode) or "balanced"
    strict, nlp = PLAN_DEFAULTS[plan_tier]
    return ScoringPolicy(
        plan=plan_tier,
        hiring_mode=mode,
        weights=HIRING_MODE_WEIGHTS[mode],
        tier_thresholds=TierThresholds(),
        strict_must_have_skills=strict,
        enable_nlp_boost=nlp,
    )


def coerce_config_blob(value: Any, label: str = "config") -> Dict[str, Any]:
    """Stored JSON is only usable when it is a mapping."""
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        logger.warning(f"Ignoring malformed {label}: expected an object, got {type(value).__name__}")
        return {}
    return dict(value)


def _sub_block(blob: Mapping[str, Any], keys: Iterable[str]) -> Dict[str, Any]:
    for key in keys:
        block = blob.get(key)
        if isinstance(block, Mapping):
            return dict(block)
    return {}


def _first_number(candidates: List[Any], fallback: float, bounds: Tuple[float, float]) -> float:
    for value in candidates:
        if is_finite_number(value):
            return clamp_number(value, fallback, *bounds)
    return clamp_number(None, fallback, *bounds)


def _first_bool(candidates: List[Any], fallback: bool) -> bool:
    for value in candidates:
        if isinstance(value, bool):
            return value
    return fallback


def _threshold_candidates(layers: List[Mapping[str, Any]], tier: str) -> List[Any]:
    values = []
    for blob in layers:
        for block_key, names in _THRESHOLD_BLOCKS:
            block = blob.get(block_key)
            if isinstance(block, Mapping) and names[tier] in block:
                values.append(block[names[tier]])
    return values


def merge_scoring_config(
    tenant_config: Any = None,
    job_overrides: Any = None,
    tenant_hiring_mode: Optional[str] = None,
    job_hiring_mode: Optional[str] = None,
    plan: Optional[str] = None
) -> ScoringPolicy:
    """Merge plan default < tenant override < job override into one policy.

    Hiring mode precedence: job (column, then override blob) > tenant
    (column, then config blob) > "balanced". The winning mode selects the
    default weight preset before overrides are applied.

    Args:
        tenant_config: tenant.scoring_config JSON (any shape)
        job_overrides: job.scoring_overrides JSON (any shape)
        tenant_hiring_mode: tenant.hiring_mode column
        job_hiring_mode: job.hiring_mode column
        plan: tenant.plan column

    Returns:
        Fully populated ScoringPolicy
    """
    tenant_blob = coerce_config_blob(tenant_config, "tenant scoring config")
    job_blob = coerce_config_blob(job_overrides, "job scoring overrides")

    mode = None
    for raw in (job_hiring_mode, job_blob.get("hiringMode"),
                tenant_hiring_mode, tenant_blob.get("hiringMode")):
        mode = normalize_hiring_mode(raw)
        if mode:
            break

    base = default_policy(plan, mode)
    layers = [job_blob, tenant_blob]  # highest precedence first

    weight_blocks = [_sub_block(blob, _WEIGHT_BLOCK_KEYS) for blob in layers]
    weights = CategoryWeights(**{
        field: _first_number(
            [block[key] for block in weight_blocks if key in block],
            getattr(base.weights, field),
            WEIGHT_RANGE,
        )
        for field, key in _WEIGHT_FIELDS.items()
    })

    thresholds = TierThresholds(**{
        tier: _first_number(
            _threshold_candidates(layers, tier),
            getattr(base.tier_thresholds, tier),
            THRESHOLD_RANGE,
        )
        for tier in ("A", "B", "C")
    })

    strict = _first_bool(
        [blob.get("strictMustHaveSkills") for blob in layers], base.strict_must_have_skills
    )
    nlp = _first_bool([blob.get("enableNlpBoost") for blob in layers], base.enable_nlp_boost)
    if base.plan == "free":
        nlp = False

    return ScoringPolicy(
        plan=base.plan,
        hiring_mode=base.hiring_mode,
        weights=weights,
        tier_thresholds=thresholds,
        strict_must_have_skills=strict,
        enable_nlp_boost=nlp,
    )


def resolve_policy_for_job(job: Any, tenant: Any) -> ScoringPolicy:
    """Resolve the policy from ORM rows (or anything with the same attributes)."""
    return merge_scoring_config(
        tenant_config=getattr(tenant, 'scoring_config', None),
        job_overrides=getattr(job, 'scoring_overrides', None),
        tenant_hiring_mode=getattr(tenant, 'hiring_mode', None),
        job_hiring_mode=getattr(job, 'hiring_mode', None),
        plan=getattr(tenant, 'plan', None),
    )
