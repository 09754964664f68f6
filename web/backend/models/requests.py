#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WeightsUpdate(BaseModel):
    """Category weights as entered in the settings form (percentages)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    core_competencies: float = Field(ge=0, le=100)
    experience_quality: float = Field(ge=0, le=100)
    education: float = Field(ge=0, le=100)
    achievements: float = Field(ge=0, le=100)
    cultural_fit: float = Field(ge=0, le=100)

    @property
    def total(self) -> float:
        return (self.core_competencies + self.experience_quality + self.education
                + self.achievements + self.cultural_fit)


class ThresholdsUpdate(BaseModel):
    A: float = Field(ge=1, le=100, description="Minimum score for tier A")
    B: float = Field(ge=1, le=100, description="Minimum score for tier B")
    C: float = Field(ge=1, le=100, description="Minimum score for tier C")


class ScoringSettingsUpdate(BaseModel):
    """Request to replace a tenant's scoring overrides."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    hiring_mode: Optional[Literal["volume", "balanced", "executive"]] = None
    weights: WeightsUpdate
    tier_thresholds: ThresholdsUpdate
    strict_must_have_skills: Optional[bool] = None
    enable_nlp_boost: Optional[bool] = None
