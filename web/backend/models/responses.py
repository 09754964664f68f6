#!/usr/bin/env python3
"""
Response models for API endpoints.

Field names are snake_case in Python and camelCase on the wire.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ScoredApplicationResponse(CamelModel):
    """Latest verdict for one application."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "applicationId": "550e8400-e29b-41d4-a716-446655440000",
                "score": 74,
                "tier": "B",
                "risks": ["Limited explicit, quantified achievements - probe for concrete impact and metrics."],
                "redFlags": [],
                "interviewFocus": ["Push for quantified achievements (revenue, cost, efficiency, growth)."],
                "reason": "Tier B (74/100). Core competencies 83/100, ..."
            }
        }
    )

    application_id: str
    score: int
    tier: str
    risks: List[str] = Field(default_factory=list)
    red_flags: List[str] = Field(default_factory=list)
    interview_focus: List[str] = Field(default_factory=list)
    reason: str


class ScoringEventResponse(CamelModel):
    id: str
    engine: str
    engine_version: Optional[str] = None
    outcome: str
    mode: str
    score: int
    tier: str
    reason: Optional[str] = None
    risks: List[str] = Field(default_factory=list)
    red_flags: List[str] = Field(default_factory=list)
    interview_focus: List[str] = Field(default_factory=list)
    config_snapshot: Dict[str, Any] = Field(default_factory=dict)
    input_summary: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[str] = None


class ScoringEventsResponse(CamelModel):
    application_id: str
    count: int
    events: List[ScoringEventResponse]


class ScoringSettingsResponse(CamelModel):
    """Stored overrides next to the policy they resolve to."""
    tenant_id: str
    plan: str
    hiring_mode: str
    overrides: Dict[str, Any] = Field(default_factory=dict)
    effective_config: Dict[str, Any]
