#!/usr/bin/env python3
"""
Scoring settings endpoints - per-tenant weights, thresholds and hiring mode.
"""

from fastapi import APIRouter, Depends

from database.repository import ScoringRepository
from ..dependencies import get_repository
from ..services.scoring_settings import ScoringSettingsService
from ..models.requests import ScoringSettingsUpdate
from ..models.responses import ScoringSettingsResponse

router = APIRouter(prefix="/api/tenants", tags=["settings"])


@router.get("/{tenant_id}/scoring-settings", response_model=ScoringSettingsResponse)
def get_scoring_settings(tenant_id: str, repo: ScoringRepository = Depends(get_repository)):
    """
    Get the tenant's stored overrides and the effective policy they resolve to.
    """
    return ScoringSettingsService(repo).get_settings(tenant_id)


@router.put("/{tenant_id}/scoring-settings", response_model=ScoringSettingsResponse)
def update_scoring_settings(
    tenant_id: str,
    update: ScoringSettingsUpdate,
    repo: ScoringRepository = Depends(get_repository)
):
    """
    Replace the tenant's scoring overrides.

    - weights: five category weights, each 0-100, summing to 100
    - tierThresholds: A > B > C, each 1-100
    - hiringMode: volume, balanced or executive (optional)
    """
    return ScoringSettingsService(repo).update_settings(tenant_id, update)
