#!/usr/bin/env python3
"""
Scoring settings service - read and replace a tenant's scoring overrides.
"""

import logging
from typing import Any, Dict

from core.scorer.policy import coerce_config_blob, merge_scoring_config
from database.models import Tenant
from database.repository import ScoringRepository
from ..exceptions import InvalidScoringSettingsException, TenantNotFoundException
from ..models.requests import ScoringSettingsUpdate
from ..models.responses import ScoringSettingsResponse

logger = logging.getLogger(__name__)

WEIGHT_TOTAL = 100.0
WEIGHT_TOLERANCE = 0.01


def validate_settings(update: ScoringSettingsUpdate) -> None:
    """
    Form-level checks on top of the per-field ranges.

    Raises:
        InvalidScoringSettingsException: weights do not sum to 100, or thresholds are not A > B > C.
    """
    total = update.weights.total
    if abs(total - WEIGHT_TOTAL) > WEIGHT_TOLERANCE:
        raise InvalidScoringSettingsException(f"Category weights must sum to 100 (got {total:g})")

    t = update.tier_thresholds
    if not (t.A > t.B > t.C):
        raise InvalidScoringSettingsException(
            f"Tier thresholds must satisfy A > B > C (got A={t.A:g}, B={t.B:g}, C={t.C:g})"
        )


def settings_to_blob(update: ScoringSettingsUpdate) -> Dict[str, Any]:
    """Override blob in the camelCase shape the policy resolver reads."""
    return update.model_dump(mode="json", by_alias=True, exclude_none=True)


class ScoringSettingsService:
    """Service for tenant scoring settings."""

    def __init__(self, repo: ScoringRepository):
        self.repo = repo

    def _get_tenant(self, tenant_id: str) -> Tenant:
        tenant = self.repo.tenants.get_by_id(tenant_id)
        if tenant is None:
            raise TenantNotFoundException(f"Tenant not found: {tenant_id}")
        return tenant

    def _response(self, tenant: Tenant) -> ScoringSettingsResponse:
        policy = merge_scoring_config(
            tenant_config=tenant.scoring_config,
            tenant_hiring_mode=tenant.hiring_mode,
            plan=tenant.plan,
        )
        return ScoringSettingsResponse(
            tenant_id=str(tenant.id),
            plan=policy.plan,
            hiring_mode=policy.hiring_mode,
            overrides=coerce_config_blob(tenant.scoring_config, "tenant scoring config"),
            effective_config=policy.snapshot(),
        )

    def get_settings(self, tenant_id: str) -> ScoringSettingsResponse:
        return self._response(self._get_tenant(tenant_id))

    def update_settings(self, tenant_id: str, update: ScoringSettingsUpdate) -> ScoringSettingsResponse:
        tenant = self._get_tenant(tenant_id)
        validate_settings(update)

        self.repo.tenants.save_scoring_settings(
            tenant, settings_to_blob(update), hiring_mode=update.hiring_mode
        )
        self.repo.commit()
        return self._response(tenant)
