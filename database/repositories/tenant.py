import logging
from typing import Any, Dict, Optional

from database.models import Tenant
from database.repositories.base import BaseRepository, as_uuid

logger = logging.getLogger(__name__)


class TenantRepository(BaseRepository):
    def get_by_id(self, tenant_id: Any) -> Optional[Tenant]:
        key = as_uuid(tenant_id)
        return self.db.get(Tenant, key) if key is not None else None

    def save_scoring_settings(
        self,
        tenant: Tenant,
        scoring_config: Dict[str, Any],
        hiring_mode: Optional[str] = None
    ) -> Tenant:
        """Replace the tenant override blob wholesale; hiring_mode is only written when given."""
        tenant.scoring_config = scoring_config
        if hiring_mode:
            tenant.hiring_mode = hiring_mode
        self.db.flush()
        logger.info(f"Updated scoring settings for tenant {tenant.id}")
        return tenant
