"""Boolean feature flags."""

from typing import Any

from forgenova_admin.helpers.db_utils import first_row, run_query, utcnow_iso
from forgenova_admin.services.base import ResourceManager


class FeatureFlagManager(ResourceManager):
    table = "feature_flags"
    entity = "Feature flag"

    async def list(self) -> list[dict[str, Any]]:
        return await run_query(self._query().select("*").order("name"))

    async def toggle(self, flag_id: str, enabled: bool, actor_id: str) -> dict[str, Any]:
        flag = await first_row(
            self._query()
            .update(
                {
                    "enabled": enabled,
                    "updated_by": actor_id,
                    "updated_at": utcnow_iso(),
                }
            )
            .eq("id", flag_id)
        )
        if flag is None:
            raise self._not_found(flag_id)

        state = "enabled" if enabled else "disabled"
        await self._audit(
            "info",
            f"Feature flag '{flag['name']}' {state}",
            actor_id,
            {"flag_id": flag_id, "enabled": enabled},
        )
        return flag
