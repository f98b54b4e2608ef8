"""System settings stored as one row per key, exposed as a single mapping."""

from typing import Any

from forgenova_admin.helpers.db_utils import first_row, run_query, utcnow_iso
from forgenova_admin.services.base import ResourceManager


class SystemSettingsManager(ResourceManager):
    table = "system_settings"
    entity = "System setting"

    async def get_all(self) -> dict[str, Any]:
        rows = await run_query(self._query().select("*"))
        return {row["key"]: row.get("value") for row in rows}

    async def update(self, key: str, value: Any, actor_id: str) -> dict[str, Any]:
        """Upsert *key* (last write wins)."""
        setting = await first_row(
            self._query().upsert(
                {
                    "key": key,
                    "value": value,
                    "updated_by": actor_id,
                    "updated_at": utcnow_iso(),
                },
                on_conflict="key",
            )
        )
        await self._audit("info", f"System setting '{key}' updated to '{value}'", actor_id)
        return setting or {"key": key, "value": value}
