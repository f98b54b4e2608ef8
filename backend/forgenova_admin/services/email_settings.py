"""Singleton email/notification settings.

The table carries a unique ``singleton`` column that is always ``true``, so
an upsert on that column is a single conditional write: the first call
inserts the row, every later call updates it, and two concurrent first
calls cannot leave two rows behind.
"""

from typing import Any

from forgenova_admin.helpers.db_utils import first_row, utcnow_iso
from forgenova_admin.services.base import ResourceManager

SINGLETON_KEY = "singleton"

# Columns owned by the server, never taken from a request body.
_RESERVED = {"id", SINGLETON_KEY, "updated_by", "updated_at"}


class EmailSettingsManager(ResourceManager):
    table = "email_settings"
    entity = "Email settings"

    async def get(self) -> dict[str, Any]:
        """The settings row, or ``{}`` before the first update."""
        row = await first_row(self._query().select("*").limit(1))
        return row or {}

    async def update(self, fields: dict[str, Any], actor_id: str) -> dict[str, Any]:
        data = {k: v for k, v in fields.items() if k not in _RESERVED}
        data |= {
            SINGLETON_KEY: True,
            "updated_by": actor_id,
            "updated_at": utcnow_iso(),
        }
        settings = await first_row(
            self._query().upsert(data, on_conflict=SINGLETON_KEY)
        )
        await self._audit(
            "info", "Email settings updated", actor_id, {"fields": sorted(fields)}
        )
        return settings or data

    async def signup_notifications_enabled(self) -> bool:
        """Only an explicit ``false`` disables signup notifications."""
        settings = await self.get()
        return settings.get("notification_signups") is not False
