"""Backup records.

Creating a backup only records a placeholder entry (synthesized filename,
simulated size, ``completed`` status); no data is exported.
"""

import random
from datetime import datetime, timezone
from typing import Any, Optional

from forgenova_admin.helpers.db_utils import first_row, run_query
from forgenova_admin.services.base import ResourceManager

LIST_LIMIT = 20
PLACEHOLDER_MIN_BYTES = 2_000_000
PLACEHOLDER_MAX_BYTES = 5_000_000


def backup_filename(now: Optional[datetime] = None) -> str:
    """``backup_<YYYY-MM-DD>_<epoch milliseconds>.sql``"""
    now = now or datetime.now(timezone.utc)
    return f"backup_{now.date().isoformat()}_{int(now.timestamp() * 1000)}.sql"


class BackupManager(ResourceManager):
    table = "system_backups"
    entity = "Backup"

    async def list(self) -> list[dict[str, Any]]:
        return await run_query(
            self._query()
            .select("*")
            .order("created_at", desc=True)
            .limit(LIST_LIMIT)
        )

    async def create(self, actor_id: str) -> dict[str, Any]:
        filename = backup_filename()
        row = {
            "filename": filename,
            "size_bytes": random.randrange(PLACEHOLDER_MIN_BYTES, PLACEHOLDER_MAX_BYTES),
            "created_by": actor_id,
            "status": "completed",
        }
        backup = await first_row(self._query().insert(row))
        await self._audit("info", f"Backup created: {filename}", actor_id)
        return backup or row
