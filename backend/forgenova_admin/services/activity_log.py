"""Append-only audit trail of admin actions (``activity_logs`` table).

Writes are best-effort: a failure to record an entry is reported to the
application log and never propagates to the operation being audited.
"""

import logging
from typing import Any, Optional

from supabase import Client

from forgenova_admin.exceptions import BadRequest
from forgenova_admin.helpers.db_utils import run_query
from forgenova_admin.profiles import ProfileStore

logger = logging.getLogger(__name__)

TABLE = "activity_logs"
LOG_LEVELS = ("info", "warning", "error")
PAGE_SIZE = 100


class ActivityLogger:
    """Records and lists admin activity."""

    def __init__(self, client: Client, profiles: Optional[ProfileStore] = None):
        self.client = client
        self.profiles = profiles or ProfileStore(client)

    async def _actor_email(self, user_id: str) -> Optional[str]:
        try:
            return await self.profiles.get_email(user_id)
        except Exception as exc:
            logger.warning("Could not resolve email for actor %s: %s", user_id, exc)
            return None

    async def log(
        self,
        level: str,
        message: str,
        user_id: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> bool:
        """Append one entry.  Returns ``False`` when the write failed."""
        try:
            user_email = await self._actor_email(user_id) if user_id else None
            await run_query(
                self.client.table(TABLE).insert(
                    {
                        "level": level,
                        "message": message,
                        "user_id": user_id,
                        "user_email": user_email,
                        "metadata": metadata,
                    }
                )
            )
            return True
        except Exception:
            logger.exception("Failed to log activity: %s", message)
            return False

    async def list(self, level: Optional[str] = None) -> list[dict[str, Any]]:
        """Newest entries first, one page of :data:`PAGE_SIZE`."""
        if level is not None and level not in LOG_LEVELS:
            raise BadRequest(f"Invalid log level: {level}")
        query = (
            self.client.table(TABLE)
            .select("*")
            .order("created_at", desc=True)
            .limit(PAGE_SIZE)
        )
        if level:
            query = query.eq("level", level)
        return await run_query(query)
