"""Common plumbing for the per-entity admin managers."""

import logging
from typing import Any, Optional

from supabase import Client

from forgenova_admin.exceptions import NotFound
from forgenova_admin.services.activity_log import ActivityLogger

logger = logging.getLogger(__name__)


class ResourceManager:
    """Base class: one Supabase table plus the activity logger.

    Subclasses set :attr:`table` and :attr:`entity`.  Write operations take
    an ``actor_id`` that the router has already verified with the
    authorization guard, and call :meth:`_audit` only after the primary
    write succeeded.
    """

    table: str = ""
    entity: str = "Record"

    def __init__(self, client: Client, activity: Optional[ActivityLogger] = None):
        self.client = client
        self.activity = activity or ActivityLogger(client)

    def _query(self):
        return self.client.table(self.table)

    def _not_found(self, key: Any) -> NotFound:
        return NotFound(f"{self.entity} {key} not found")

    async def _audit(
        self,
        level: str,
        message: str,
        actor_id: str,
        metadata: Optional[dict[str, Any]] = None,
    ) -> None:
        await self.activity.log(level, message, actor_id, metadata)
