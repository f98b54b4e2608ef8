"""CRUD against the ``profiles`` table, keyed by ``user_id``."""

from __future__ import annotations

import logging
from typing import Any, Optional

from supabase import Client

from forgenova_admin.helpers.db_utils import first_row, run_query, utcnow_iso

logger = logging.getLogger(__name__)

TABLE = "profiles"

PROFILE_STATUSES = ("pending", "active", "inactive")

# Columns a signup may set; role/status are always server-assigned.
SIGNUP_FIELDS = (
    "full_name",
    "first_name",
    "last_name",
    "email",
    "company",
    "position",
)


class ProfileStore:
    """Profile lookups and updates for one Supabase client."""

    def __init__(self, client: Client):
        self.client = client

    async def get(self, user_id: str, columns: str = "*") -> Optional[dict[str, Any]]:
        return await first_row(
            self.client.table(TABLE).select(columns).eq("user_id", user_id).limit(1)
        )

    async def get_email(self, user_id: str) -> Optional[str]:
        profile = await self.get(user_id, "email")
        return profile.get("email") if profile else None

    async def list(self) -> list[dict[str, Any]]:
        return await run_query(
            self.client.table(TABLE).select("*").order("created_at", desc=True)
        )

    async def list_admins(self) -> list[dict[str, Any]]:
        """Profiles that carry a non-null ``admin_role``."""
        return await run_query(
            self.client.table(TABLE)
            .select("user_id, full_name, email, admin_role, status, created_at")
            .not_.is_("admin_role", "null")
            .order("full_name")
        )

    async def update(self, user_id: str, patch: dict[str, Any]) -> Optional[dict[str, Any]]:
        """Apply *patch*; returns the updated row or ``None`` if no such user."""
        return await first_row(
            self.client.table(TABLE).update(patch).eq("user_id", user_id)
        )

    async def delete(self, user_id: str) -> None:
        await run_query(self.client.table(TABLE).delete().eq("user_id", user_id))

    async def create_if_missing(
        self, user_id: str, fields: dict[str, Any]
    ) -> tuple[dict[str, Any], bool]:
        """Create the signup profile unless one exists.

        New profiles always start as ``role='user'``, ``status='pending'``.

        Returns:
            ``(profile, created)``
        """
        existing = await self.get(user_id)
        if existing:
            return existing, False

        row = {k: fields.get(k) or None for k in SIGNUP_FIELDS}
        row |= {
            "user_id": user_id,
            "role": "user",
            "status": "pending",
            "created_at": utcnow_iso(),
        }
        created = await first_row(self.client.table(TABLE).insert(row))
        logger.info("Created pending profile for user %s", user_id)
        return created or row, True
