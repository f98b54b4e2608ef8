"""User lifecycle actions: list, activate/deactivate, delete, password reset.

Profiles live in the relational store; credentials live with the identity
provider.  Deleting a user removes the identity first and then the profile
row, in case the store has no cascade configured.
"""

import logging
from typing import Any

from forgenova_admin.helpers.db_utils import count_rows
from forgenova_admin.identity import IdentityProviderClient
from forgenova_admin.profiles import ProfileStore
from forgenova_admin.services.activity_log import ActivityLogger
from forgenova_admin.services.base import ResourceManager

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 200


class UserManager(ResourceManager):
    table = "profiles"
    entity = "User"

    def __init__(
        self,
        client,
        identity: IdentityProviderClient,
        activity: ActivityLogger | None = None,
    ):
        super().__init__(client, activity)
        self.identity = identity

    @property
    def profiles(self) -> ProfileStore:
        return self.activity.profiles

    async def list_profiles(self) -> list[dict[str, Any]]:
        return await self.profiles.list()

    async def list_auth_users(self, page: int = 1, per_page: int = 100) -> list[dict[str, Any]]:
        page = max(page, 1)
        per_page = min(max(per_page, 1), MAX_PAGE_SIZE)
        return await self.identity.list_users(page=page, per_page=per_page)

    async def _set_status(self, user_id: str, status: str, actor_id: str) -> dict[str, Any]:
        profile = await self.profiles.update(user_id, {"status": status})
        if profile is None:
            raise self._not_found(user_id)
        label = profile.get("email") or user_id
        verb = "activated" if status == "active" else "deactivated"
        await self._audit("info", f"User {label} {verb}", actor_id, {"target_user_id": user_id})
        return profile

    async def activate(self, user_id: str, actor_id: str) -> dict[str, Any]:
        return await self._set_status(user_id, "active", actor_id)

    async def deactivate(self, user_id: str, actor_id: str) -> dict[str, Any]:
        return await self._set_status(user_id, "inactive", actor_id)

    async def delete(self, user_id: str, actor_id: str) -> None:
        await self.identity.delete_user(user_id)
        await self.profiles.delete(user_id)
        await self._audit(
            "warning", f"User {user_id} deleted", actor_id, {"target_user_id": user_id}
        )

    async def reset_password(self, user_id: str, actor_id: str) -> str:
        """Send a reset email; returns the address it went to."""
        user = await self.identity.get_user_by_id(user_id)
        email = user.get("email")
        if not email:
            raise self._not_found(user_id)
        await self.identity.send_password_reset(email)
        await self._audit(
            "info", f"Password reset email sent to {email}", actor_id, {"target_user_id": user_id}
        )
        return email

    async def stats(self) -> dict[str, int]:
        total_users = await count_rows(
            self.client.table("profiles").select("user_id", count="exact")
        )
        total_workspaces = await count_rows(
            self.client.table("workspaces").select("id", count="exact")
        )
        total_templates = await count_rows(
            self.client.table("templates").select("id", count="exact")
        )
        active_api_keys = await count_rows(
            self.client.table("api_keys").select("id", count="exact").eq("is_active", True)
        )
        pending_users = await count_rows(
            self.client.table("profiles").select("user_id", count="exact").eq("status", "pending")
        )
        return {
            "totalUsers": total_users,
            "pendingUsers": pending_users,
            "totalWorkspaces": total_workspaces,
            "totalTemplates": total_templates,
            "activeApiKeys": active_api_keys,
        }
