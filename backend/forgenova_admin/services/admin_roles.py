"""Admin role assignment on profiles."""

from typing import Any

from forgenova_admin.auth import ADMIN_ROLE, ASSIGNABLE_ADMIN_ROLES
from forgenova_admin.exceptions import BadRequest
from forgenova_admin.profiles import ProfileStore
from forgenova_admin.services.base import ResourceManager


def role_columns(role: str) -> dict[str, Any]:
    """Profile columns for an assigned role.

    ``"admin"`` grants the coarse ``role='admin'``; ``"editor"`` and
    ``"super_admin"`` grant access through ``admin_role`` alone; ``"user"``
    clears both.  ``admin_role`` keeps the assigned value so the user stays
    on the admin-roles listing.
    """
    return {
        "role": ADMIN_ROLE if role == ADMIN_ROLE else "user",
        "admin_role": None if role == "user" else role,
    }


class AdminRoleManager(ResourceManager):
    table = "profiles"
    entity = "User"

    @property
    def profiles(self) -> ProfileStore:
        return self.activity.profiles

    async def list(self) -> list[dict[str, Any]]:
        """Profiles with a non-null ``admin_role``, ordered by name."""
        return await self.profiles.list_admins()

    async def update(self, user_id: str, role: str, actor_id: str) -> dict[str, Any]:
        """Assign *role* to *user_id*.

        ``role`` must be one of :data:`ASSIGNABLE_ADMIN_ROLES`.
        """
        if role not in ASSIGNABLE_ADMIN_ROLES:
            raise BadRequest(
                f"Invalid admin role '{role}'. Must be one of: "
                f"{', '.join(ASSIGNABLE_ADMIN_ROLES)}"
            )

        columns = role_columns(role)
        user = await self.profiles.update(user_id, columns)
        if user is None:
            raise self._not_found(user_id)

        await self._audit(
            "info",
            f"User role updated to '{role}' for user {user_id}",
            actor_id,
            {"target_user_id": user_id, **columns},
        )
        return user
