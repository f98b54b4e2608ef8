"""Workspace administration."""

from typing import Any

from forgenova_admin.exceptions import BadRequest
from forgenova_admin.helpers.db_utils import first_row, run_query
from forgenova_admin.services.base import ResourceManager

WORKSPACE_WITH_MEMBERS = """
    *,
    workspace_members (
        user_id,
        role,
        profiles (full_name, email)
    )
"""

# Columns an admin may change from the panel.
EDITABLE_FIELDS = {"name", "description"}


class WorkspaceManager(ResourceManager):
    table = "workspaces"
    entity = "Workspace"

    async def list(self) -> list[dict[str, Any]]:
        return await run_query(
            self._query()
            .select(WORKSPACE_WITH_MEMBERS)
            .order("created_at", desc=True)
        )

    async def update(
        self, workspace_id: str, patch: dict[str, Any], actor_id: str
    ) -> dict[str, Any]:
        updates = {k: v for k, v in patch.items() if k in EDITABLE_FIELDS}
        if not updates:
            raise BadRequest("No updatable workspace fields supplied")

        workspace = await first_row(
            self._query().update(updates).eq("id", workspace_id)
        )
        if workspace is None:
            raise self._not_found(workspace_id)

        await self._audit("info", f"Workspace '{workspace['name']}' updated", actor_id)
        return workspace

    async def delete(self, workspace_id: str, actor_id: str) -> None:
        # The name is only recoverable before the row goes away.
        workspace = await first_row(
            self._query().select("id, name").eq("id", workspace_id).limit(1)
        )
        if workspace is None:
            raise self._not_found(workspace_id)

        await run_query(self._query().delete().eq("id", workspace_id))
        await self._audit(
            "warning", f"Workspace '{workspace['name']}' deleted", actor_id
        )
