"""Data-entry template administration."""

from typing import Any

from forgenova_admin.exceptions import BadRequest
from forgenova_admin.helpers.db_utils import first_row, run_query
from forgenova_admin.services.base import ResourceManager

TEMPLATE_WITH_RELATIONS = """
    *,
    created_user:profiles!templates_created_by_fkey(full_name, email),
    updated_user:profiles!templates_updated_by_fkey(full_name, email),
    template_usage(workspace_id, used_for)
"""

EDITABLE_FIELDS = {"name", "description"}


class TemplateManager(ResourceManager):
    table = "templates"
    entity = "Template"

    async def list(self) -> list[dict[str, Any]]:
        return await run_query(
            self._query()
            .select(TEMPLATE_WITH_RELATIONS)
            .order("created_at", desc=True)
        )

    async def create(self, fields: dict[str, Any], actor_id: str) -> dict[str, Any]:
        row = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}
        if not row.get("name"):
            raise BadRequest("Template name is required")
        row |= {"created_by": actor_id, "updated_by": actor_id}

        template = await first_row(self._query().insert(row))
        await self._audit("info", f"Template '{row['name']}' created", actor_id)
        return template or row

    async def update(
        self, template_id: str, patch: dict[str, Any], actor_id: str
    ) -> dict[str, Any]:
        updates = {k: v for k, v in patch.items() if k in EDITABLE_FIELDS}
        if not updates:
            raise BadRequest("No updatable template fields supplied")
        updates["updated_by"] = actor_id

        template = await first_row(
            self._query().update(updates).eq("id", template_id)
        )
        if template is None:
            raise self._not_found(template_id)

        await self._audit("info", f"Template '{template['name']}' updated", actor_id)
        return template

    async def delete(self, template_id: str, actor_id: str) -> None:
        template = await first_row(
            self._query().select("id, name").eq("id", template_id).limit(1)
        )
        if template is None:
            raise self._not_found(template_id)

        await run_query(self._query().delete().eq("id", template_id))
        await self._audit(
            "warning", f"Template '{template['name']}' deleted", actor_id
        )
