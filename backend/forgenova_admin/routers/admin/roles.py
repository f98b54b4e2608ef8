"""Admin role assignment endpoints."""

import logging

from fastapi import APIRouter, Depends

from forgenova_admin.auth import AdminVerdict
from forgenova_admin.deps import get_admin_roles, require_admin
from forgenova_admin.models.admin import RoleUpdate
from forgenova_admin.routers.admin._helpers import ok
from forgenova_admin.services import AdminRoleManager

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/admin-users-roles")
async def list_admin_users(
    verdict: AdminVerdict = Depends(require_admin),
    manager: AdminRoleManager = Depends(get_admin_roles),
):
    """Users holding an ``admin_role`` tag."""
    return ok(users=await manager.list())


@router.post("/admin-users-roles")
async def update_user_role(
    body: RoleUpdate,
    verdict: AdminVerdict = Depends(require_admin),
    manager: AdminRoleManager = Depends(get_admin_roles),
):
    user = await manager.update(body.userId, body.role, verdict.user_id)
    if body.userId == verdict.user_id:
        logger.warning("Admin %s changed their own admin role to %s", verdict.user_id, body.role)
    return ok(user=user)
