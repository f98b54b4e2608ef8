"""User lifecycle endpoints: listings, activation, deletion, password reset
and dashboard counts."""

import logging

from fastapi import APIRouter, Depends, Query

from forgenova_admin.auth import AdminVerdict
from forgenova_admin.deps import get_users, require_admin
from forgenova_admin.exceptions import BadRequest
from forgenova_admin.models.admin import UserIdRequest
from forgenova_admin.routers.admin._helpers import ok
from forgenova_admin.services import UserManager
from forgenova_admin.services.users import MAX_PAGE_SIZE

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/admin-users")
async def list_users(
    verdict: AdminVerdict = Depends(require_admin),
    manager: UserManager = Depends(get_users),
):
    """All profiles, newest first."""
    return ok(users=await manager.list_profiles())


@router.get("/admin/users-list")
async def list_auth_users(
    page: int = Query(1, ge=1),
    per: int = Query(100, ge=1),
    verdict: AdminVerdict = Depends(require_admin),
    manager: UserManager = Depends(get_users),
):
    """Identity-provider accounts, paginated (``per`` capped at 200)."""
    per = min(per, MAX_PAGE_SIZE)
    users = await manager.list_auth_users(page=page, per_page=per)
    return ok(page=page, per=per, count=len(users), users=users)


@router.post("/admin-activate-user")
async def activate_user(
    body: UserIdRequest,
    verdict: AdminVerdict = Depends(require_admin),
    manager: UserManager = Depends(get_users),
):
    await manager.activate(body.userId, verdict.user_id)
    return ok(message="User activated")


@router.post("/admin-deactivate-user")
async def deactivate_user(
    body: UserIdRequest,
    verdict: AdminVerdict = Depends(require_admin),
    manager: UserManager = Depends(get_users),
):
    if body.userId == verdict.user_id:
        raise BadRequest("You cannot deactivate your own account")
    await manager.deactivate(body.userId, verdict.user_id)
    return ok(message="User deactivated")


@router.post("/admin-delete-user")
async def delete_user(
    body: UserIdRequest,
    verdict: AdminVerdict = Depends(require_admin),
    manager: UserManager = Depends(get_users),
):
    if body.userId == verdict.user_id:
        raise BadRequest("You cannot delete your own account")
    await manager.delete(body.userId, verdict.user_id)
    return ok(message="User deleted")


@router.post("/admin-reset-password")
async def reset_password(
    body: UserIdRequest,
    verdict: AdminVerdict = Depends(require_admin),
    manager: UserManager = Depends(get_users),
):
    await manager.reset_password(body.userId, verdict.user_id)
    return ok(message="Password reset email sent")


@router.get("/admin-stats")
async def admin_stats(
    verdict: AdminVerdict = Depends(require_admin),
    manager: UserManager = Depends(get_users),
):
    return ok(stats=await manager.stats())
