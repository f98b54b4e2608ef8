"""Workspace administration endpoints."""

import logging

from fastapi import APIRouter, Depends

from forgenova_admin.auth import AdminVerdict
from forgenova_admin.deps import get_workspaces, require_admin
from forgenova_admin.models.admin import IdRequest, WorkspaceUpdate
from forgenova_admin.routers.admin._helpers import ok
from forgenova_admin.services import WorkspaceManager

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/admin-workspaces")
async def list_workspaces(
    verdict: AdminVerdict = Depends(require_admin),
    manager: WorkspaceManager = Depends(get_workspaces),
):
    return ok(workspaces=await manager.list())


@router.put("/admin-workspaces")
async def update_workspace(
    body: WorkspaceUpdate,
    verdict: AdminVerdict = Depends(require_admin),
    manager: WorkspaceManager = Depends(get_workspaces),
):
    workspace = await manager.update(body.id, body.patch(), verdict.user_id)
    return ok(workspace=workspace)


@router.delete("/admin-workspaces")
async def delete_workspace(
    body: IdRequest,
    verdict: AdminVerdict = Depends(require_admin),
    manager: WorkspaceManager = Depends(get_workspaces),
):
    await manager.delete(body.id, verdict.user_id)
    return ok()
