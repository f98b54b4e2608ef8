"""Template administration endpoints."""

import logging

from fastapi import APIRouter, Depends

from forgenova_admin.auth import AdminVerdict
from forgenova_admin.deps import get_templates, require_admin
from forgenova_admin.models.admin import IdRequest, TemplateCreate, TemplateUpdate
from forgenova_admin.routers.admin._helpers import ok
from forgenova_admin.services import TemplateManager

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/admin-templates")
async def list_templates(
    verdict: AdminVerdict = Depends(require_admin),
    manager: TemplateManager = Depends(get_templates),
):
    return ok(templates=await manager.list())


@router.post("/admin-templates")
async def create_template(
    body: TemplateCreate,
    verdict: AdminVerdict = Depends(require_admin),
    manager: TemplateManager = Depends(get_templates),
):
    template = await manager.create(body.model_dump(exclude_none=True), verdict.user_id)
    return ok(template=template)


@router.put("/admin-templates")
async def update_template(
    body: TemplateUpdate,
    verdict: AdminVerdict = Depends(require_admin),
    manager: TemplateManager = Depends(get_templates),
):
    template = await manager.update(body.id, body.patch(), verdict.user_id)
    return ok(template=template)


@router.delete("/admin-templates")
async def delete_template(
    body: IdRequest,
    verdict: AdminVerdict = Depends(require_admin),
    manager: TemplateManager = Depends(get_templates),
):
    await manager.delete(body.id, verdict.user_id)
    return ok()
