"""Email / notification settings endpoints (single row)."""

import logging

from fastapi import APIRouter, Depends

from forgenova_admin.auth import AdminVerdict
from forgenova_admin.deps import get_email_settings, require_admin
from forgenova_admin.models.admin import EmailSettingsUpdate
from forgenova_admin.routers.admin._helpers import ok
from forgenova_admin.services import EmailSettingsManager

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/admin-email-settings")
async def read_email_settings(
    verdict: AdminVerdict = Depends(require_admin),
    manager: EmailSettingsManager = Depends(get_email_settings),
):
    return ok(settings=await manager.get())


@router.post("/admin-email-settings")
async def update_email_settings(
    body: EmailSettingsUpdate,
    verdict: AdminVerdict = Depends(require_admin),
    manager: EmailSettingsManager = Depends(get_email_settings),
):
    settings = await manager.update(body.fields(), verdict.user_id)
    return ok(settings=settings)
