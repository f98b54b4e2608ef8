"""System settings endpoints -- admin-only key/value configuration."""

import logging

from fastapi import APIRouter, Depends

from forgenova_admin.auth import AdminVerdict
from forgenova_admin.deps import get_system_settings, require_admin
from forgenova_admin.models.admin import SettingUpdate
from forgenova_admin.routers.admin._helpers import ok
from forgenova_admin.services import SystemSettingsManager

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/admin-settings")
async def list_settings(
    verdict: AdminVerdict = Depends(require_admin),
    manager: SystemSettingsManager = Depends(get_system_settings),
):
    """All settings folded into one ``{key: value}`` mapping."""
    return ok(settings=await manager.get_all())


@router.post("/admin-settings")
async def update_setting(
    body: SettingUpdate,
    verdict: AdminVerdict = Depends(require_admin),
    manager: SystemSettingsManager = Depends(get_system_settings),
):
    setting = await manager.update(body.key, body.value, verdict.user_id)
    return ok(setting=setting)
