"""Feature flag endpoints."""

import logging

from fastapi import APIRouter, Depends

from forgenova_admin.auth import AdminVerdict
from forgenova_admin.deps import get_feature_flags, require_admin
from forgenova_admin.models.admin import FeatureFlagUpdate
from forgenova_admin.routers.admin._helpers import ok
from forgenova_admin.services import FeatureFlagManager

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/admin-feature-flags")
async def list_feature_flags(
    verdict: AdminVerdict = Depends(require_admin),
    manager: FeatureFlagManager = Depends(get_feature_flags),
):
    return ok(flags=await manager.list())


@router.post("/admin-feature-flags")
async def toggle_feature_flag(
    body: FeatureFlagUpdate,
    verdict: AdminVerdict = Depends(require_admin),
    manager: FeatureFlagManager = Depends(get_feature_flags),
):
    flag = await manager.toggle(body.id, body.enabled, verdict.user_id)
    return ok(flag=flag)
