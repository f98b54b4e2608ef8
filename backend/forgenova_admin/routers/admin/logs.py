"""Activity log endpoint."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from forgenova_admin.auth import AdminVerdict
from forgenova_admin.deps import get_activity_logger, require_admin
from forgenova_admin.routers.admin._helpers import ok
from forgenova_admin.services import ActivityLogger

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/admin-logs")
async def list_activity_logs(
    level: Optional[str] = Query(None),
    verdict: AdminVerdict = Depends(require_admin),
    activity: ActivityLogger = Depends(get_activity_logger),
):
    """Newest 100 entries, optionally filtered by ``?level=``."""
    return ok(logs=await activity.list(level or None))
