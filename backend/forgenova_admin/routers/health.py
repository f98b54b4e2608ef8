"""Health-check router."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter

from forgenova_admin import deps

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/api/health")
async def health_check():
    """Liveness plus whether the hosted store is configured."""
    return {
        "ok": True,
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "services": {
            "supabase": "configured" if deps.supabase is not None else "not_configured",
        },
    }
