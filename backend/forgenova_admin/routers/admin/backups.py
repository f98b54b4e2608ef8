"""Backup record endpoints (placeholder entries, no export)."""

import logging

from fastapi import APIRouter, Depends

from forgenova_admin.auth import AdminVerdict
from forgenova_admin.deps import get_backups, require_admin
from forgenova_admin.routers.admin._helpers import ok
from forgenova_admin.services import BackupManager

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/admin-backups")
async def list_backups(
    verdict: AdminVerdict = Depends(require_admin),
    manager: BackupManager = Depends(get_backups),
):
    return ok(backups=await manager.list())


@router.post("/admin-backups")
async def create_backup(
    verdict: AdminVerdict = Depends(require_admin),
    manager: BackupManager = Depends(get_backups),
):
    backup = await manager.create(verdict.user_id)
    logger.info("Backup record %s created by %s", backup.get("filename"), verdict.user_id)
    return ok(backup=backup)
