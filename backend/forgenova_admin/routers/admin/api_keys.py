"""API key endpoints.

The plaintext key is returned by the create call only; listings carry the
prefix and the last four characters.
"""

import logging

from fastapi import APIRouter, Depends

from forgenova_admin.auth import AdminVerdict
from forgenova_admin.deps import get_api_keys, require_admin
from forgenova_admin.models.admin import APIKeyCreate, IdRequest
from forgenova_admin.routers.admin._helpers import ok
from forgenova_admin.services import APIKeyManager

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/admin-api-keys")
async def list_api_keys(
    verdict: AdminVerdict = Depends(require_admin),
    manager: APIKeyManager = Depends(get_api_keys),
):
    return ok(keys=await manager.list())


@router.post("/admin-api-keys")
async def create_api_key(
    body: APIKeyCreate,
    verdict: AdminVerdict = Depends(require_admin),
    manager: APIKeyManager = Depends(get_api_keys),
):
    key, full_key = await manager.create(body.name, body.environment, verdict.user_id)
    return ok(key=key, fullKey=full_key)


@router.delete("/admin-api-keys")
async def revoke_api_key(
    body: IdRequest,
    verdict: AdminVerdict = Depends(require_admin),
    manager: APIKeyManager = Depends(get_api_keys),
):
    await manager.revoke(body.id, verdict.user_id)
    return ok()
