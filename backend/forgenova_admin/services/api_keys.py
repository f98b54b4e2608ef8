"""API key issuance, listing and revocation.

Secrets are generated before anything is written: if the insert fails there
is nothing to undo.  Only a SHA-256 hash of the full key is stored; the
plaintext is returned once, in the creation response.
"""

import hashlib
import logging
import secrets
from typing import Any

from forgenova_admin.exceptions import BadRequest
from forgenova_admin.helpers.db_utils import first_row, run_query, utcnow_iso
from forgenova_admin.services.base import ResourceManager

logger = logging.getLogger(__name__)

KEY_PREFIXES: dict[str, str] = {
    "production": "sk_live",
    "test": "sk_test",
}
RANDOM_BYTES = 32
VISIBLE_CHARS = 4

# Everything except the hash.
LIST_COLUMNS = (
    "id, name, key_prefix, key_visible, environment, is_active, "
    "last_used_at, created_at"
)


def hash_api_key(full_key: str) -> str:
    return hashlib.sha256(full_key.encode("utf-8")).hexdigest()


def generate_api_key(environment: str) -> tuple[str, str, str]:
    """Return ``(prefix, full_key, visible_suffix)`` for *environment*."""
    try:
        prefix = KEY_PREFIXES[environment]
    except KeyError:
        raise BadRequest(
            f"Invalid environment '{environment}'. Must be one of: "
            f"{', '.join(KEY_PREFIXES)}"
        ) from None
    random_part = secrets.token_hex(RANDOM_BYTES)
    return prefix, f"{prefix}_{random_part}", random_part[-VISIBLE_CHARS:]


class APIKeyManager(ResourceManager):
    table = "api_keys"
    entity = "API key"

    async def list(self) -> list[dict[str, Any]]:
        """Active keys, newest first."""
        return await run_query(
            self._query()
            .select(LIST_COLUMNS)
            .eq("is_active", True)
            .order("created_at", desc=True)
        )

    async def create(
        self, name: str, environment: str, actor_id: str
    ) -> tuple[dict[str, Any], str]:
        """Issue a key.  Returns ``(stored_row, full_key)``."""
        prefix, full_key, visible = generate_api_key(environment)

        key = await first_row(
            self._query().insert(
                {
                    "name": name,
                    "key_prefix": prefix,
                    "key_hash": hash_api_key(full_key),
                    "key_visible": visible,
                    "environment": environment,
                    "created_by": actor_id,
                }
            )
        )
        key = {k: v for k, v in (key or {}).items() if k != "key_hash"}

        await self._audit(
            "info", f"API key '{name}' created for {environment}", actor_id
        )
        return key, full_key

    async def revoke(self, key_id: str, actor_id: str) -> dict[str, Any]:
        """Soft-delete: keys are deactivated, never removed."""
        key = await first_row(
            self._query()
            .update({"is_active": False, "revoked_at": utcnow_iso()})
            .eq("id", key_id)
        )
        if key is None:
            raise self._not_found(key_id)

        await self._audit("warning", f"API key '{key['name']}' revoked", actor_id)
        return {k: v for k, v in key.items() if k != "key_hash"}
