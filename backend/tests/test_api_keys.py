"""
Unit Tests for API Key Issuance and Revocation

Usage:
    cd backend && pytest tests/test_api_keys.py -v
"""

import hashlib
import re

import pytest

from forgenova_admin.exceptions import BadRequest, NotFound, StorageError
from forgenova_admin.services.api_keys import (
    APIKeyManager,
    generate_api_key,
    hash_api_key,
)
from forgenova_admin.services.activity_log import ActivityLogger


def make_manager(db) -> APIKeyManager:
    return APIKeyManager(db, ActivityLogger(db))


class TestGenerateApiKey:

    @pytest.mark.parametrize(
        "environment,prefix", [("production", "sk_live"), ("test", "sk_test")]
    )
    def test_prefix_by_environment(self, environment, prefix):
        key_prefix, full_key, visible = generate_api_key(environment)
        assert key_prefix == prefix
        assert re.fullmatch(rf"{prefix}_[0-9a-f]{{64}}", full_key)
        assert full_key.endswith(visible)
        assert len(visible) == 4

    def test_keys_are_unique(self):
        keys = {generate_api_key("test")[1] for _ in range(50)}
        assert len(keys) == 50

    def test_unknown_environment(self):
        with pytest.raises(BadRequest):
            generate_api_key("staging")

    def test_hash_is_sha256_hex(self):
        assert hash_api_key("sk_test_abc") == hashlib.sha256(b"sk_test_abc").hexdigest()


class TestAPIKeyManager:

    @pytest.mark.asyncio
    async def test_create_stores_only_hash(self, fake_db, admin_profile):
        manager = make_manager(fake_db)
        key, full_key = await manager.create("CI", "production", admin_profile["user_id"])

        stored = fake_db.rows("api_keys")[0]
        assert stored["key_hash"] == hashlib.sha256(full_key.encode()).hexdigest()
        assert stored["key_visible"] == full_key[-4:]
        assert stored["key_prefix"] == "sk_live"
        assert full_key not in stored.values()
        assert "key_hash" not in key

    @pytest.mark.asyncio
    async def test_create_logs_once(self, fake_db, admin_profile):
        manager = make_manager(fake_db)
        await manager.create("CI", "test", admin_profile["user_id"])

        logs = fake_db.rows("activity_logs")
        assert len(logs) == 1
        assert logs[0]["message"] == "API key 'CI' created for test"
        assert logs[0]["user_id"] == admin_profile["user_id"]
        assert logs[0]["user_email"] == "admin@forgenova.ai"

    @pytest.mark.asyncio
    async def test_list_hides_hash_and_plaintext(self, fake_db, admin_profile):
        manager = make_manager(fake_db)
        _, full_key = await manager.create("CI", "test", admin_profile["user_id"])

        keys = await manager.list()
        assert len(keys) == 1
        assert "key_hash" not in keys[0]
        assert full_key not in keys[0].values()
        assert keys[0]["key_visible"] == full_key[-4:]

    @pytest.mark.asyncio
    async def test_revoked_key_not_listed(self, fake_db, admin_profile):
        manager = make_manager(fake_db)
        key, _ = await manager.create("Old", "test", admin_profile["user_id"])
        await manager.create("New", "test", admin_profile["user_id"])

        await manager.revoke(key["id"], admin_profile["user_id"])

        names = [k["name"] for k in await manager.list()]
        assert names == ["New"]
        revoked = next(r for r in fake_db.rows("api_keys") if r["id"] == key["id"])
        assert revoked["is_active"] is False
        assert revoked["revoked_at"] is not None

    @pytest.mark.asyncio
    async def test_revoke_logs_warning(self, fake_db, admin_profile):
        manager = make_manager(fake_db)
        key, _ = await manager.create("CI", "test", admin_profile["user_id"])
        await manager.revoke(key["id"], admin_profile["user_id"])

        assert [log["level"] for log in fake_db.rows("activity_logs")] == ["info", "warning"]

    @pytest.mark.asyncio
    async def test_revoke_unknown_key(self, fake_db, admin_profile):
        with pytest.raises(NotFound):
            await make_manager(fake_db).revoke("missing", admin_profile["user_id"])
        assert fake_db.rows("activity_logs") == []

    @pytest.mark.asyncio
    async def test_failed_insert_is_not_logged(self, fake_db, admin_profile):
        fake_db.fail_on("api_keys", "insert", "permission denied for table api_keys")
        with pytest.raises(StorageError) as exc_info:
            await make_manager(fake_db).create("CI", "test", admin_profile["user_id"])
        assert exc_info.value.message == "permission denied for table api_keys"
        assert exc_info.value.status_code == 500
        assert fake_db.rows("activity_logs") == []

