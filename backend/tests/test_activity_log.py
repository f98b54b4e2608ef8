"""
Unit Tests for the Activity Logger

Usage:
    cd backend && pytest tests/test_activity_log.py -v
"""

import pytest

from forgenova_admin.exceptions import BadRequest
from forgenova_admin.services.activity_log import PAGE_SIZE, ActivityLogger
from forgenova_admin.services.system_settings import SystemSettingsManager


class TestActivityLoggerWrite:

    @pytest.mark.asyncio
    async def test_log_resolves_actor_email(self, fake_db, admin_profile):
        ok = await ActivityLogger(fake_db).log(
            "info", "Something happened", admin_profile["user_id"], {"k": 1}
        )
        assert ok is True
        row = fake_db.rows("activity_logs")[0]
        assert row["level"] == "info"
        assert row["message"] == "Something happened"
        assert row["user_id"] == admin_profile["user_id"]
        assert row["user_email"] == "admin@forgenova.ai"
        assert row["metadata"] == {"k": 1}

    @pytest.mark.asyncio
    async def test_email_lookup_failure_logs_null_email(self, fake_db, admin_profile):
        fake_db.fail_on("profiles", "select")
        assert await ActivityLogger(fake_db).log("info", "m", admin_profile["user_id"])
        assert fake_db.rows("activity_logs")[0]["user_email"] is None

    @pytest.mark.asyncio
    async def test_system_entry_without_user(self, fake_db):
        assert await ActivityLogger(fake_db).log("warning", "System event")
        row = fake_db.rows("activity_logs")[0]
        assert row["user_id"] is None
        assert row["user_email"] is None

    @pytest.mark.asyncio
    async def test_insert_failure_is_swallowed(self, fake_db, admin_profile, caplog):
        fake_db.fail_on("activity_logs", "insert", "disk full")
        assert await ActivityLogger(fake_db).log("info", "m", admin_profile["user_id"]) is False
        assert "Failed to log activity" in caplog.text

    @pytest.mark.asyncio
    async def test_log_failure_does_not_fail_mutation(self, fake_db, admin_profile):
        fake_db.fail_on("activity_logs", "insert")
        manager = SystemSettingsManager(fake_db, ActivityLogger(fake_db))

        setting = await manager.update("site_name", "ForgeNova", admin_profile["user_id"])

        assert setting["value"] == "ForgeNova"
        assert fake_db.rows("system_settings")[0]["value"] == "ForgeNova"


class TestActivityLoggerList:

    @pytest.mark.asyncio
    async def test_newest_first(self, fake_db):
        fake_db.tables["activity_logs"] = [
            {"id": "1", "level": "info", "message": "old", "created_at": "2026-01-01T00:00:00+00:00"},
            {"id": "2", "level": "info", "message": "new", "created_at": "2026-03-01T00:00:00+00:00"},
        ]
        logs = await ActivityLogger(fake_db).list()
        assert [log["message"] for log in logs] == ["new", "old"]

    @pytest.mark.asyncio
    async def test_level_filter(self, fake_db):
        fake_db.tables["activity_logs"] = [
            {"id": "1", "level": "info", "message": "a", "created_at": "2026-01-01"},
            {"id": "2", "level": "warning", "message": "b", "created_at": "2026-01-02"},
        ]
        logs = await ActivityLogger(fake_db).list("warning")
        assert [log["message"] for log in logs] == ["b"]

    @pytest.mark.asyncio
    async def test_page_size(self, fake_db):
        fake_db.tables["activity_logs"] = [
            {"id": str(i), "level": "info", "message": str(i), "created_at": f"2026-01-01T00:{i // 60:02d}:{i % 60:02d}"}
            for i in range(PAGE_SIZE + 20)
        ]
        assert len(await ActivityLogger(fake_db).list()) == PAGE_SIZE

    @pytest.mark.asyncio
    async def test_invalid_level(self, fake_db):
        with pytest.raises(BadRequest):
            await ActivityLogger(fake_db).list("debug")
