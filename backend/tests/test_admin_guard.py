"""
Unit Tests for the Admin Authorization Guard

Tests verify_admin and the admin predicate:
- Missing / rejected tokens
- Missing or unreadable profiles
- Role and status combinations
- No persistence writes during verification

Usage:
    cd backend && pytest tests/test_admin_guard.py -v
"""

import pytest

from forgenova_admin.auth import AdminVerdict, is_admin_profile, verify_admin
from forgenova_admin.exceptions import (
    InvalidToken,
    NoToken,
    ProfileNotFound,
    Unauthorized,
)
from forgenova_admin.identity import IdentityProviderClient
from forgenova_admin.profiles import ProfileStore
from tests.conftest import ADMIN_TOKEN, add_user


async def _verify(db, token):
    return await verify_admin(token, IdentityProviderClient(db), ProfileStore(db))


class TestAdminPredicate:
    """is_admin_profile: role OR privileged admin_role."""

    @pytest.mark.parametrize(
        "role,admin_role,expected",
        [
            ("admin", None, True),
            ("user", "super_admin", True),
            ("user", "editor", True),
            ("user", "admin", False),
            ("user", None, False),
        ],
    )
    def test_admin_predicate(self, role, admin_role, expected):
        assert is_admin_profile({"role": role, "admin_role": admin_role}) is expected


class TestVerifyAdmin:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", [None, ""])
    async def test_missing_token(self, fake_db, token):
        verdict = await _verify(fake_db, token)
        assert not verdict.ok
        assert isinstance(verdict.error, NoToken)
        assert verdict.error.message == "No token provided"

    @pytest.mark.asyncio
    async def test_rejected_token(self, fake_db):
        verdict = await _verify(fake_db, "garbage")
        assert not verdict.ok
        assert isinstance(verdict.error, InvalidToken)
        assert verdict.error.status_code == 401

    @pytest.mark.asyncio
    async def test_missing_profile(self, fake_db):
        add_user(fake_db, token="orphan", with_profile=False)
        verdict = await _verify(fake_db, "orphan")
        assert isinstance(verdict.error, ProfileNotFound)
        assert verdict.error.status_code == 403

    @pytest.mark.asyncio
    async def test_profile_lookup_failure_is_profile_not_found(self, fake_db, admin_profile):
        fake_db.fail_on("profiles", "select", "relation does not exist")
        verdict = await _verify(fake_db, ADMIN_TOKEN)
        assert isinstance(verdict.error, ProfileNotFound)
        # Backend detail stays out of the verdict.
        assert "relation" not in verdict.error.message

    @pytest.mark.asyncio
    async def test_regular_user_is_unauthorized(self, fake_db):
        add_user(fake_db, token="t", role="user", admin_role=None)
        verdict = await _verify(fake_db, "t")
        assert not verdict.ok
        assert isinstance(verdict.error, Unauthorized)
        assert verdict.error.message == "Unauthorized"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", ["pending", "inactive"])
    async def test_inactive_admin_is_unauthorized(self, fake_db, status):
        add_user(fake_db, token="t", role="admin", status=status)
        verdict = await _verify(fake_db, "t")
        assert isinstance(verdict.error, Unauthorized)

    @pytest.mark.asyncio
    async def test_active_admin(self, fake_db, admin_profile):
        verdict = await _verify(fake_db, ADMIN_TOKEN)
        assert verdict.ok
        assert verdict.user_id == admin_profile["user_id"]
        assert verdict.user["email"] == "admin@forgenova.ai"
        assert verdict.profile["role"] == "admin"
        assert verdict.error is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("admin_role", ["super_admin", "editor"])
    async def test_privileged_admin_role(self, fake_db, admin_role):
        add_user(fake_db, token="t", role="user", admin_role=admin_role)
        verdict = await _verify(fake_db, "t")
        assert verdict.ok

    @pytest.mark.asyncio
    async def test_verification_never_writes(self, fake_db, admin_profile):
        add_user(fake_db, token="t", role="user")
        for token in (None, "garbage", "t", ADMIN_TOKEN):
            await _verify(fake_db, token)
        assert fake_db.mutations() == []

    @pytest.mark.asyncio
    async def test_role_revocation_applies_to_next_call(self, fake_db, admin_profile):
        assert (await _verify(fake_db, ADMIN_TOKEN)).ok
        admin_profile_row = fake_db.rows("profiles")[0]
        admin_profile_row["role"] = "user"
        assert not (await _verify(fake_db, ADMIN_TOKEN)).ok


class TestVerdict:

    def test_raise_for_error_passes_on_success(self):
        AdminVerdict(ok=True, user={"id": "u1"}).raise_for_error()

    def test_raise_for_error_raises_stored_error(self):
        with pytest.raises(InvalidToken):
            AdminVerdict(ok=False, error=InvalidToken()).raise_for_error()

    def test_user_id_none_without_user(self):
        assert AdminVerdict(ok=False).user_id is None
