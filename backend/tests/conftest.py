"""Shared fixtures for the admin API tests.

Every test runs against FakeSupabase; no network or real Supabase project is
touched.  Endpoint tests go through FastAPI's TestClient with the client
dependencies overridden.
"""

import os
import sys
import uuid
from typing import Any, Dict, Optional

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

# Keep deps.supabase unset so importing the app never builds a real client.
os.environ.pop("SUPABASE_URL", None)
os.environ.pop("SUPABASE_SERVICE_KEY", None)
for _smtp_var in ("SMTP_HOST", "SMTP_USER", "SMTP_PASSWORD"):
    os.environ.pop(_smtp_var, None)

from tests.fakes import FakeSupabase, make_auth_user  # noqa: E402

ADMIN_TOKEN = "admin-token"
USER_TOKEN = "user-token"


# ============================================================================
# TEST DATA FACTORIES
# ============================================================================

def make_profile(
    user_id: Optional[str] = None,
    role: str = "user",
    admin_role: Optional[str] = None,
    status: str = "active",
    email: str = "user@example.com",
    full_name: str = "Test User",
) -> Dict[str, Any]:
    """Factory function to create profile rows."""
    return {
        "user_id": user_id or str(uuid.uuid4()),
        "role": role,
        "admin_role": admin_role,
        "status": status,
        "email": email,
        "full_name": full_name,
        "company": "Acme Corp",
        "created_at": "2026-01-15T00:00:00+00:00",
    }


def add_user(
    db: FakeSupabase,
    token: Optional[str] = None,
    password: Optional[str] = None,
    with_profile: bool = True,
    **profile_fields: Any,
) -> Dict[str, Any]:
    """Register an identity (optionally with a token) and its profile row."""
    email = profile_fields.setdefault("email", f"{uuid.uuid4().hex[:8]}@example.com")
    user = db.auth.add_user(make_auth_user(email=email), token=token, password=password)
    profile = make_profile(user_id=user.id, **profile_fields)
    if with_profile:
        db.tables.setdefault("profiles", []).append(profile)
    return profile


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def fake_db() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def admin_profile(fake_db) -> Dict[str, Any]:
    """An active ``role='admin'`` user reachable with ADMIN_TOKEN."""
    return add_user(
        fake_db,
        token=ADMIN_TOKEN,
        password="Admin123!@#",
        role="admin",
        email="admin@forgenova.ai",
        full_name="Admin User",
    )


@pytest.fixture
def regular_profile(fake_db) -> Dict[str, Any]:
    """An active non-admin user reachable with USER_TOKEN."""
    return add_user(fake_db, token=USER_TOKEN, password="hunter22", email="member@example.com")


@pytest.fixture
def client(fake_db):
    """TestClient with the Supabase-backed dependencies pointed at fake_db."""
    from fastapi.testclient import TestClient

    from forgenova_admin import deps
    from forgenova_admin.identity import IdentityProviderClient
    from forgenova_admin.main import app

    app.dependency_overrides[deps.get_supabase] = lambda: fake_db
    app.dependency_overrides[deps.get_identity] = lambda: IdentityProviderClient(
        fake_db, login_client_factory=lambda: fake_db
    )
    deps.limiter.enabled = False
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
        deps.limiter.enabled = True


def auth_headers(token: str = ADMIN_TOKEN) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
