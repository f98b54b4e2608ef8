"""Shared dependencies for all ForgeNova admin API routers.

Centralises the Supabase client singleton, the bearer-token scheme, the
admin authorization dependency and one factory per manager so that every
router module can ``from forgenova_admin.deps import …`` without pulling in
``main``.
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from supabase import Client, ClientOptions, create_client

from forgenova_admin.auth import AdminVerdict, verify_admin
from forgenova_admin.exceptions import StorageError
from forgenova_admin.identity import IdentityProviderClient
from forgenova_admin.profiles import ProfileStore
from forgenova_admin.security import get_rate_limiter
from forgenova_admin.services import (
    ActivityLogger,
    AdminRoleManager,
    APIKeyManager,
    BackupManager,
    EmailSettingsManager,
    FeatureFlagManager,
    SystemSettingsManager,
    TemplateManager,
    UserManager,
    WorkspaceManager,
)
from forgenova_admin.services.notifications import SignupNotifier

load_dotenv()

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Supabase client (singleton)
# ---------------------------------------------------------------------------
_supabase_url = os.getenv("SUPABASE_URL")
_supabase_anon_key = os.getenv("SUPABASE_ANON_KEY")
_supabase_service_key = os.getenv("SUPABASE_SERVICE_KEY")

# Left as None when unconfigured; endpoints then fail with StorageError.
supabase: Optional[Client] = None
if _supabase_url and _supabase_service_key:
    supabase = create_client(_supabase_url, _supabase_service_key)
else:
    logger.warning("SUPABASE_URL / SUPABASE_SERVICE_KEY not set; admin API is disabled")


def _login_client_factory() -> Client:
    """Fresh session-less client for password sign-in."""
    return create_client(
        _supabase_url,
        _supabase_anon_key or _supabase_service_key,
        options=ClientOptions(persist_session=False, auto_refresh_token=False),
    )


# ---------------------------------------------------------------------------
# Rate limiter
# ---------------------------------------------------------------------------
limiter = get_rate_limiter()

# ---------------------------------------------------------------------------
# HTTPBearer security scheme
# ---------------------------------------------------------------------------
# auto_error=False so a missing header reaches the guard and becomes NoToken.
bearer_scheme = HTTPBearer(auto_error=False)


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    if credentials is None:
        return None
    return credentials.credentials.strip() or None


# ---------------------------------------------------------------------------
# Clients
# ---------------------------------------------------------------------------


def get_supabase() -> Client:
    if supabase is None:
        raise StorageError("Supabase not configured")
    return supabase


def get_identity(client: Client = Depends(get_supabase)) -> IdentityProviderClient:
    return IdentityProviderClient(client, login_client_factory=_login_client_factory)


def get_profiles(client: Client = Depends(get_supabase)) -> ProfileStore:
    return ProfileStore(client)


def get_activity_logger(
    client: Client = Depends(get_supabase),
    profiles: ProfileStore = Depends(get_profiles),
) -> ActivityLogger:
    return ActivityLogger(client, profiles)


# ---------------------------------------------------------------------------
# Authorization
# ---------------------------------------------------------------------------


async def require_admin(
    token: Optional[str] = Depends(get_bearer_token),
    identity: IdentityProviderClient = Depends(get_identity),
    profiles: ProfileStore = Depends(get_profiles),
) -> AdminVerdict:
    """Resolve the bearer token to an active admin or raise.

    ``NoToken`` / ``InvalidToken`` become HTTP 401, ``ProfileNotFound`` /
    ``Unauthorized`` HTTP 403 (via the AdminAPIError handler).
    """
    verdict = await verify_admin(token, identity, profiles)
    verdict.raise_for_error()
    return verdict


# ---------------------------------------------------------------------------
# Managers
# ---------------------------------------------------------------------------


def get_system_settings(
    client: Client = Depends(get_supabase),
    activity: ActivityLogger = Depends(get_activity_logger),
) -> SystemSettingsManager:
    return SystemSettingsManager(client, activity)


def get_feature_flags(
    client: Client = Depends(get_supabase),
    activity: ActivityLogger = Depends(get_activity_logger),
) -> FeatureFlagManager:
    return FeatureFlagManager(client, activity)


def get_admin_roles(
    client: Client = Depends(get_supabase),
    activity: ActivityLogger = Depends(get_activity_logger),
) -> AdminRoleManager:
    return AdminRoleManager(client, activity)


def get_email_settings(
    client: Client = Depends(get_supabase),
    activity: ActivityLogger = Depends(get_activity_logger),
) -> EmailSettingsManager:
    return EmailSettingsManager(client, activity)


def get_api_keys(
    client: Client = Depends(get_supabase),
    activity: ActivityLogger = Depends(get_activity_logger),
) -> APIKeyManager:
    return APIKeyManager(client, activity)


def get_workspaces(
    client: Client = Depends(get_supabase),
    activity: ActivityLogger = Depends(get_activity_logger),
) -> WorkspaceManager:
    return WorkspaceManager(client, activity)


def get_templates(
    client: Client = Depends(get_supabase),
    activity: ActivityLogger = Depends(get_activity_logger),
) -> TemplateManager:
    return TemplateManager(client, activity)


def get_backups(
    client: Client = Depends(get_supabase),
    activity: ActivityLogger = Depends(get_activity_logger),
) -> BackupManager:
    return BackupManager(client, activity)


def get_users(
    client: Client = Depends(get_supabase),
    identity: IdentityProviderClient = Depends(get_identity),
    activity: ActivityLogger = Depends(get_activity_logger),
) -> UserManager:
    return UserManager(client, identity, activity)


def get_signup_notifier(
    email_settings: EmailSettingsManager = Depends(get_email_settings),
) -> SignupNotifier:
    return SignupNotifier(email_settings)
