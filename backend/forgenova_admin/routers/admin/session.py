"""Admin session endpoints: verify, login, logout and auth-me.

Login is delegated to the identity provider; the issued access token is the
only credential and every later request re-verifies it through the guard.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request

from forgenova_admin.auth import AdminVerdict, is_admin_profile, verify_admin
from forgenova_admin.deps import (
    get_bearer_token,
    get_identity,
    get_profiles,
    require_admin,
)
from forgenova_admin.exceptions import AuthError, InvalidToken, NoToken
from forgenova_admin.identity import IdentityProviderClient
from forgenova_admin.models.admin import LoginRequest
from forgenova_admin.profiles import ProfileStore
from forgenova_admin.routers.admin._helpers import ok
from forgenova_admin.security import log_security_event, rate_limit_auth

logger = logging.getLogger(__name__)
router = APIRouter()

SESSION_PROFILE_COLUMNS = "user_id, role, status, admin_role, email, full_name, company, last_active_at"


def _session_user(user: dict[str, Any], profile: Optional[dict[str, Any]]) -> dict[str, Any]:
    name = (profile or {}).get("full_name") or user.get("email")
    return {"id": user["id"], "email": user.get("email"), "name": name}


@router.api_route("/admin-verify", methods=["GET", "POST"])
async def admin_verify(verdict: AdminVerdict = Depends(require_admin)):
    """Resolve the bearer token to an active admin identity."""
    return ok(
        isAdmin=True,
        user=_session_user(verdict.user, verdict.profile),
        profile=verdict.profile,
    )


@router.post("/admin-login")
@rate_limit_auth()
async def admin_login(
    request: Request,
    body: LoginRequest,
    identity: IdentityProviderClient = Depends(get_identity),
    profiles: ProfileStore = Depends(get_profiles),
):
    """Password sign-in at the provider, then the admin check on the new token."""
    session = await identity.sign_in_with_password(body.email, body.password)
    if session is None:
        log_security_event("admin_login_failed", request, {"email": body.email})
        raise AuthError("Invalid email or password")

    verdict = await verify_admin(session["access_token"], identity, profiles)
    if not verdict.ok:
        # The caller gets no token, so revoke the session that was just issued.
        await identity.sign_out(session["access_token"])
        log_security_event(
            "admin_login_denied",
            request,
            {"user_id": session["user"]["id"], "reason": verdict.error.message},
        )
        verdict.raise_for_error()

    logger.info("Admin login: %s", verdict.user_id)
    return ok(
        token=session["access_token"],
        refreshToken=session["refresh_token"],
        expiresIn=session["expires_in"],
        user=_session_user(verdict.user, verdict.profile),
        profile=verdict.profile,
    )


@router.post("/admin-logout")
async def admin_logout(
    token: Optional[str] = Depends(get_bearer_token),
    identity: IdentityProviderClient = Depends(get_identity),
):
    if not token:
        raise NoToken()
    await identity.sign_out(token)
    return ok(message="Logged out")


@router.get("/auth-me")
async def auth_me(
    token: Optional[str] = Depends(get_bearer_token),
    identity: IdentityProviderClient = Depends(get_identity),
    profiles: ProfileStore = Depends(get_profiles),
):
    """Any valid token: the caller's identity, profile and admin flag."""
    if not token:
        raise NoToken()
    user = await identity.get_user(token)
    if user is None:
        raise InvalidToken()

    profile = await profiles.get(user["id"], SESSION_PROFILE_COLUMNS)
    is_admin = bool(profile) and is_admin_profile(profile) and profile.get("status") == "active"
    return ok(
        isAdmin=is_admin,
        user={"id": user["id"], "email": user.get("email")},
        profile=profile,
    )
