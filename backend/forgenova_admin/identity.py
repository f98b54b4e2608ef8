"""Thin async wrapper around the Supabase Auth (GoTrue) API.

Only the calls the admin panel needs are exposed: resolve a bearer token,
list / fetch / delete users, trigger a password-reset email, and the
password sign-in used by the admin login endpoint.
"""

import asyncio
import logging
from typing import Any, Callable, Optional

from supabase import Client

from forgenova_admin.exceptions import NotFound, StorageError

logger = logging.getLogger(__name__)


def _user_dict(user: Any) -> dict[str, Any]:
    """Flatten a GoTrue ``User`` object into a JSON-safe dict."""
    app_metadata = getattr(user, "app_metadata", None) or {}
    created_at = getattr(user, "created_at", None)
    last_sign_in_at = getattr(user, "last_sign_in_at", None)
    return {
        "id": str(user.id),
        "email": getattr(user, "email", None),
        "created_at": created_at.isoformat() if hasattr(created_at, "isoformat") else created_at,
        "last_sign_in_at": (
            last_sign_in_at.isoformat()
            if hasattr(last_sign_in_at, "isoformat")
            else last_sign_in_at
        ),
        "provider": app_metadata.get("provider"),
    }


class IdentityProviderClient:
    """Identity provider calls, each run in a worker thread.

    Args:
        client: Service-role Supabase client (admin API access).
        login_client_factory: Builds a fresh, session-less client for password
            sign-in so a user session never attaches to the shared
            service-role client.
    """

    def __init__(
        self,
        client: Client,
        login_client_factory: Optional[Callable[[], Client]] = None,
    ):
        self.client = client
        self.login_client_factory = login_client_factory

    async def get_user(self, token: str) -> Optional[dict[str, Any]]:
        """Resolve *token* to a user, or ``None`` when the provider rejects it."""
        try:
            response = await asyncio.to_thread(self.client.auth.get_user, token)
        except Exception as exc:
            logger.info("Token rejected by identity provider: %s", type(exc).__name__)
            return None
        user = getattr(response, "user", None) if response else None
        if user is None:
            return None
        return _user_dict(user)

    async def get_user_by_id(self, user_id: str) -> dict[str, Any]:
        try:
            response = await asyncio.to_thread(
                self.client.auth.admin.get_user_by_id, user_id
            )
        except Exception as exc:
            logger.warning("Identity lookup failed for user %s: %s", user_id, exc)
            raise NotFound("User not found") from exc
        user = getattr(response, "user", None) if response else None
        if user is None:
            raise NotFound("User not found")
        return _user_dict(user)

    async def list_users(self, page: int = 1, per_page: int = 100) -> list[dict[str, Any]]:
        try:
            users = await asyncio.to_thread(
                self.client.auth.admin.list_users, page=page, per_page=per_page
            )
        except Exception as exc:
            raise StorageError(str(exc)) from exc
        return [_user_dict(u) for u in users or []]

    async def delete_user(self, user_id: str) -> None:
        try:
            await asyncio.to_thread(self.client.auth.admin.delete_user, user_id)
        except Exception as exc:
            raise StorageError(str(exc)) from exc

    async def send_password_reset(self, email: str) -> None:
        try:
            await asyncio.to_thread(self.client.auth.reset_password_for_email, email)
        except Exception as exc:
            raise StorageError(str(exc)) from exc

    async def sign_in_with_password(
        self, email: str, password: str
    ) -> Optional[dict[str, Any]]:
        """Password sign-in.  Returns ``{"access_token", "refresh_token",
        "expires_in", "user"}`` or ``None`` on bad credentials."""
        login_client = (
            self.login_client_factory() if self.login_client_factory else self.client
        )
        try:
            response = await asyncio.to_thread(
                login_client.auth.sign_in_with_password,
                {"email": email, "password": password},
            )
        except Exception as exc:
            logger.info("Password sign-in rejected: %s", type(exc).__name__)
            return None

        session = getattr(response, "session", None)
        user = getattr(response, "user", None)
        if session is None or user is None:
            return None
        return {
            "access_token": session.access_token,
            "refresh_token": getattr(session, "refresh_token", None),
            "expires_in": getattr(session, "expires_in", None),
            "user": _user_dict(user),
        }

    async def sign_out(self, token: str) -> None:
        """Revoke every session of the token's user at the provider."""
        try:
            await asyncio.to_thread(self.client.auth.admin.sign_out, token)
        except Exception as exc:
            logger.info("Provider sign-out failed: %s", type(exc).__name__)
