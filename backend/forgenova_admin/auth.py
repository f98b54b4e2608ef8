"""Admin authorization guard.

``verify_admin`` resolves a bearer token to an identity, loads the matching
profile and applies the admin predicate.  It is read-only and re-resolves
against the identity provider and profile store on every call so a role
revocation takes effect on the very next request.

The verdict never says more than the label of the failed check: a malformed
token and a valid token for a non-admin both come back as ``ok=False``.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from forgenova_admin.exceptions import (
    AuthError,
    InvalidToken,
    NoToken,
    ProfileNotFound,
    StorageError,
    Unauthorized,
)
from forgenova_admin.identity import IdentityProviderClient
from forgenova_admin.profiles import ProfileStore

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"
PRIVILEGED_ADMIN_ROLES = frozenset({"super_admin", "editor"})

# admin_role values accepted by the role manager; "user" clears the tag.
ASSIGNABLE_ADMIN_ROLES = ("user", "editor", "super_admin", "admin")


@dataclass
class AdminVerdict:
    """Outcome of :func:`verify_admin`."""

    ok: bool
    user: Optional[dict[str, Any]] = None
    profile: Optional[dict[str, Any]] = None
    error: Optional[AuthError] = None

    @property
    def user_id(self) -> Optional[str]:
        return self.user["id"] if self.user else None

    def raise_for_error(self) -> None:
        if not self.ok:
            raise self.error or Unauthorized()


def is_admin_profile(profile: dict[str, Any]) -> bool:
    """Role check only; activity status is checked separately."""
    return (
        profile.get("role") == ADMIN_ROLE
        or profile.get("admin_role") in PRIVILEGED_ADMIN_ROLES
    )


def _deny(error: AuthError) -> AdminVerdict:
    return AdminVerdict(ok=False, error=error)


async def verify_admin(
    token: Optional[str],
    identity: IdentityProviderClient,
    profiles: ProfileStore,
) -> AdminVerdict:
    """Resolve *token* to an active admin.

    Steps: empty token -> ``NoToken``; provider rejection -> ``InvalidToken``;
    missing/unreadable profile -> ``ProfileNotFound``; not an admin or not
    ``active`` -> ``Unauthorized``.
    """
    if not token:
        return _deny(NoToken())

    user = await identity.get_user(token)
    if user is None:
        return _deny(InvalidToken())

    try:
        profile = await profiles.get(user["id"], "user_id, role, status, admin_role, email, full_name")
    except StorageError as exc:
        logger.warning("Profile lookup failed for user %s: %s", user["id"], exc)
        return _deny(ProfileNotFound())
    if not profile:
        return _deny(ProfileNotFound())

    if not is_admin_profile(profile) or profile.get("status") != "active":
        logger.info(
            "Admin verification denied for user %s (admin=%s, status=%s)",
            user["id"],
            is_admin_profile(profile),
            profile.get("status"),
        )
        return _deny(Unauthorized())

    return AdminVerdict(ok=True, user=user, profile=profile)
