"""Error taxonomy for the ForgeNova admin API.

Every failure a manager or the authorization guard can report is one of the
classes below.  Each carries the HTTP status it maps to and a short error
label; ``security.setup_security`` renders them as ``{"ok": false, "error": ...}``.
"""

from typing import Optional


class AdminAPIError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# ---------------------------------------------------------------------------
# Authentication / authorization
# ---------------------------------------------------------------------------


class AuthError(AdminAPIError):
    """Raised when the caller cannot be verified as an active admin.

    The message is always the generic label of the failed check; provider
    details never reach the response body.
    """

    status_code = 401


class NoToken(AuthError):
    default_message = "No token provided"


class InvalidToken(AuthError):
    default_message = "Invalid token"


class ProfileNotFound(AuthError):
    status_code = 403
    default_message = "Profile not found"


class Unauthorized(AuthError):
    status_code = 403
    default_message = "Unauthorized"


# ---------------------------------------------------------------------------
# Resource / persistence
# ---------------------------------------------------------------------------


class NotFound(AdminAPIError):
    status_code = 404
    default_message = "Not found"


class BadRequest(AdminAPIError):
    status_code = 400
    default_message = "Invalid request"


class StorageError(AdminAPIError):
    """A persistence-layer failure.  The backend message is kept verbatim."""

    status_code = 500
    default_message = "Storage request failed"


class EmailDeliveryError(AdminAPIError):
    status_code = 502
    default_message = "Email delivery failed"
