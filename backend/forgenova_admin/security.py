"""
Security module for the ForgeNova admin API

Implements:
- Rate limiting (IP-based using slowapi)
- Security headers middleware
- Request ID generation for audit logging
- Request size validation
- Error handlers that render the ``{"ok": false, "error": ...}`` envelope

Configuration via environment variables:
- RATE_LIMIT_PER_MINUTE: Requests per minute per IP (default: 100)
- MAX_REQUEST_SIZE_MB: Maximum request body size in MB (default: 10)
- TRUSTED_PROXY_COUNT: Proxies in front of the app (default: 1)
- ENVIRONMENT: 'production' or 'development' (affects error detail exposure)
"""

import ipaddress
import logging
import os
import time
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from forgenova_admin.exceptions import AdminAPIError

logger = logging.getLogger(__name__)

# =============================================================================
# Configuration
# =============================================================================

RATE_LIMIT_PER_MINUTE = int(os.getenv("RATE_LIMIT_PER_MINUTE", "100"))
DEFAULT_RATE_LIMIT = f"{RATE_LIMIT_PER_MINUTE}/minute"

MAX_REQUEST_SIZE_MB = int(os.getenv("MAX_REQUEST_SIZE_MB", "10"))
MAX_REQUEST_SIZE_BYTES = MAX_REQUEST_SIZE_MB * 1024 * 1024

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
IS_PRODUCTION = ENVIRONMENT.lower() == "production"

TRUSTED_PROXY_COUNT = int(os.getenv("TRUSTED_PROXY_COUNT", "1"))


# =============================================================================
# Client IP / rate limiter
# =============================================================================

def _is_valid_ip(ip_str: str) -> bool:
    """Validate that a string is a valid IP address (IPv4 or IPv6)."""
    if not ip_str or len(ip_str) > 45:
        return False
    try:
        ipaddress.ip_address(ip_str)
        return True
    except ValueError:
        return False


def get_client_ip(request: Request) -> str:
    """
    Extract the client IP with anti-spoofing protection.

    X-Forwarded-For is read right to left: the last TRUSTED_PROXY_COUNT
    entries belong to our proxies, the one before them is the client, and
    anything further left may be forged.

    Returns:
        The client IP address, or "unknown" if not determinable
    """
    direct_ip = request.client.host if request.client else None

    if forwarded_for := request.headers.get("X-Forwarded-For"):
        if ips := [ip.strip() for ip in forwarded_for.split(",") if ip.strip()]:
            if len(ips) > TRUSTED_PROXY_COUNT:
                client_ip = ips[-(TRUSTED_PROXY_COUNT + 1)]
            else:
                client_ip = ips[0]

            if _is_valid_ip(client_ip):
                return client_ip
            logger.warning(
                "Invalid IP in X-Forwarded-For header: %r", client_ip[:50],
                extra={"direct_ip": direct_ip},
            )

    if real_ip := request.headers.get("X-Real-IP"):
        real_ip = real_ip.strip()
        if _is_valid_ip(real_ip):
            return real_ip
        logger.warning(
            "Invalid X-Real-IP header: %r", real_ip[:50],
            extra={"direct_ip": direct_ip},
        )

    return direct_ip if direct_ip and _is_valid_ip(direct_ip) else "unknown"


limiter = Limiter(
    key_func=get_client_ip,
    default_limits=[DEFAULT_RATE_LIMIT],
    storage_uri="memory://",
    strategy="fixed-window",
)


def get_rate_limiter() -> Limiter:
    """Get the configured rate limiter instance."""
    return limiter


AUTH_RATE_LIMIT = "5/minute"
NOTIFICATION_RATE_LIMIT = "10/minute"


def rate_limit_auth():
    """Decorator for login endpoints with strict rate limiting."""
    return limiter.limit(AUTH_RATE_LIMIT)


def rate_limit_notification():
    """Decorator for the unauthenticated notification/signup endpoints."""
    return limiter.limit(NOTIFICATION_RATE_LIMIT)


# =============================================================================
# Middleware
# =============================================================================

class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Adds security headers and an X-Request-ID to every response, and logs
    one completion line per request.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        request.state.start_time = time.time()

        response = await call_next(request)

        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Permissions-Policy"] = (
            "accelerometer=(), camera=(), geolocation=(), gyroscope=(), "
            "magnetometer=(), microphone=(), payment=(), usb=()"
        )
        if IS_PRODUCTION:
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains; preload"
            )
        response.headers["X-Request-ID"] = request_id

        if request.url.path.startswith("/api/") and not response.headers.get("Cache-Control"):
            response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, private"

        duration = time.time() - request.state.start_time
        logger.info(
            "Request completed: %s %s status=%s duration=%.3fs request_id=%s client_ip=%s",
            request.method,
            request.url.path,
            response.status_code,
            duration,
            request_id,
            get_client_ip(request),
        )
        return response


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Rejects bodies larger than MAX_REQUEST_SIZE_MB."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if content_length := request.headers.get("content-length"):
            try:
                size = int(content_length)
            except ValueError:
                return JSONResponse(
                    status_code=400,
                    content={"ok": False, "error": "Invalid Content-Length header"},
                )
            if size > MAX_REQUEST_SIZE_BYTES:
                return JSONResponse(
                    status_code=413,
                    content={
                        "ok": False,
                        "error": f"Request body too large. Maximum size is {MAX_REQUEST_SIZE_MB}MB.",
                    },
                )

        return await call_next(request)


# =============================================================================
# Error handlers
# =============================================================================

def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or str(uuid.uuid4())


def _error_response(
    request: Request,
    status_code: int,
    error: str,
    allowed_origins: list[str],
    extra_headers: Optional[dict] = None,
) -> JSONResponse:
    request_id = _request_id(request)
    headers = {"X-Request-ID": request_id}
    origin = request.headers.get("origin", "")
    if origin in allowed_origins:
        headers["Access-Control-Allow-Origin"] = origin
        headers["Access-Control-Allow-Credentials"] = "true"
    if extra_headers:
        headers |= extra_headers
    return JSONResponse(
        status_code=status_code,
        content={"ok": False, "error": error, "request_id": request_id},
        headers=headers,
    )


def create_admin_error_handler(allowed_origins: list[str]) -> Callable:
    """Render :class:`AdminAPIError` subclasses with their own status."""

    async def admin_error_handler(request: Request, exc: AdminAPIError) -> JSONResponse:
        if exc.status_code in (401, 403):
            log_security_event(
                "auth_denied",
                request,
                {"status": exc.status_code, "reason": exc.message},
            )
        elif exc.status_code >= 500:
            logger.error(
                "%s on %s %s: %s",
                type(exc).__name__,
                request.method,
                request.url.path,
                exc.message,
            )
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return _error_response(request, exc.status_code, exc.message, allowed_origins, headers)

    return admin_error_handler


def create_http_exception_handler(allowed_origins: list[str]) -> Callable:
    """Routing-level errors (404 unknown path, 405 wrong method) and any
    explicit HTTPException."""

    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _error_response(
            request,
            exc.status_code,
            str(exc.detail),
            allowed_origins,
            getattr(exc, "headers", None),
        )

    return http_exception_handler


def create_validation_error_handler(allowed_origins: list[str]) -> Callable:
    """Malformed or invalid JSON bodies are a plain 400 BadRequest."""

    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = first.get("msg", "Invalid request body")
        error = f"Invalid request: {location}: {message}" if location else f"Invalid request: {message}"
        return _error_response(request, 400, error, allowed_origins)

    return validation_error_handler


def create_rate_limit_exceeded_handler(allowed_origins: list[str]) -> Callable:
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
        logger.warning(
            "Rate limit exceeded: client_ip=%s path=%s request_id=%s",
            get_client_ip(request),
            request.url.path,
            _request_id(request),
        )
        return _error_response(
            request,
            429,
            "Rate limit exceeded. Please slow down your requests.",
            allowed_origins,
            {"Retry-After": "60"},
        )

    return rate_limit_handler


def create_secure_exception_handler(allowed_origins: list[str]) -> Callable:
    """
    Unhandled exceptions: generic message in production, exception text in
    development.  The full stack trace is always logged.
    """

    async def secure_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled exception: %s: %s request_id=%s path=%s method=%s client_ip=%s",
            type(exc).__name__,
            exc,
            _request_id(request),
            request.url.path,
            request.method,
            get_client_ip(request),
            exc_info=True,
        )
        if IS_PRODUCTION:
            error = "An internal server error occurred. Please try again later."
        else:
            error = f"{type(exc).__name__}: {exc}"
        return _error_response(request, 500, error, allowed_origins)

    return secure_exception_handler


# =============================================================================
# Setup
# =============================================================================

def setup_security(app: FastAPI, allowed_origins: list[str]) -> None:
    """
    Configure rate limiting, security headers, request size limits and the
    envelope error handlers.  Call after CORS middleware is added.
    """
    app.state.limiter = limiter

    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestSizeLimitMiddleware)

    app.add_exception_handler(AdminAPIError, create_admin_error_handler(allowed_origins))
    app.add_exception_handler(
        StarletteHTTPException, create_http_exception_handler(allowed_origins)
    )
    app.add_exception_handler(
        RequestValidationError, create_validation_error_handler(allowed_origins)
    )
    app.add_exception_handler(
        RateLimitExceeded, create_rate_limit_exceeded_handler(allowed_origins)
    )
    app.add_exception_handler(Exception, create_secure_exception_handler(allowed_origins))

    logger.info(
        "Security middleware configured: rate_limit=%s/min, max_request_size=%sMB, environment=%s",
        RATE_LIMIT_PER_MINUTE,
        MAX_REQUEST_SIZE_MB,
        ENVIRONMENT,
    )


# =============================================================================
# Audit logging
# =============================================================================

def log_security_event(
    event_type: str,
    request: Request,
    details: Optional[dict] = None,
) -> None:
    """
    Log a security-relevant event (auth failure, rate limit, ...).

    Args:
        event_type: Type of security event (e.g., 'auth_denied')
        request: The request object
        details: Optional additional details to log
    """
    log_data = {
        "event_type": event_type,
        "request_id": getattr(request.state, "request_id", "unknown"),
        "client_ip": get_client_ip(request),
        "path": request.url.path,
        "method": request.method,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if details:
        log_data |= details

    logger.warning("SECURITY_EVENT: %s", log_data)
