"""PostgREST query helpers shared by every manager.

supabase-py builds requests synchronously, so each ``.execute()`` is pushed
to a worker thread to keep the event loop free.  Failures from the store are
re-raised as :class:`~forgenova_admin.exceptions.StorageError` with the
backend message untouched.

Usage::

    from forgenova_admin.helpers.db_utils import run_query

    rows = await run_query(client.table("feature_flags").select("*").order("name"))
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Optional

import httpx
from postgrest.exceptions import APIError

from forgenova_admin.exceptions import StorageError

logger = logging.getLogger(__name__)


def utcnow_iso() -> str:
    """Current UTC time as an ISO-8601 string (PostgREST timestamptz input)."""
    return datetime.now(timezone.utc).isoformat()


def _api_error_message(exc: APIError) -> str:
    return exc.message or exc.details or str(exc)


async def execute(query) -> Any:
    """Run a PostgREST builder in a thread and return the raw response."""
    try:
        return await asyncio.to_thread(query.execute)
    except APIError as exc:
        message = _api_error_message(exc)
        logger.warning("PostgREST request failed: code=%s message=%s", exc.code, message)
        raise StorageError(message) from exc
    except httpx.HTTPError as exc:
        logger.warning("PostgREST transport error: %s", exc)
        raise StorageError(str(exc)) from exc


async def run_query(query) -> list[dict]:
    """Execute *query* and return its rows (never ``None``)."""
    response = await execute(query)
    return list(response.data or [])


async def first_row(query) -> Optional[dict]:
    """Execute *query* and return the first row, or ``None`` when empty."""
    rows = await run_query(query)
    return rows[0] if rows else None


async def count_rows(query) -> int:
    """Execute a ``select(..., count="exact")`` query and return the count."""
    response = await execute(query)
    return response.count or 0
