"""Shared helpers for admin sub-routers."""

from typing import Any


def ok(**payload: Any) -> dict[str, Any]:
    """Success envelope: ``{"ok": true, ...payload}``."""
    return {"ok": True, **payload}
