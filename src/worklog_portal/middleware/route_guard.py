"""Route guard.

Only the presence of the backend session cookie is checked here; whether the
session is still valid is learned when the backend answers 401.
"""
from __future__ import annotations

from typing import Optional
from urllib.parse import urlencode

from flask import Flask, redirect, request

from ..core.constants import PUBLIC_PATHS, UNGUARDED_PATHS, UNGUARDED_PREFIXES


def is_public_path(path: str) -> bool:
    return any(path.startswith(p) for p in PUBLIC_PATHS)


def is_unguarded(path: str) -> bool:
    return path in UNGUARDED_PATHS or any(path.startswith(p) for p in UNGUARDED_PREFIXES)


def guard_redirect(path: str, has_session: bool) -> Optional[str]:
    """Where to send a request instead of serving it, or ``None`` to serve it."""
    if is_unguarded(path):
        return None

    if not has_session and not is_public_path(path):
        return "/login?" + urlencode({"from": path})

    if has_session and path in ("/", "/login"):
        return "/dashboard"

    return None


def register(app: Flask, *, cookie_name: str) -> None:
    @app.before_request
    def enforce_session_cookie():
        target = guard_redirect(request.path, bool(request.cookies.get(cookie_name)))
        if target:
            return redirect(target)
        return None
