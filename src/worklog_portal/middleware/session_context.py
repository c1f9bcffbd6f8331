from __future__ import annotations

from flask import Flask, current_app, g, request

from ..container import Services
from ..users.service import SessionContext

EXTENSION_KEY = "worklog_portal"


def current_container():
    return current_app.extensions[EXTENSION_KEY]


def session_token():
    return request.cookies.get(current_container().cookie_name)


def current_services() -> Services:
    """Services bound to this request's backend session, built once per request."""
    services = g.get("services")
    if services is None:
        services = current_container().services_for(session_token=session_token(), current_path=request.path)
        g.services = services
    return services


def current_context() -> SessionContext:
    """The signed-in user, fetched from the backend at most once per request."""
    ctx = g.get("session_context")
    if ctx is None:
        ctx = current_services().auth_service.current_context()
        g.session_context = ctx
    return ctx


def register(app: Flask) -> None:
    @app.context_processor
    def inject_session_context():
        # Only what the view already loaded; rendering never triggers a fetch.
        return {"ctx": g.get("session_context")}
