from __future__ import annotations

import logging

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from ..api.errors import ApiErrorKind, BackendError, SessionExpiredError, display_message
from ..core.exceptions import AuthorizationError, DomainError
from .session_context import current_container, session_token

logger = logging.getLogger(__name__)

SESSION_EXPIRED_MESSAGE = "Your session has expired. Please log in again."

_STATUS_FOR_KIND = {
    ApiErrorKind.NOT_FOUND: 404,
    ApiErrorKind.FORBIDDEN: 403,
    ApiErrorKind.NETWORK: 502,
    ApiErrorKind.SERVER: 502,
}


def wants_json() -> bool:
    return request.path.endswith("/data") or request.accept_mimetypes.best == "application/json"


def flash_error(exc: Exception) -> None:
    """Show a failure as a transient notification."""
    if isinstance(exc, BackendError):
        flash(display_message(exc.failure), "danger")
    elif isinstance(exc, DomainError):
        flash(str(exc), "warning" if isinstance(exc, AuthorizationError) else "danger")
    else:
        flash("An unexpected error occurred", "danger")


def register(app: Flask) -> None:
    @app.errorhandler(SessionExpiredError)
    def handle_session_expired(exc: SessionExpiredError):
        container = current_container()
        token = session_token()
        if token:
            container.request_guard.forget_prefix(token)

        if wants_json():
            response = jsonify({"error": "Unauthorized", "message": SESSION_EXPIRED_MESSAGE, "redirect": url_for("login")})
            response.status_code = 401
        else:
            flash(SESSION_EXPIRED_MESSAGE, "warning")
            response = redirect(url_for("login"))
        response.delete_cookie(container.cookie_name)
        return response

    @app.errorhandler(AuthorizationError)
    def handle_forbidden(exc: AuthorizationError):
        if wants_json():
            return jsonify({"error": "Forbidden", "message": str(exc)}), 403
        flash(str(exc), "warning")
        return redirect(url_for("dashboard"))

    @app.errorhandler(BackendError)
    def handle_backend_error(exc: BackendError):
        status = _STATUS_FOR_KIND.get(exc.kind, 400)
        message = display_message(exc.failure)
        if exc.kind in (ApiErrorKind.SERVER, ApiErrorKind.NETWORK):
            logger.error("Unhandled backend failure on %s: %s", request.path, exc.failure)
        if wants_json():
            return jsonify({"error": exc.kind.value, "message": message}), status
        return render_template("error.html", message=message, status=status), status
