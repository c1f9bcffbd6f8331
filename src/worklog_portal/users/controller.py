from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..api.errors import BackendError, SessionExpiredError, display_message
from ..container import Container
from ..core.exceptions import AuthenticationError, ValidationError
from ..middleware.session_context import current_services, session_token
from .service import safe_redirect_target

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/", endpoint="index")
    def index():
        return redirect(url_for("dashboard"))

    @app.route("/login", methods=["GET", "POST"], endpoint="login")
    def login():
        next_target = request.args.get("from") or request.form.get("from")
        errors: dict[str, str] = {}
        email = ""

        if request.method == "POST":
            email = request.form.get("email", "").strip()
            password = request.form.get("password", "")
            try:
                result = current_services().auth_service.login(email, password)
            except ValidationError as e:
                errors = e.field_errors
                flash(str(e), "danger")
            except AuthenticationError as e:
                flash(str(e), "danger")
            except BackendError as e:
                flash(display_message(e.failure), "danger")
            else:
                if not result.session_token:
                    logger.warning("Backend accepted login for %s but issued no session cookie", email)
                    flash("Login failed: the server did not start a session.", "danger")
                else:
                    response = redirect(safe_redirect_target(next_target))
                    response.set_cookie(
                        container.cookie_name,
                        result.session_token,
                        httponly=True,
                        samesite="Lax",
                        secure=bool(app.config.get("SESSION_COOKIE_SECURE", False)),
                    )
                    flash(f"Welcome back, {result.user.first_name}!", "success")
                    logger.info("User %s signed in", result.user.id)
                    return response

        status = 400 if errors else 200
        return render_template("login.html", email=email, errors=errors, next_target=next_target), status

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        token = session_token()
        try:
            current_services().auth_service.logout()
        except (SessionExpiredError, BackendError) as e:
            # The local session ends either way.
            logger.info("Backend logout failed: %s", e)

        if token:
            container.request_guard.forget_prefix(token)
        response = redirect(url_for("login"))
        response.delete_cookie(container.cookie_name)
        flash("You have been logged out.", "info")
        return response
