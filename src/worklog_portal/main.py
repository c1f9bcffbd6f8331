from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .common.datetime_utils import progress_bar_css_class, utilization_css_class
from .config import get_settings_module
from .container import Container, build_container
from .departments.controller import register as register_departments
from .middleware import api_proxy, error_handler, route_guard, session_context
from .reports.aggregation import compliance_css_class, lead_compliance_rate
from .reports.controller import register as register_reports
from .users.controller import register as register_users
from .users.visibility import role_display_name
from .worklogs.controller import register as register_worklogs

logger = logging.getLogger(__name__)


def format_hours(value) -> str:
    """``8`` renders as ``8h``, ``7.5`` as ``7.5h``."""
    return f"{float(value or 0):g}h"


def format_percent(value) -> str:
    return f"{float(value or 0):.0f}%"


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["BACKEND_SESSION_COOKIE"] = getattr(settings, "BACKEND_SESSION_COOKIE")
    app.config["SESSION_COOKIE_SECURE"] = bool(getattr(settings, "SESSION_COOKIE_SECURE", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        container = build_container(
            api_base_url=getattr(settings, "API_BASE_URL"),
            timeout=float(getattr(settings, "API_TIMEOUT_SECONDS", 10)),
            cookie_name=app.config["BACKEND_SESSION_COOKIE"],
        )
    app.extensions[session_context.EXTENSION_KEY] = container
    logger.info("worklog-portal settings=%s backend=%s", settings_module, container.http.base_url)

    app.jinja_env.filters["hours"] = format_hours
    app.jinja_env.filters["percent"] = format_percent
    app.jinja_env.filters["utilization_class"] = utilization_css_class
    app.jinja_env.filters["progress_class"] = progress_bar_css_class
    app.jinja_env.filters["compliance_class"] = compliance_css_class
    app.jinja_env.filters["role_label"] = role_display_name
    app.jinja_env.globals["lead_compliance"] = lead_compliance_rate

    route_guard.register(app, cookie_name=container.cookie_name)
    session_context.register(app)
    error_handler.register(app)
    api_proxy.register(app, container)

    register_users(app, container)
    register_worklogs(app, container)
    register_reports(app, container)
    register_departments(app, container)

    return app
