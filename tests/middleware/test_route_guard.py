from __future__ import annotations

import pytest

from worklog_portal.middleware.route_guard import guard_redirect


@pytest.mark.parametrize("path", ["/api/worklogs/my", "/api/auth/login", "/static/app.css", "/favicon.ico"])
@pytest.mark.parametrize("has_session", [True, False])
def test_unguarded_paths_pass_through(path, has_session):
    assert guard_redirect(path, has_session) is None


def test_anonymous_request_goes_to_login_with_return_path():
    assert guard_redirect("/team", False) == "/login?from=%2Fteam"
    assert guard_redirect("/employees/7", False) == "/login?from=%2Femployees%2F7"
    assert guard_redirect("/", False) == "/login?from=%2F"


def test_login_page_is_public():
    assert guard_redirect("/login", False) is None


def test_signed_in_user_skips_login_and_root():
    assert guard_redirect("/login", True) == "/dashboard"
    assert guard_redirect("/", True) == "/dashboard"


def test_signed_in_user_reaches_pages():
    assert guard_redirect("/dashboard", True) is None
    assert guard_redirect("/departments", True) is None
