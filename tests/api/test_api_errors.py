from __future__ import annotations

import httpx
import pytest

from worklog_portal.api.errors import (
    GENERIC_SERVER_MESSAGE,
    UNEXPECTED_MESSAGE,
    ApiErrorKind,
    ApiFailure,
    GlobalAction,
    display_message,
    extract_error_message,
    failure_from_response,
    global_action_for,
    kind_for_status,
    status_message,
)


@pytest.mark.parametrize(
    "status, kind",
    [
        (400, ApiErrorKind.VALIDATION),
        (401, ApiErrorKind.UNAUTHORIZED),
        (403, ApiErrorKind.FORBIDDEN),
        (404, ApiErrorKind.NOT_FOUND),
        (409, ApiErrorKind.CONFLICT),
        (422, ApiErrorKind.CLIENT),
        (500, ApiErrorKind.SERVER),
        (504, ApiErrorKind.SERVER),
    ],
)
def test_kind_for_status(status, kind):
    assert kind_for_status(status) == kind


def test_message_prefers_backend_message_field():
    assert extract_error_message(400, {"message": "Hours exceed daily limit"}) == "Hours exceed daily limit"


def test_message_falls_back_to_plain_body_then_status_text():
    assert extract_error_message(409, "Duplicate worklog") == "Duplicate worklog"
    assert extract_error_message(404, {"message": ""}) == "The requested resource was not found."
    assert extract_error_message(418, None) == "An error occurred (418)"
    assert extract_error_message(None, None) == UNEXPECTED_MESSAGE
    assert status_message(500) == GENERIC_SERVER_MESSAGE


def test_field_errors_only_for_bad_request():
    request = httpx.Request("POST", "http://backend.test/api/worklogs")
    bad = httpx.Response(400, json={"message": "Invalid", "fieldErrors": {"description": "too short"}}, request=request)
    conflict = httpx.Response(409, json={"message": "Exists", "fieldErrors": {"workDate": "taken"}}, request=request)

    assert failure_from_response(bad, "/worklogs").field_errors == {"description": "too short"}
    assert failure_from_response(conflict, "/worklogs").field_errors == {}


def _failure(kind, path="/auth/me"):
    return ApiFailure(kind=kind, message="x", path=path)


def test_global_actions():
    assert global_action_for(_failure(ApiErrorKind.UNAUTHORIZED), "/team") == GlobalAction.REDIRECT_TO_LOGIN
    assert global_action_for(_failure(ApiErrorKind.UNAUTHORIZED), "/login") == GlobalAction.NONE
    assert global_action_for(_failure(ApiErrorKind.UNAUTHORIZED, "/auth/login"), "/team") == GlobalAction.NONE
    assert global_action_for(_failure(ApiErrorKind.FORBIDDEN), "/team") == GlobalAction.LOG_FORBIDDEN
    assert global_action_for(_failure(ApiErrorKind.SERVER), "/team") == GlobalAction.NOTIFY_SERVER_ERROR
    assert global_action_for(_failure(ApiErrorKind.NOT_FOUND), "/team") == GlobalAction.NONE


def test_server_errors_display_generic_message():
    assert display_message(ApiFailure(kind=ApiErrorKind.SERVER, message="NullPointerException")) == GENERIC_SERVER_MESSAGE
    assert display_message(ApiFailure(kind=ApiErrorKind.CONFLICT, message="Exists")) == "Exists"
