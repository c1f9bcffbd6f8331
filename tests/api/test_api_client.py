from __future__ import annotations

import json
import threading

import httpx
import pytest

from worklog_portal.api.client import ApiSuccess, BackendClient, create_http_client, gather, unwrap
from worklog_portal.api.errors import ApiErrorKind, ApiFailure, BackendError, NETWORK_MESSAGE, SessionExpiredError

BASE_URL = "http://backend.test/api"


def _client(handler, *, token="tok", current_path="/dashboard") -> BackendClient:
    http = create_http_client(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return BackendClient(http, session_token=token, current_path=current_path)


def test_get_drops_none_params_and_sends_session_cookie():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        seen["cookie"] = request.headers.get("cookie")
        return httpx.Response(200, json=[{"id": 1}])

    result = _client(handler).get("/worklogs/team", params={"startDate": "2024-01-01", "employeeId": None})

    assert isinstance(result, ApiSuccess)
    assert result.value == [{"id": 1}]
    assert seen["url"].path == "/api/worklogs/team"
    assert dict(seen["url"].params) == {"startDate": "2024-01-01"}
    assert seen["cookie"] == "JSESSIONID=tok"


def test_anonymous_call_sends_no_cookie():
    seen = {}

    def handler(request):
        seen["cookie"] = request.headers.get("cookie")
        return httpx.Response(200, json={})

    _client(handler, token=None, current_path="/login").post("/auth/login", json={"email": "a@b.co"})
    assert seen["cookie"] is None


def test_login_captures_issued_session_but_shared_client_keeps_no_cookies():
    def handler(request):
        return httpx.Response(200, json={"id": 1}, headers={"set-cookie": "JSESSIONID=fresh; Path=/; HttpOnly"})

    http = create_http_client(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    client = BackendClient(http, current_path="/login")
    client.post("/auth/login", json={})

    assert client.issued_session_token == "fresh"
    assert len(http.cookies) == 0


def test_unauthorized_outside_login_expires_session():
    def handler(request):
        return httpx.Response(401, json={"message": "Session expired"})

    with pytest.raises(SessionExpiredError) as exc:
        _client(handler).get("/auth/me")
    assert exc.value.failure.kind == ApiErrorKind.UNAUTHORIZED


@pytest.mark.parametrize("current_path, path", [("/login", "/auth/me"), ("/dashboard", "/auth/login")])
def test_unauthorized_on_login_flow_is_returned(current_path, path):
    def handler(request):
        return httpx.Response(401, json={"message": "Invalid email or password"})

    result = _client(handler, current_path=current_path).post(path)

    assert isinstance(result, ApiFailure)
    assert result.message == "Invalid email or password"


def test_validation_failure_carries_field_errors():
    def handler(request):
        body = {"message": "Validation failed", "errors": [{"field": "hoursWorked", "message": "must be at most 24"}]}
        return httpx.Response(400, json=body)

    result = _client(handler).post("/worklogs", json={})

    assert result.kind == ApiErrorKind.VALIDATION
    assert result.field_errors == {"hoursWorked": "must be at most 24"}


def test_forbidden_and_server_errors_are_returned():
    statuses = iter([403, 503])

    def handler(request):
        return httpx.Response(next(statuses), text="")

    client = _client(handler)
    assert client.get("/employees/9").kind == ApiErrorKind.FORBIDDEN
    assert client.get("/dashboard").kind == ApiErrorKind.SERVER


def test_transport_error_becomes_network_failure():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    result = _client(handler).get("/dashboard")

    assert result.kind == ApiErrorKind.NETWORK
    assert result.message == NETWORK_MESSAGE
    assert result.status is None


def test_put_sends_json_body():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["body"] = json.loads(request.content)
        return httpx.Response(204)

    result = _client(handler).put("/worklogs/3", json={"hoursWorked": 4})

    assert seen == {"method": "PUT", "body": {"hoursWorked": 4}}
    assert result.value is None


def test_unwrap():
    assert unwrap(ApiSuccess(value=3)) == 3
    failure = ApiFailure(kind=ApiErrorKind.NOT_FOUND, message="Worklog not found", status=404)
    with pytest.raises(BackendError) as exc:
        unwrap(failure)
    assert exc.value.failure is failure
    assert str(exc.value) == "Worklog not found"


def test_gather_runs_in_parallel_and_keeps_order():
    barrier = threading.Barrier(2, timeout=5)

    def first():
        barrier.wait()
        return "first"

    def second():
        barrier.wait()
        return "second"

    assert gather(first, second) == ["first", "second"]


def test_gather_propagates_errors():
    def broken():
        raise BackendError(ApiFailure(kind=ApiErrorKind.SERVER, message="boom"))

    with pytest.raises(BackendError):
        gather(lambda: 1, broken)
