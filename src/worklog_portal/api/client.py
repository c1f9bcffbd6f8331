from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from http.cookiejar import CookieJar, DefaultCookiePolicy
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar, Union

import httpx

from ..core.constants import DEFAULT_SESSION_COOKIE
from .errors import (
    ApiFailure,
    BackendError,
    GlobalAction,
    SessionExpiredError,
    decode_body,
    failure_from_exception,
    failure_from_response,
    global_action_for,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ApiSuccess(Generic[T]):
    value: T
    status: int = 200

    ok = True


ApiResult = Union[ApiSuccess[T], ApiFailure]


def unwrap(result: "ApiResult[T]") -> T:
    """Return the success value or raise :class:`BackendError`."""
    if isinstance(result, ApiFailure):
        raise BackendError(result)
    return result.value


def create_http_client(*, base_url: str, timeout: float = 10.0, transport: Optional[httpx.BaseTransport] = None) -> httpx.Client:
    """Shared connection pool; one per application.

    The client never stores cookies: session cookies belong to the browser and
    are attached per request by :class:`BackendClient`.
    """
    return httpx.Client(
        base_url=base_url,
        cookies=CookieJar(policy=DefaultCookiePolicy(allowed_domains=[])),
        timeout=timeout,
        transport=transport,
        headers={"Content-Type": "application/json", "Accept": "application/json"},
    )


class BackendClient:
    """Request-scoped wrapper around the shared httpx client.

    Carries the caller's session cookie and current page path. Every call
    returns an :class:`ApiSuccess` or an :class:`ApiFailure`; a 401 outside the
    login flow raises :class:`SessionExpiredError` instead.
    """

    def __init__(
        self,
        http: httpx.Client,
        *,
        session_token: Optional[str] = None,
        current_path: str = "/",
        cookie_name: str = DEFAULT_SESSION_COOKIE,
    ):
        self._http = http
        self._session_token = session_token
        self._current_path = current_path
        self._cookie_name = cookie_name
        self.issued_session_token: Optional[str] = None

    @property
    def session_token(self) -> Optional[str]:
        return self._session_token

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> ApiResult[Any]:
        return self._request("GET", path, params=params)

    def post(self, path: str, json: Any = None) -> ApiResult[Any]:
        return self._request("POST", path, json=json)

    def put(self, path: str, json: Any = None) -> ApiResult[Any]:
        return self._request("PUT", path, json=json)

    def delete(self, path: str) -> ApiResult[Any]:
        return self._request("DELETE", path)

    def _headers(self) -> dict[str, str]:
        if not self._session_token:
            return {}
        return {"Cookie": f"{self._cookie_name}={self._session_token}"}

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
    ) -> ApiResult[Any]:
        query = {k: v for k, v in (params or {}).items() if v is not None}
        try:
            response = self._http.request(method, path, params=query, json=json, headers=self._headers())
        except httpx.HTTPError as exc:
            logger.warning("Backend unreachable: %s %s (%s)", method, path, exc)
            return failure_from_exception(exc, path)

        if response.is_success:
            token = response.cookies.get(self._cookie_name)
            if token:
                self.issued_session_token = token
            return ApiSuccess(value=decode_body(response), status=response.status_code)

        failure = failure_from_response(response, path)
        self._apply_global_policy(method, failure)
        return failure

    def _apply_global_policy(self, method: str, failure: ApiFailure) -> None:
        action = global_action_for(failure, self._current_path)
        if action == GlobalAction.REDIRECT_TO_LOGIN:
            logger.info("Session rejected by backend on %s %s", method, failure.path)
            raise SessionExpiredError(failure)
        if action == GlobalAction.LOG_FORBIDDEN:
            logger.warning("Access denied: %s", failure.message)
        elif action == GlobalAction.NOTIFY_SERVER_ERROR:
            logger.error("Backend error %s on %s %s: %s", failure.status, method, failure.path, failure.message)


def gather(*calls: Callable[[], Any]) -> list[Any]:
    """Run independent fetches in parallel and return their results in order.

    The first exception raised by any call propagates once all calls finish.
    """
    if len(calls) <= 1:
        return [call() for call in calls]
    with ThreadPoolExecutor(max_workers=len(calls)) as pool:
        futures = [pool.submit(call) for call in calls]
    return [f.result() for f in futures]
