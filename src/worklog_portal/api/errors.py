"""Backend failure taxonomy.

Every call made through :class:`~worklog_portal.api.client.BackendClient`
ends in either a success value or an :class:`ApiFailure`; the helpers below
build failures from httpx responses/exceptions and decide which failures get
application-wide treatment.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

import httpx

from ..core.exceptions import DomainError

GENERIC_SERVER_MESSAGE = "Server error. Please try again later."
NETWORK_MESSAGE = "Unable to reach the server. Please check your connection."
UNEXPECTED_MESSAGE = "An unexpected error occurred"

STATUS_MESSAGES = {
    400: "Invalid request. Please check your input.",
    401: "You need to log in to perform this action.",
    403: "You do not have permission to perform this action.",
    404: "The requested resource was not found.",
    409: "A conflict occurred. The resource may already exist.",
    500: GENERIC_SERVER_MESSAGE,
}

LOGIN_PATH = "/auth/login"
LOGIN_PAGE = "/login"


class ApiErrorKind(str, Enum):
    NETWORK = "NETWORK"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    VALIDATION = "VALIDATION"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    SERVER = "SERVER"
    CLIENT = "CLIENT"


class GlobalAction(str, Enum):
    """What the application does with a failure before the view sees it."""

    REDIRECT_TO_LOGIN = "REDIRECT_TO_LOGIN"
    LOG_FORBIDDEN = "LOG_FORBIDDEN"
    NOTIFY_SERVER_ERROR = "NOTIFY_SERVER_ERROR"
    NONE = "NONE"


@dataclass(frozen=True)
class ApiFailure:
    kind: ApiErrorKind
    message: str
    status: Optional[int] = None
    path: str = ""
    field_errors: Mapping[str, str] = field(default_factory=dict)

    ok = False

    @property
    def is_login_request(self) -> bool:
        return LOGIN_PATH in self.path


def kind_for_status(status: int) -> ApiErrorKind:
    if status == 400:
        return ApiErrorKind.VALIDATION
    if status == 401:
        return ApiErrorKind.UNAUTHORIZED
    if status == 403:
        return ApiErrorKind.FORBIDDEN
    if status == 404:
        return ApiErrorKind.NOT_FOUND
    if status == 409:
        return ApiErrorKind.CONFLICT
    if status >= 500:
        return ApiErrorKind.SERVER
    return ApiErrorKind.CLIENT


def status_message(status: Optional[int]) -> str:
    if status is None:
        return UNEXPECTED_MESSAGE
    return STATUS_MESSAGES.get(status, f"An error occurred ({status})")


def extract_error_message(status: Optional[int], payload: Any) -> str:
    """Prefer the backend ``message`` field, then a plain-text body, then the status text."""
    if isinstance(payload, Mapping):
        message = payload.get("message")
        if isinstance(message, str) and message.strip():
            return message
    elif isinstance(payload, str) and payload.strip():
        return payload.strip()
    return status_message(status)


def _field_errors(payload: Any) -> dict[str, str]:
    if not isinstance(payload, Mapping):
        return {}
    errors = payload.get("errors") or payload.get("fieldErrors")
    if isinstance(errors, Mapping):
        return {str(k): str(v) for k, v in errors.items()}
    if isinstance(errors, list):
        out: dict[str, str] = {}
        for item in errors:
            if isinstance(item, Mapping) and item.get("field"):
                out[str(item["field"])] = str(item.get("message") or item.get("defaultMessage") or "")
        return out
    return {}


def decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def failure_from_response(response: httpx.Response, path: str) -> ApiFailure:
    payload = decode_body(response)
    status = response.status_code
    return ApiFailure(
        kind=kind_for_status(status),
        message=extract_error_message(status, payload),
        status=status,
        path=path,
        field_errors=_field_errors(payload) if status == 400 else {},
    )


def failure_from_exception(exc: httpx.HTTPError, path: str) -> ApiFailure:
    return ApiFailure(kind=ApiErrorKind.NETWORK, message=NETWORK_MESSAGE, path=path)


def global_action_for(failure: ApiFailure, current_path: str) -> GlobalAction:
    if failure.kind == ApiErrorKind.UNAUTHORIZED:
        if current_path == LOGIN_PAGE or failure.is_login_request:
            return GlobalAction.NONE
        return GlobalAction.REDIRECT_TO_LOGIN
    if failure.kind == ApiErrorKind.FORBIDDEN:
        return GlobalAction.LOG_FORBIDDEN
    if failure.kind == ApiErrorKind.SERVER:
        return GlobalAction.NOTIFY_SERVER_ERROR
    return GlobalAction.NONE


def display_message(failure: ApiFailure) -> str:
    """Message a view shows for a failure (server errors stay generic)."""
    if failure.kind == ApiErrorKind.SERVER:
        return GENERIC_SERVER_MESSAGE
    return failure.message


class BackendError(DomainError):
    """A backend call failed; carries the failure for the view to present."""

    def __init__(self, failure: ApiFailure):
        super().__init__(failure.message)
        self.failure = failure

    @property
    def kind(self) -> ApiErrorKind:
        return self.failure.kind


class SessionExpiredError(Exception):
    """The backend rejected the session cookie; the user must log in again."""

    def __init__(self, failure: ApiFailure):
        super().__init__(failure.message)
        self.failure = failure
