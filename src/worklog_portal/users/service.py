from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

from ..api.errors import ApiErrorKind, BackendError
from ..common.validators import require_email, require_non_empty
from ..core.exceptions import AuthenticationError, ValidationError
from . import visibility
from .model import User
from .repository import AuthRepository

DEFAULT_LANDING = "/dashboard"


@dataclass(frozen=True)
class SessionContext:
    """Who is viewing, resolved once per request and passed to services."""

    user: User

    @property
    def can_view_team_data(self) -> bool:
        return visibility.can_view_team_data(self.user)

    @property
    def can_view_department_data(self) -> bool:
        return visibility.can_view_department_data(self.user)

    @property
    def role_label(self) -> str:
        return visibility.role_display_name(self.user.role)

    @property
    def navigation(self) -> list[tuple[str, str]]:
        return visibility.navigation_for(self.user)


@dataclass(frozen=True)
class LoginResult:
    user: User
    session_token: Optional[str]


def safe_redirect_target(target: Optional[str]) -> str:
    """Only same-site absolute paths are followed after login."""
    if not target:
        return DEFAULT_LANDING
    parts = urlsplit(target)
    if parts.scheme or parts.netloc or not target.startswith("/") or target.startswith("//"):
        return DEFAULT_LANDING
    if target.startswith("/login"):
        return DEFAULT_LANDING
    return target


class AuthService:
    """Use case: authenticate user (login/logout) and resolve the session user."""

    def __init__(self, auth: AuthRepository):
        self._auth = auth

    def login(self, email: str, password: str) -> LoginResult:
        errors: dict[str, str] = {}
        try:
            email = require_email(email)
        except ValidationError as e:
            errors["email"] = str(e)
        try:
            require_non_empty(password, "Password")
        except ValidationError as e:
            errors["password"] = str(e)
        if errors:
            raise ValidationError("Please correct the highlighted fields", errors)

        try:
            user = self._auth.login(email, password)
        except BackendError as e:
            if e.kind in (ApiErrorKind.UNAUTHORIZED, ApiErrorKind.VALIDATION):
                raise AuthenticationError(e.failure.message or "Invalid email or password")
            raise

        return LoginResult(user=user, session_token=self._auth.issued_session_token())

    def logout(self) -> None:
        self._auth.logout()

    def current_context(self) -> SessionContext:
        return SessionContext(user=self._auth.current_user())
