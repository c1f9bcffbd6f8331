from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee, User


class AuthRepository(Protocol):
    """Repository interface for the backend session endpoints.

    Services depend on this interface, not on the HTTP implementation.
    """

    def login(self, email: str, password: str) -> User:
        raise NotImplementedError

    def logout(self) -> None:
        raise NotImplementedError

    def current_user(self) -> User:
        raise NotImplementedError

    def issued_session_token(self) -> Optional[str]:
        raise NotImplementedError


class EmployeeRepository(Protocol):
    def get_by_id(self, employee_id: int) -> Employee:
        raise NotImplementedError

    def list_visible(self) -> Sequence[Employee]:
        raise NotImplementedError
