from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..api.client import BackendClient, unwrap
from ..core.enums import Role
from .model import Employee, User
from .repository import AuthRepository, EmployeeRepository


def _optional_int(value: Any) -> Optional[int]:
    return int(value) if value is not None else None


def to_user(row: Mapping[str, Any]) -> User:
    return User(
        id=int(row["id"]),
        email=row.get("email") or "",
        first_name=row.get("firstName") or "",
        last_name=row.get("lastName") or "",
        role=Role(row["role"]),
        department_id=_optional_int(row.get("departmentId")),
        department_name=row.get("departmentName") or "",
    )


def to_employee(row: Mapping[str, Any]) -> Employee:
    first_name = row.get("firstName") or ""
    last_name = row.get("lastName") or ""
    full_name = row.get("fullName") or f"{first_name} {last_name}".strip()
    return Employee(
        id=int(row["id"]),
        full_name=full_name,
        email=row.get("email") or "",
        employee_code=row.get("employeeCode") or "",
        first_name=first_name,
        last_name=last_name,
        grade=row.get("grade") or "",
        role=row.get("role") or Role.EMPLOYEE.value,
        team_lead_id=_optional_int(row.get("teamLeadId")),
        team_lead_name=row.get("teamLeadName"),
        department_id=_optional_int(row.get("departmentId")),
        department_name=row.get("departmentName") or "",
        is_active=bool(row.get("isActive", True)),
    )


class HttpAuthRepository(AuthRepository):
    def __init__(self, client: BackendClient):
        self._client = client

    def login(self, email: str, password: str) -> User:
        row = unwrap(self._client.post("/auth/login", json={"email": email, "password": password}))
        return to_user(row)

    def logout(self) -> None:
        unwrap(self._client.post("/auth/logout"))

    def current_user(self) -> User:
        return to_user(unwrap(self._client.get("/auth/me")))

    def issued_session_token(self) -> Optional[str]:
        return self._client.issued_session_token


class HttpEmployeeRepository(EmployeeRepository):
    def __init__(self, client: BackendClient):
        self._client = client

    def _list(self, path: str) -> Sequence[Employee]:
        rows = unwrap(self._client.get(path)) or []
        return [to_employee(r) for r in rows]

    def get_by_id(self, employee_id: int) -> Employee:
        return to_employee(unwrap(self._client.get(f"/employees/{int(employee_id)}")))

    def list_visible(self) -> Sequence[Employee]:
        return self._list("/employees/visible")
