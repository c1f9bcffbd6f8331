from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """The signed-in account as the backend reports it (``/auth/me``).

    Read-only for the whole request; role decides the visibility scope.
    """

    id: int
    email: str
    first_name: str
    last_name: str
    role: Role
    department_id: Optional[int]
    department_name: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def initials(self) -> str:
        return f"{self.first_name[:1]}{self.last_name[:1]}".upper()


@dataclass(frozen=True)
class Employee:
    """Employee profile used for visibility checks and team tables."""

    id: int
    full_name: str
    email: str = ""
    employee_code: str = ""
    first_name: str = ""
    last_name: str = ""
    grade: str = ""
    role: str = Role.EMPLOYEE.value
    team_lead_id: Optional[int] = None
    team_lead_name: Optional[str] = None
    department_id: Optional[int] = None
    department_name: str = ""
    is_active: bool = True
