"""Role-based visibility rules.

Pure predicates mapping a viewer's role to the data scope they may see:
themselves, their team (team leads and directors) or their department
(directors only).
"""
from __future__ import annotations

from typing import Iterable, Optional, Protocol

from ..core.enums import Role
from .model import User


class VisibilityTarget(Protocol):
    id: int
    department_id: Optional[int]
    team_lead_id: Optional[int]


ROLE_DISPLAY_NAMES = {
    Role.EMPLOYEE: "Employee",
    Role.TEAM_LEAD: "Team Lead",
    Role.DIRECTOR: "Director",
}


def has_role(user: Optional[User], roles: Iterable[Role]) -> bool:
    if user is None:
        return False
    return user.role in set(roles)


def can_view_team_data(user: Optional[User]) -> bool:
    return has_role(user, (Role.TEAM_LEAD, Role.DIRECTOR))


def can_view_department_data(user: Optional[User]) -> bool:
    return has_role(user, (Role.DIRECTOR,))


def can_view_employee(viewer: Optional[User], target: VisibilityTarget) -> bool:
    if viewer is None:
        return False

    # Users can always view their own data
    if viewer.id == target.id:
        return True

    if can_view_department_data(viewer) and viewer.department_id is not None and viewer.department_id == target.department_id:
        return True

    if can_view_team_data(viewer) and target.team_lead_id is not None and target.team_lead_id == viewer.id:
        return True

    return False


def role_display_name(role) -> str:
    try:
        return ROLE_DISPLAY_NAMES[Role(role)]
    except ValueError:
        return str(role)


def navigation_for(user: Optional[User]) -> list[tuple[str, str]]:
    """(label, endpoint) pairs for the top navigation bar."""
    items = [("Dashboard", "dashboard"), ("My Worklogs", "worklogs")]
    if can_view_team_data(user):
        items.append(("Team", "team"))
    if can_view_department_data(user):
        items.append(("Departments", "departments"))
    return items
