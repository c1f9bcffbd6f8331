from __future__ import annotations

import json
from typing import Optional, Sequence

from ..core.exceptions import AuthorizationError
from ..users.service import SessionContext
from .model import DepartmentHierarchy, DepartmentSummary, Team, TeamNode
from .repository import DepartmentRepository

EXPAND_ALL = "all"
COLLAPSE_ALL = "none"


def _matches(text: str, term: str) -> bool:
    return bool(term) and term.lower() in (text or "").lower()


def build_team_nodes(hierarchy: DepartmentHierarchy, *, search: str = "", expand: Optional[str] = None) -> list[TeamNode]:
    """Expansion per team: forced by ``expand``, otherwise opened when the search hits the team."""
    term = (search or "").strip()
    nodes = []
    for team in hierarchy.teams:
        lead_matches = _matches(team.team_lead_name, term)
        member_ids = frozenset(m.id for m in team.members if _matches(m.name, term))
        if expand == EXPAND_ALL:
            expanded = True
        elif expand == COLLAPSE_ALL:
            expanded = False
        else:
            expanded = lead_matches or bool(member_ids)
        nodes.append(TeamNode(team=team, expanded=expanded, lead_matches=lead_matches, matching_member_ids=member_ids))
    return nodes


def hierarchy_export(hierarchy: DepartmentHierarchy) -> tuple[str, str]:
    """(filename, JSON document) for the hierarchy download."""
    director = hierarchy.director
    data = {
        "department": hierarchy.department,
        "departmentCode": hierarchy.department_code,
        "director": {"name": director.name, "email": director.email} if director else None,
        "totalEmployees": hierarchy.total_employees,
        "totalTeamLeads": hierarchy.total_team_leads,
        "teams": [_team_export(t) for t in hierarchy.teams],
    }
    code = hierarchy.department_code or "department"
    return f"{code}_hierarchy.json", json.dumps(data, indent=2)


def _team_export(team: Team) -> dict:
    return {
        "teamLead": team.team_lead_name,
        "teamLeadEmail": team.team_lead_email,
        "teamSize": team.team_size,
        "members": [{"name": m.name, "email": m.email, "grade": m.grade} for m in team.members],
    }


class DepartmentService:
    """Use case: browse department hierarchies (directors only)."""

    def __init__(self, departments: DepartmentRepository):
        self._departments = departments

    @staticmethod
    def _require_director(ctx: SessionContext) -> None:
        if not ctx.can_view_department_data:
            raise AuthorizationError("Only directors can view the department hierarchy")

    def list_departments(self, ctx: SessionContext) -> Sequence[DepartmentSummary]:
        self._require_director(ctx)
        return self._departments.list_all()

    def hierarchy(self, ctx: SessionContext, department_id: int) -> DepartmentHierarchy:
        self._require_director(ctx)
        return self._departments.get_hierarchy(department_id)

    @staticmethod
    def default_department_id(ctx: SessionContext, departments: Sequence[DepartmentSummary]) -> Optional[int]:
        """The viewer's own department when it is listed."""
        for d in departments:
            if d.id == ctx.user.department_id:
                return d.id
        return None
