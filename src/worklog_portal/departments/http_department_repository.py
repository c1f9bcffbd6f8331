from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..api.client import BackendClient, unwrap
from .model import DepartmentHierarchy, DepartmentSummary, Person, Team
from .repository import DepartmentRepository


def _to_person(row: Any) -> Optional[Person]:
    if not row:
        return None
    if isinstance(row, str):
        return Person(id=None, name=row)
    return Person(
        id=int(row["id"]) if row.get("id") is not None else None,
        name=row.get("name") or "",
        email=row.get("email") or "",
        grade=row.get("grade") or "",
    )


def to_hierarchy(row: Mapping[str, Any]) -> DepartmentHierarchy:
    return DepartmentHierarchy(
        department=row.get("department") or "",
        department_code=row.get("departmentCode") or "",
        director=_to_person(row.get("director")),
        total_employees=int(row.get("totalEmployees") or 0),
        total_team_leads=int(row.get("totalTeamLeads") or 0),
        teams=tuple(
            Team(
                team_lead_id=int(t["teamLeadId"]),
                team_lead_name=t.get("teamLeadName") or "",
                team_lead_email=t.get("teamLeadEmail") or "",
                team_size=int(t.get("teamSize") or 0),
                members=tuple(p for p in (_to_person(m) for m in t.get("members") or []) if p),
            )
            for t in row.get("teams") or []
        ),
    )


class HttpDepartmentRepository(DepartmentRepository):
    def __init__(self, client: BackendClient):
        self._client = client

    def list_all(self) -> Sequence[DepartmentSummary]:
        rows = unwrap(self._client.get("/departments")) or []
        return [DepartmentSummary(id=int(r["id"]), name=r.get("name") or "", code=r.get("code") or "") for r in rows]

    def get_hierarchy(self, department_id: int) -> DepartmentHierarchy:
        return to_hierarchy(unwrap(self._client.get(f"/departments/{int(department_id)}/hierarchy")))
