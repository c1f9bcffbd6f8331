from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..api.client import BackendClient, unwrap
from ..common.datetime_utils import format_iso_date, parse_iso_date
from .model import Worklog, WorklogDraft, WorklogType
from .repository import WorklogRepository, WorklogTypeRepository


def to_worklog(row: Mapping[str, Any]) -> Worklog:
    return Worklog(
        id=int(row["id"]),
        employee_id=int(row["employeeId"]),
        employee_name=row.get("employeeName") or "",
        worklog_type_id=int(row.get("worklogTypeId") or 0),
        worklog_type_name=row.get("worklogTypeName") or "",
        work_date=parse_iso_date(row["workDate"]),
        hours_worked=float(row.get("hoursWorked") or 0),
        description=row.get("description") or "",
        project_name=row.get("projectName") or "",
        is_editable=bool(row.get("isEditable", False)),
    )


def to_worklog_type(row: Mapping[str, Any]) -> WorklogType:
    return WorklogType(
        id=int(row["id"]),
        name=row.get("name") or "",
        code=row.get("code") or "",
        description=row.get("description") or "",
        is_active=bool(row.get("isActive", True)),
    )


class HttpWorklogRepository(WorklogRepository):
    def __init__(self, client: BackendClient):
        self._client = client

    def _list(self, path: str, params: dict) -> Sequence[Worklog]:
        rows = unwrap(self._client.get(path, params=params)) or []
        return [to_worklog(r) for r in rows]

    @staticmethod
    def _range(start_date: date, end_date: date) -> dict:
        return {"startDate": format_iso_date(start_date), "endDate": format_iso_date(end_date)}

    def list_mine(self, *, start_date: date, end_date: date) -> Sequence[Worklog]:
        return self._list("/worklogs/my", self._range(start_date, end_date))

    def list_team(self, *, start_date: date, end_date: date, employee_id: Optional[int] = None) -> Sequence[Worklog]:
        params = self._range(start_date, end_date)
        params["employeeId"] = employee_id
        return self._list("/worklogs/team", params)

    def list_department(self, *, start_date: date, end_date: date, employee_id: Optional[int] = None) -> Sequence[Worklog]:
        params = self._range(start_date, end_date)
        params["employeeId"] = employee_id
        return self._list("/worklogs/department", params)

    def get_by_id(self, worklog_id: int) -> Worklog:
        return to_worklog(unwrap(self._client.get(f"/worklogs/{int(worklog_id)}")))

    def create(self, draft: WorklogDraft) -> Worklog:
        return to_worklog(unwrap(self._client.post("/worklogs", json=draft.to_payload())))

    def update(self, worklog_id: int, draft: WorklogDraft) -> Worklog:
        return to_worklog(unwrap(self._client.put(f"/worklogs/{int(worklog_id)}", json=draft.to_payload())))

    def delete(self, worklog_id: int) -> None:
        unwrap(self._client.delete(f"/worklogs/{int(worklog_id)}"))


class HttpWorklogTypeRepository(WorklogTypeRepository):
    def __init__(self, client: BackendClient):
        self._client = client

    def list_active(self) -> Sequence[WorklogType]:
        rows = unwrap(self._client.get("/worklog-types")) or []
        return [to_worklog_type(r) for r in rows]
