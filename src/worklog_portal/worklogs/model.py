from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import format_iso_date


@dataclass(frozen=True)
class WorklogType:
    id: int
    name: str
    code: str = ""
    description: str = ""
    is_active: bool = True


@dataclass(frozen=True)
class Worklog:
    """Hours worked by one employee on one date."""

    id: int
    employee_id: int
    employee_name: str
    worklog_type_id: int
    worklog_type_name: str
    work_date: date
    hours_worked: float
    description: str = ""
    project_name: str = ""
    is_editable: bool = False


@dataclass(frozen=True)
class WorklogDraft:
    """Validated create/update payload."""

    worklog_type_id: int
    work_date: date
    hours_worked: float
    description: str
    project_name: str = ""

    def to_payload(self) -> dict:
        return {
            "worklogTypeId": self.worklog_type_id,
            "workDate": format_iso_date(self.work_date),
            "hoursWorked": self.hours_worked,
            "description": self.description,
            "projectName": self.project_name,
        }


@dataclass(frozen=True)
class DayGroup:
    work_date: date
    worklogs: tuple[Worklog, ...]

    @property
    def total_hours(self) -> float:
        return sum(w.hours_worked for w in self.worklogs)


@dataclass(frozen=True)
class WorklogScope:
    """Which backend listing a viewer's query goes to."""

    name: str
    employee_id: Optional[int] = None
