from __future__ import annotations

from datetime import date
from itertools import groupby
from typing import Mapping, Optional, Sequence

from ..api.errors import ApiErrorKind, BackendError
from ..common.datetime_utils import DateRange, format_iso_date, parse_iso_date, today_local
from ..common.validators import require_min_length, require_number_in_range, require_positive_int
from ..core.constants import DESCRIPTION_MIN_LENGTH, MAX_HOURS_PER_ENTRY
from ..core.exceptions import AuthorizationError, InvalidDateError, ValidationError
from ..users.model import User
from ..users.visibility import can_view_department_data, can_view_team_data
from .model import DayGroup, Worklog, WorklogDraft, WorklogScope, WorklogType
from .repository import WorklogRepository, WorklogTypeRepository

FORM_FIELDS = ("worklogTypeId", "workDate", "hoursWorked", "projectName", "description")


def scope_for(user: User, employee_id: Optional[int] = None) -> WorklogScope:
    """Directors read the department listing, team leads the team listing, everyone else their own."""
    if can_view_department_data(user):
        return WorklogScope(name="department", employee_id=employee_id)
    if can_view_team_data(user):
        return WorklogScope(name="team", employee_id=employee_id)
    return WorklogScope(name="my")


def group_by_date(worklogs: Sequence[Worklog]) -> list[DayGroup]:
    """Newest date first; entries keep their order within a day."""
    ordered = sorted(worklogs, key=lambda w: w.work_date, reverse=True)
    return [DayGroup(work_date=day, worklogs=tuple(items)) for day, items in groupby(ordered, key=lambda w: w.work_date)]


def total_hours(worklogs: Sequence[Worklog]) -> float:
    return sum(w.hours_worked for w in worklogs)


def parse_worklog_form(form: Mapping[str, str], *, today: Optional[date] = None) -> WorklogDraft:
    """Validate the worklog form; all field problems are reported together."""
    today = today or today_local()
    errors: dict[str, str] = {}

    type_id = 0
    try:
        type_id = require_positive_int(form.get("worklogTypeId"), "Work type")
    except ValidationError:
        errors["worklogTypeId"] = "Please select a work type"

    work_date: Optional[date] = None
    raw_date = (form.get("workDate") or "").strip()
    if not raw_date:
        errors["workDate"] = "Please select a date"
    else:
        try:
            work_date = parse_iso_date(raw_date)
            if work_date > today:
                errors["workDate"] = "Date cannot be in the future"
        except InvalidDateError:
            errors["workDate"] = "Please select a valid date"

    hours = 0.0
    try:
        hours = require_number_in_range(form.get("hoursWorked"), "Hours", minimum=0, maximum=MAX_HOURS_PER_ENTRY)
    except ValidationError:
        if not (form.get("hoursWorked") or "").strip():
            errors["hoursWorked"] = "Hours worked is required"
        else:
            errors["hoursWorked"] = f"Hours must be between 0 and {MAX_HOURS_PER_ENTRY}"

    description = ""
    try:
        description = require_min_length(form.get("description"), "Description", DESCRIPTION_MIN_LENGTH)
    except ValidationError as e:
        errors["description"] = str(e)

    if errors:
        raise ValidationError("Please correct the highlighted fields", errors)

    return WorklogDraft(
        worklog_type_id=type_id,
        work_date=work_date,
        hours_worked=hours,
        description=description,
        project_name=(form.get("projectName") or "").strip(),
    )


class WorklogService:
    """Use case: list, create, edit and delete worklogs."""

    def __init__(self, worklogs: WorklogRepository, types: WorklogTypeRepository):
        self._worklogs = worklogs
        self._types = types

    def list_mine(self, date_range: DateRange) -> Sequence[Worklog]:
        return self._worklogs.list_mine(start_date=date_range.start, end_date=date_range.end)

    def list_for_viewer(self, viewer: User, date_range: DateRange, *, employee_id: Optional[int] = None) -> Sequence[Worklog]:
        scope = scope_for(viewer, employee_id)
        if scope.name == "department":
            return self._worklogs.list_department(
                start_date=date_range.start,
                end_date=date_range.end,
                employee_id=scope.employee_id,
            )
        if scope.name == "team":
            return self._worklogs.list_team(
                start_date=date_range.start,
                end_date=date_range.end,
                employee_id=scope.employee_id,
            )
        return self.list_mine(date_range)

    def active_types(self) -> Sequence[WorklogType]:
        return [t for t in self._types.list_active() if t.is_active]

    def get_editable(self, worklog_id: int) -> Worklog:
        worklog = self._worklogs.get_by_id(worklog_id)
        if not worklog.is_editable:
            raise AuthorizationError("This worklog can no longer be edited")
        return worklog

    def create(self, form: Mapping[str, str], *, today: Optional[date] = None) -> Worklog:
        draft = parse_worklog_form(form, today=today)
        return self._save(lambda: self._worklogs.create(draft))

    def update(self, worklog_id: int, form: Mapping[str, str], *, today: Optional[date] = None) -> Worklog:
        self.get_editable(worklog_id)
        draft = parse_worklog_form(form, today=today)
        return self._save(lambda: self._worklogs.update(worklog_id, draft))

    def delete(self, worklog_id: int) -> None:
        self._worklogs.delete(worklog_id)

    @staticmethod
    def _save(call):
        try:
            return call()
        except BackendError as e:
            if e.kind == ApiErrorKind.VALIDATION:
                raise ValidationError(e.failure.message, e.failure.field_errors)
            raise

    @staticmethod
    def form_defaults(worklog: Optional[Worklog] = None, *, today: Optional[date] = None) -> dict[str, str]:
        if worklog is None:
            return {
                "worklogTypeId": "",
                "workDate": format_iso_date(today or today_local()),
                "hoursWorked": "",
                "projectName": "",
                "description": "",
            }
        return {
            "worklogTypeId": str(worklog.worklog_type_id),
            "workDate": format_iso_date(worklog.work_date),
            "hoursWorked": f"{worklog.hours_worked:g}",
            "projectName": worklog.project_name,
            "description": worklog.description,
        }
