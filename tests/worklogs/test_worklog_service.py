from __future__ import annotations

from datetime import date
from typing import Optional

import pytest

from worklog_portal.api.errors import ApiErrorKind, ApiFailure, BackendError
from worklog_portal.common.datetime_utils import DateRange
from worklog_portal.core.enums import Role
from worklog_portal.core.exceptions import AuthorizationError, ValidationError
from worklog_portal.users.model import User
from worklog_portal.worklogs.model import Worklog, WorklogDraft, WorklogType
from worklog_portal.worklogs.service import WorklogService, group_by_date, parse_worklog_form, scope_for

TODAY = date(2024, 1, 3)
WEEK = DateRange.parse("2024-01-01", "2024-01-07")

VALID_FORM = {
    "worklogTypeId": "2",
    "workDate": "2024-01-02",
    "hoursWorked": "7.5",
    "projectName": " Apollo ",
    "description": "Implemented the export endpoint",
}


def _user(role: Role) -> User:
    return User(id=1, email="u@corp.test", first_name="U", last_name="One", role=role, department_id=10)


def _worklog(worklog_id: int, day: str, hours: float = 8, *, editable: bool = True) -> Worklog:
    return Worklog(
        id=worklog_id,
        employee_id=1,
        employee_name="U One",
        worklog_type_id=2,
        worklog_type_name="Development",
        work_date=date.fromisoformat(day),
        hours_worked=hours,
        description="Some meaningful work",
        is_editable=editable,
    )


class InMemoryWorklogs:
    def __init__(self, items=(), *, save_failure: Optional[ApiFailure] = None):
        self.items = {w.id: w for w in items}
        self.calls: list[tuple] = []
        self._save_failure = save_failure

    def list_mine(self, *, start_date, end_date):
        self.calls.append(("my", start_date, end_date))
        return list(self.items.values())

    def list_team(self, *, start_date, end_date, employee_id=None):
        self.calls.append(("team", start_date, end_date, employee_id))
        return list(self.items.values())

    def list_department(self, *, start_date, end_date, employee_id=None):
        self.calls.append(("department", start_date, end_date, employee_id))
        return list(self.items.values())

    def get_by_id(self, worklog_id):
        return self.items[worklog_id]

    def create(self, draft: WorklogDraft):
        if self._save_failure:
            raise BackendError(self._save_failure)
        self.calls.append(("create", draft))
        return _worklog(99, draft.work_date.isoformat(), draft.hours_worked)

    def update(self, worklog_id, draft: WorklogDraft):
        self.calls.append(("update", worklog_id, draft))
        return self.items[worklog_id]

    def delete(self, worklog_id):
        self.calls.append(("delete", worklog_id))
        self.items.pop(worklog_id)


class InMemoryTypes:
    def list_active(self):
        return [WorklogType(id=1, name="Meeting"), WorklogType(id=2, name="Development"), WorklogType(id=3, name="Old", is_active=False)]


def test_parse_valid_form():
    draft = parse_worklog_form(VALID_FORM, today=TODAY)
    assert draft.worklog_type_id == 2
    assert draft.work_date == date(2024, 1, 2)
    assert draft.hours_worked == 7.5
    assert draft.project_name == "Apollo"
    assert draft.to_payload()["workDate"] == "2024-01-02"


def test_parse_collects_every_field_error():
    with pytest.raises(ValidationError) as exc:
        parse_worklog_form({"worklogTypeId": "", "workDate": "", "hoursWorked": "", "description": "short"}, today=TODAY)
    assert set(exc.value.field_errors) == {"worklogTypeId", "workDate", "hoursWorked", "description"}
    assert exc.value.field_errors["hoursWorked"] == "Hours worked is required"


def test_future_date_is_rejected():
    with pytest.raises(ValidationError) as exc:
        parse_worklog_form({**VALID_FORM, "workDate": "2024-01-04"}, today=TODAY)
    assert exc.value.field_errors == {"workDate": "Date cannot be in the future"}


@pytest.mark.parametrize("hours", ["0", "24.5", "-2"])
def test_hours_must_be_within_a_day(hours):
    with pytest.raises(ValidationError) as exc:
        parse_worklog_form({**VALID_FORM, "hoursWorked": hours}, today=TODAY)
    assert exc.value.field_errors == {"hoursWorked": "Hours must be between 0 and 24"}


def test_a_full_day_is_allowed():
    assert parse_worklog_form({**VALID_FORM, "hoursWorked": "24"}, today=TODAY).hours_worked == 24


def test_scope_follows_role():
    assert scope_for(_user(Role.EMPLOYEE), 5).name == "my"
    assert scope_for(_user(Role.EMPLOYEE), 5).employee_id is None
    assert scope_for(_user(Role.TEAM_LEAD), 5).name == "team"
    assert scope_for(_user(Role.DIRECTOR)).name == "department"


def test_list_for_viewer_routes_to_scoped_listing():
    repo = InMemoryWorklogs([_worklog(1, "2024-01-02")])
    service = WorklogService(repo, InMemoryTypes())

    service.list_for_viewer(_user(Role.TEAM_LEAD), WEEK, employee_id=7)
    service.list_for_viewer(_user(Role.DIRECTOR), WEEK)
    service.list_for_viewer(_user(Role.EMPLOYEE), WEEK, employee_id=7)

    assert [c[0] for c in repo.calls] == ["team", "department", "my"]
    assert repo.calls[0][3] == 7


def test_group_by_date_newest_first_with_totals():
    groups = group_by_date([_worklog(1, "2024-01-02", 4), _worklog(2, "2024-01-03", 8), _worklog(3, "2024-01-02", 3.5)])
    assert [g.work_date for g in groups] == [date(2024, 1, 3), date(2024, 1, 2)]
    assert groups[1].total_hours == 7.5
    assert [w.id for w in groups[1].worklogs] == [1, 3]


def test_active_types_hide_inactive():
    service = WorklogService(InMemoryWorklogs(), InMemoryTypes())
    assert [t.name for t in service.active_types()] == ["Meeting", "Development"]


def test_create_sends_validated_draft():
    repo = InMemoryWorklogs()
    WorklogService(repo, InMemoryTypes()).create(VALID_FORM, today=TODAY)
    kind, draft = repo.calls[0]
    assert kind == "create"
    assert draft.description == "Implemented the export endpoint"


def test_backend_field_errors_become_validation_error():
    failure = ApiFailure(
        kind=ApiErrorKind.VALIDATION,
        message="Validation failed",
        status=400,
        field_errors={"workDate": "Worklog already exists for this date"},
    )
    service = WorklogService(InMemoryWorklogs(save_failure=failure), InMemoryTypes())
    with pytest.raises(ValidationError) as exc:
        service.create(VALID_FORM, today=TODAY)
    assert exc.value.field_errors == {"workDate": "Worklog already exists for this date"}


def test_backend_conflict_is_not_a_validation_error():
    failure = ApiFailure(kind=ApiErrorKind.CONFLICT, message="Duplicate", status=409)
    service = WorklogService(InMemoryWorklogs(save_failure=failure), InMemoryTypes())
    with pytest.raises(BackendError):
        service.create(VALID_FORM, today=TODAY)


def test_locked_worklog_cannot_be_edited():
    repo = InMemoryWorklogs([_worklog(1, "2024-01-02", editable=False)])
    service = WorklogService(repo, InMemoryTypes())
    with pytest.raises(AuthorizationError):
        service.update(1, VALID_FORM, today=TODAY)
    assert repo.calls == []


def test_update_and_delete():
    repo = InMemoryWorklogs([_worklog(1, "2024-01-02")])
    service = WorklogService(repo, InMemoryTypes())
    service.update(1, VALID_FORM, today=TODAY)
    service.delete(1)
    assert [c[0] for c in repo.calls] == ["update", "delete"]


def test_form_defaults_from_existing_worklog():
    values = WorklogService.form_defaults(_worklog(1, "2024-01-02", 7.5))
    assert values["workDate"] == "2024-01-02"
    assert values["hoursWorked"] == "7.5"
    assert WorklogService.form_defaults(today=TODAY)["workDate"] == "2024-01-03"
