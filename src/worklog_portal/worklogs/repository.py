from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Worklog, WorklogDraft, WorklogType


class WorklogRepository(Protocol):
    def list_mine(self, *, start_date: date, end_date: date) -> Sequence[Worklog]:
        raise NotImplementedError

    def list_team(self, *, start_date: date, end_date: date, employee_id: Optional[int] = None) -> Sequence[Worklog]:
        raise NotImplementedError

    def list_department(self, *, start_date: date, end_date: date, employee_id: Optional[int] = None) -> Sequence[Worklog]:
        raise NotImplementedError

    def get_by_id(self, worklog_id: int) -> Worklog:
        raise NotImplementedError

    def create(self, draft: WorklogDraft) -> Worklog:
        raise NotImplementedError

    def update(self, worklog_id: int, draft: WorklogDraft) -> Worklog:
        raise NotImplementedError

    def delete(self, worklog_id: int) -> None:
        raise NotImplementedError


class WorklogTypeRepository(Protocol):
    def list_active(self) -> Sequence[WorklogType]:
        raise NotImplementedError
