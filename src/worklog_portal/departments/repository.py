from __future__ import annotations

from typing import Protocol, Sequence

from .model import DepartmentHierarchy, DepartmentSummary


class DepartmentRepository(Protocol):
    def list_all(self) -> Sequence[DepartmentSummary]:
        raise NotImplementedError

    def get_hierarchy(self, department_id: int) -> DepartmentHierarchy:
        raise NotImplementedError
