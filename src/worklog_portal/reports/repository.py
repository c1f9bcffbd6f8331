from __future__ import annotations

from datetime import date
from typing import Protocol

from .model import DashboardData, QuickStats


class DashboardRepository(Protocol):
    def get_dashboard(self, *, start_date: date, end_date: date) -> DashboardData:
        raise NotImplementedError

    def get_quick_stats(self) -> QuickStats:
        raise NotImplementedError

    def get_employee_dashboard(self, employee_id: int, *, start_date: date, end_date: date) -> DashboardData:
        raise NotImplementedError
