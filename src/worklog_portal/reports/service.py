from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..api.client import gather
from ..api.errors import BackendError, display_message
from ..common.datetime_utils import DateRange, utilization_rate
from ..core.exceptions import AuthorizationError
from ..users.repository import EmployeeRepository
from ..users.service import SessionContext
from ..users.visibility import can_view_employee
from ..worklogs.service import WorklogService
from . import aggregation
from .model import DashboardView, EmployeeDetailView, TeamView
from .repository import DashboardRepository

logger = logging.getLogger(__name__)


class ReportService:
    """Builds the dashboard, team and employee-detail pages for one viewer."""

    def __init__(
        self,
        dashboards: DashboardRepository,
        employees: EmployeeRepository,
        worklogs: WorklogService,
    ):
        self._dashboards = dashboards
        self._employees = employees
        self._worklogs = worklogs

    def dashboard(self, ctx: SessionContext, date_range: DateRange, *, today: Optional[date] = None) -> DashboardView:
        data, quick = gather(
            lambda: self._dashboards.get_dashboard(start_date=date_range.start, end_date=date_range.end),
            self._quick_stats_or_none,
        )
        period = aggregation.period_info(date_range, now=today)
        return DashboardView(
            data=data,
            quick_stats=quick,
            period=period,
            personal_utilization=utilization_rate(data.period_summary.total_hours, period.expected_hours),
            is_department_view=ctx.can_view_department_data,
            insights=aggregation.performance_insights(data.team_leads) if ctx.can_view_department_data else None,
        )

    def _quick_stats_or_none(self):
        try:
            return self._dashboards.get_quick_stats()
        except BackendError as e:
            logger.warning("Quick stats unavailable: %s", e)
            return None

    def team(
        self,
        ctx: SessionContext,
        date_range: DateRange,
        *,
        employee_id: Optional[int] = None,
        today: Optional[date] = None,
    ) -> TeamView:
        if not ctx.can_view_team_data:
            raise AuthorizationError("You don't have permission to view team data")

        employees, worklogs = gather(
            self._employees.list_visible,
            lambda: self._worklogs.list_for_viewer(ctx.user, date_range, employee_id=employee_id),
        )
        worklogs = aggregation.within_range(worklogs, date_range)

        shown = [e for e in employees if employee_id is None or e.id == employee_id]
        members = aggregation.member_rows(shown, worklogs, date_range)
        stats = [m.stats for m in members]
        return TeamView(
            period=aggregation.period_info(date_range, now=today),
            employees=tuple(employees),
            members=tuple(members),
            team=aggregation.team_stats(stats, date_range),
            compliance=aggregation.compliance(stats),
            breakdown=tuple(aggregation.type_breakdown(worklogs)),
            worklogs=tuple(sorted(worklogs, key=lambda w: (w.work_date, w.id), reverse=True)),
            selected_employee_id=employee_id,
            is_department_view=ctx.can_view_department_data,
        )

    def employee_detail(
        self,
        ctx: SessionContext,
        employee_id: int,
        date_range: DateRange,
        *,
        today: Optional[date] = None,
    ) -> EmployeeDetailView:
        # The permission check needs the fetched employee, so this call runs first.
        employee = self._employees.get_by_id(employee_id)
        if not can_view_employee(ctx.user, employee):
            raise AuthorizationError("You don't have permission to view this employee")

        (worklogs, worklogs_error), dashboard = gather(
            lambda: self._employee_worklogs(ctx, employee.id, date_range),
            lambda: self._employee_dashboard_or_none(employee.id, date_range),
        )
        worklogs = [w for w in aggregation.within_range(worklogs, date_range) if w.employee_id == employee.id]

        return EmployeeDetailView(
            employee=employee,
            period=aggregation.period_info(date_range, now=today),
            stats=aggregation.employee_stats(employee.id, worklogs, date_range.expected_hours),
            breakdown=tuple(aggregation.type_breakdown(worklogs)),
            worklogs=tuple(sorted(worklogs, key=lambda w: (w.work_date, w.id), reverse=True)),
            dashboard=dashboard,
            worklogs_error=worklogs_error,
        )

    def _employee_worklogs(self, ctx: SessionContext, employee_id: int, date_range: DateRange):
        """(worklogs, error message); a failed fetch still renders the page, without logs."""
        try:
            return self._worklogs.list_for_viewer(ctx.user, date_range, employee_id=employee_id), None
        except BackendError as e:
            logger.warning("Worklogs unavailable for employee %s: %s", employee_id, e)
            return [], display_message(e.failure)

    def _employee_dashboard_or_none(self, employee_id: int, date_range: DateRange):
        # Not every role may read another employee's dashboard; the page works without it.
        try:
            return self._dashboards.get_employee_dashboard(
                employee_id, start_date=date_range.start, end_date=date_range.end
            )
        except BackendError as e:
            logger.info("Employee dashboard unavailable for %s: %s", employee_id, e)
            return None
