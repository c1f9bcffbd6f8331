from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional

from ..api.client import BackendClient, unwrap
from ..common.datetime_utils import format_iso_date, parse_iso_date
from .model import (
    BackendTeamStats,
    DashboardData,
    DashboardUser,
    DepartmentStats,
    PeriodSummary,
    QuickStats,
    RecentWorklog,
    TeamLeadSummary,
    TeamMemberSummary,
    TypeShare,
)
from .repository import DashboardRepository


def _optional_date(value: Any) -> Optional[date]:
    return parse_iso_date(value) if value else None


def _optional_int(value: Any) -> Optional[int]:
    return int(value) if value is not None else None


def to_dashboard(row: Mapping[str, Any]) -> DashboardData:
    user = row.get("currentUser") or {}
    summary = row.get("periodSummary") or {}
    team_stats = row.get("teamStats")
    dept_stats = row.get("departmentStats")

    return DashboardData(
        current_user=DashboardUser(
            id=int(user.get("id") or 0),
            name=user.get("name") or "",
            role=user.get("role") or "",
            department=user.get("department") or "",
        ),
        period_summary=PeriodSummary(
            total_hours=float(summary.get("totalHours") or 0),
            total_days=int(summary.get("totalDays") or 0),
            days_worked=int(summary.get("daysWorked") or 0),
            average_hours_per_day=float(summary.get("averageHoursPerDay") or 0),
            period=summary.get("period") or "",
            start_date=_optional_date(summary.get("startDate")),
            end_date=_optional_date(summary.get("endDate")),
        ),
        type_breakdown=tuple(
            TypeShare(
                type_name=t.get("typeName") or "",
                hours=float(t.get("hours") or 0),
                count=int(t.get("count") or 0),
                percentage=float(t.get("percentage") or 0),
            )
            for t in row.get("worklogTypeBreakdown") or []
        ),
        recent_worklogs=tuple(
            RecentWorklog(
                work_date=parse_iso_date(w["date"]),
                type_name=w.get("type") or "",
                hours=float(w.get("hours") or 0),
                description=w.get("description") or "",
                project_name=w.get("projectName") or "",
            )
            for w in row.get("recentWorklogs") or []
        ),
        team_members=tuple(
            TeamMemberSummary(
                id=int(m["id"]),
                name=m.get("name") or "",
                grade=m.get("grade") or "",
                total_hours=float(m.get("totalHours") or 0),
                days_worked=int(m.get("daysWorked") or 0),
                utilization_rate=float(m.get("utilizationRate") or 0),
            )
            for m in row.get("teamMembers") or []
        ),
        team_stats=BackendTeamStats(
            team_size=int(team_stats.get("teamSize") or 0),
            total_team_hours=float(team_stats.get("totalTeamHours") or 0),
            average_hours_per_member=float(team_stats.get("averageHoursPerMember") or 0),
            team_utilization_rate=float(team_stats.get("teamUtilizationRate") or 0),
        )
        if team_stats
        else None,
        team_leads=tuple(
            TeamLeadSummary(
                id=int(l["id"]),
                name=l.get("name") or "",
                team_size=int(l.get("teamSize") or 0),
                team_total_hours=float(l.get("teamTotalHours") or 0),
                team_utilization_rate=float(l.get("teamUtilizationRate") or 0),
                team_members_with_logs=int(l.get("teamMembersWithLogs") or 0),
            )
            for l in row.get("teamLeads") or []
        ),
        department_stats=DepartmentStats(
            total_employees=int(dept_stats.get("totalEmployees") or 0),
            total_team_leads=int(dept_stats.get("totalTeamLeads") or 0),
            department_total_hours=float(dept_stats.get("departmentTotalHours") or 0),
            department_utilization_rate=float(dept_stats.get("departmentUtilizationRate") or 0),
        )
        if dept_stats
        else None,
    )


def to_quick_stats(row: Mapping[str, Any]) -> QuickStats:
    return QuickStats(
        today_hours=float(row.get("todayHours") or 0),
        week_hours=float(row.get("weekHours") or 0),
        remaining_week_hours=float(row.get("remainingWeekHours") or 0),
        has_logged_today=bool(row.get("hasLoggedToday", False)),
        team_size=_optional_int(row.get("teamSize")),
        team_members_logged_today=_optional_int(row.get("teamMembersLoggedToday")),
    )


class HttpDashboardRepository(DashboardRepository):
    def __init__(self, client: BackendClient):
        self._client = client

    @staticmethod
    def _range(start_date: date, end_date: date) -> dict:
        return {"startDate": format_iso_date(start_date), "endDate": format_iso_date(end_date)}

    def get_dashboard(self, *, start_date: date, end_date: date) -> DashboardData:
        return to_dashboard(unwrap(self._client.get("/dashboard", params=self._range(start_date, end_date))))

    def get_quick_stats(self) -> QuickStats:
        return to_quick_stats(unwrap(self._client.get("/dashboard/stats/quick")))

    def get_employee_dashboard(self, employee_id: int, *, start_date: date, end_date: date) -> DashboardData:
        path = f"/dashboard/employee/{int(employee_id)}"
        return to_dashboard(unwrap(self._client.get(path, params=self._range(start_date, end_date))))
