"""Aggregation of worklogs into per-employee and per-team statistics.

All functions are pure. Every ratio guards its zero denominator and yields 0,
so pages can render a percentage or average unconditionally.
"""
from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import DateRange, utilization_rate
from ..core.constants import COMPLIANCE_THRESHOLDS
from ..users.model import Employee
from ..worklogs.model import Worklog
from .model import (
    ComplianceStats,
    EmployeeStats,
    MemberRow,
    PerformanceInsights,
    PeriodInfo,
    TeamLeadSummary,
    TeamStats,
    TypeShare,
)


def _ratio(numerator: float, denominator: float) -> float:
    if denominator <= 0:
        return 0.0
    return numerator / denominator


def period_info(date_range: DateRange, *, now=None) -> PeriodInfo:
    return PeriodInfo(
        date_range=date_range,
        working_days=date_range.working_days,
        expected_hours=date_range.expected_hours,
        description=date_range.description(now),
    )


def within_range(worklogs: Iterable[Worklog], date_range: DateRange) -> list[Worklog]:
    return [w for w in worklogs if date_range.contains(w.work_date)]


def group_by_employee(worklogs: Iterable[Worklog]) -> dict[int, list[Worklog]]:
    grouped: dict[int, list[Worklog]] = defaultdict(list)
    for w in worklogs:
        grouped[w.employee_id].append(w)
    return dict(grouped)


def employee_stats(employee_id: int, worklogs: Sequence[Worklog], expected_hours: float) -> EmployeeStats:
    """Stats for one employee; ``worklogs`` must already be that employee's."""
    total = sum(w.hours_worked for w in worklogs)
    days = len({w.work_date for w in worklogs})
    return EmployeeStats(
        employee_id=employee_id,
        total_hours=total,
        days_worked=days,
        average_hours=_ratio(total, days),
        utilization_rate=utilization_rate(total, expected_hours),
    )


def member_rows(employees: Sequence[Employee], worklogs: Iterable[Worklog], date_range: DateRange) -> list[MemberRow]:
    """One row per employee, in the given order; employees without logs get zeros."""
    by_employee = group_by_employee(within_range(worklogs, date_range))
    expected = date_range.expected_hours
    return [
        MemberRow(employee=e, stats=employee_stats(e.id, by_employee.get(e.id, []), expected))
        for e in employees
    ]


def team_stats(stats: Sequence[EmployeeStats], date_range: DateRange) -> TeamStats:
    member_count = len(stats)
    total = sum(s.total_hours for s in stats)
    team_expected = date_range.expected_hours * member_count
    return TeamStats(
        member_count=member_count,
        total_hours=total,
        average_hours_per_member=_ratio(total, member_count),
        utilization_rate=utilization_rate(total, team_expected),
        expected_hours=team_expected,
    )


def type_breakdown(worklogs: Iterable[Worklog]) -> list[TypeShare]:
    """Hours per work type, largest first."""
    hours: dict[str, float] = defaultdict(float)
    counts: dict[str, int] = defaultdict(int)
    for w in worklogs:
        hours[w.worklog_type_name] += w.hours_worked
        counts[w.worklog_type_name] += 1

    total = sum(hours.values())
    shares = [
        TypeShare(type_name=name, hours=h, count=counts[name], percentage=_ratio(h, total) * 100)
        for name, h in hours.items()
    ]
    shares.sort(key=lambda s: (-s.hours, s.type_name))
    return shares


def compliance(stats: Sequence[EmployeeStats]) -> ComplianceStats:
    with_logs = sum(1 for s in stats if s.total_hours > 0)
    return ComplianceStats(
        total_employees=len(stats),
        employees_with_logs=with_logs,
        compliance_rate=_ratio(with_logs, len(stats)) * 100,
    )


def lead_compliance_rate(lead: TeamLeadSummary) -> float:
    return _ratio(lead.team_members_with_logs, lead.team_size) * 100


def compliance_css_class(rate: float) -> str:
    high, fair = COMPLIANCE_THRESHOLDS
    if rate >= high:
        return "text-success"
    if rate >= fair:
        return "text-warning"
    return "text-danger"


def performance_insights(leads: Sequence[TeamLeadSummary]) -> Optional[PerformanceInsights]:
    """Best and worst team by utilization; ``None`` without teams."""
    if not leads:
        return None
    best = max(leads, key=lambda l: l.team_utilization_rate)
    worst = min(leads, key=lambda l: l.team_utilization_rate)
    return PerformanceInsights(
        best_team_name=best.name,
        best_team_utilization=best.team_utilization_rate,
        worst_team_name=worst.name,
        worst_team_utilization=worst.team_utilization_rate,
    )
