from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import DateRange
from ..users.model import Employee
from ..worklogs.model import Worklog


@dataclass(frozen=True)
class EmployeeStats:
    employee_id: int
    total_hours: float
    days_worked: int
    average_hours: float
    utilization_rate: float

    @property
    def has_logged_work(self) -> bool:
        return self.total_hours > 0


@dataclass(frozen=True)
class MemberRow:
    employee: Employee
    stats: EmployeeStats


@dataclass(frozen=True)
class TeamStats:
    member_count: int
    total_hours: float
    average_hours_per_member: float
    utilization_rate: float
    expected_hours: float


@dataclass(frozen=True)
class TypeShare:
    type_name: str
    hours: float
    count: int
    percentage: float


@dataclass(frozen=True)
class ComplianceStats:
    total_employees: int
    employees_with_logs: int
    compliance_rate: float


@dataclass(frozen=True)
class PeriodInfo:
    date_range: DateRange
    working_days: int
    expected_hours: int
    description: str


# --- Backend dashboard read-models ---------------------------------------


@dataclass(frozen=True)
class DashboardUser:
    id: int
    name: str
    role: str
    department: str


@dataclass(frozen=True)
class PeriodSummary:
    total_hours: float
    total_days: int
    days_worked: int
    average_hours_per_day: float
    period: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None


@dataclass(frozen=True)
class RecentWorklog:
    work_date: date
    type_name: str
    hours: float
    description: str
    project_name: str


@dataclass(frozen=True)
class TeamMemberSummary:
    id: int
    name: str
    grade: str
    total_hours: float
    days_worked: int
    utilization_rate: float

    @property
    def has_logged_work(self) -> bool:
        return self.total_hours > 0


@dataclass(frozen=True)
class BackendTeamStats:
    team_size: int
    total_team_hours: float
    average_hours_per_member: float
    team_utilization_rate: float


@dataclass(frozen=True)
class TeamLeadSummary:
    id: int
    name: str
    team_size: int
    team_total_hours: float
    team_utilization_rate: float
    team_members_with_logs: int = 0


@dataclass(frozen=True)
class DepartmentStats:
    total_employees: int
    total_team_leads: int
    department_total_hours: float
    department_utilization_rate: float


@dataclass(frozen=True)
class PerformanceInsights:
    best_team_name: str
    best_team_utilization: float
    worst_team_name: str
    worst_team_utilization: float

    @property
    def utilization_gap(self) -> float:
        return self.best_team_utilization - self.worst_team_utilization


@dataclass(frozen=True)
class DashboardData:
    current_user: DashboardUser
    period_summary: PeriodSummary
    type_breakdown: tuple[TypeShare, ...] = ()
    recent_worklogs: tuple[RecentWorklog, ...] = ()
    team_members: tuple[TeamMemberSummary, ...] = ()
    team_stats: Optional[BackendTeamStats] = None
    team_leads: tuple[TeamLeadSummary, ...] = ()
    department_stats: Optional[DepartmentStats] = None


@dataclass(frozen=True)
class QuickStats:
    today_hours: float
    week_hours: float
    remaining_week_hours: float
    has_logged_today: bool
    team_size: Optional[int] = None
    team_members_logged_today: Optional[int] = None


# --- Page view-models ----------------------------------------------------


@dataclass(frozen=True)
class DashboardView:
    data: DashboardData
    quick_stats: Optional[QuickStats]
    period: PeriodInfo
    personal_utilization: float
    is_department_view: bool
    insights: Optional[PerformanceInsights] = None


@dataclass(frozen=True)
class TeamView:
    period: PeriodInfo
    employees: tuple[Employee, ...]
    members: tuple[MemberRow, ...]
    team: TeamStats
    compliance: ComplianceStats
    breakdown: tuple[TypeShare, ...]
    worklogs: tuple[Worklog, ...]
    selected_employee_id: Optional[int] = None
    is_department_view: bool = False


@dataclass(frozen=True)
class EmployeeDetailView:
    employee: Employee
    period: PeriodInfo
    stats: EmployeeStats
    breakdown: tuple[TypeShare, ...]
    worklogs: tuple[Worklog, ...]
    dashboard: Optional[DashboardData] = None
    worklogs_error: Optional[str] = None
