from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import httpx

from .api.client import BackendClient, create_http_client
from .common.generation import LatestRequestGuard
from .core.constants import DEFAULT_SESSION_COOKIE
from .departments.http_department_repository import HttpDepartmentRepository
from .departments.service import DepartmentService
from .reports.http_dashboard_repository import HttpDashboardRepository
from .reports.service import ReportService
from .users.http_user_repository import HttpAuthRepository, HttpEmployeeRepository
from .users.service import AuthService
from .worklogs.http_worklog_repository import HttpWorklogRepository, HttpWorklogTypeRepository
from .worklogs.service import WorklogService


@dataclass(frozen=True)
class Services:
    """Request-scoped services, all bound to the caller's backend session."""

    auth_service: AuthService
    worklog_service: WorklogService
    report_service: ReportService
    department_service: DepartmentService


def build_services(client: BackendClient) -> Services:
    auth_repo = HttpAuthRepository(client)
    employees_repo = HttpEmployeeRepository(client)
    worklogs_repo = HttpWorklogRepository(client)
    types_repo = HttpWorklogTypeRepository(client)
    dashboards_repo = HttpDashboardRepository(client)
    departments_repo = HttpDepartmentRepository(client)

    worklog_service = WorklogService(worklogs_repo, types_repo)
    return Services(
        auth_service=AuthService(auth_repo),
        worklog_service=worklog_service,
        report_service=ReportService(dashboards_repo, employees_repo, worklog_service),
        department_service=DepartmentService(departments_repo),
    )


@dataclass(frozen=True)
class Container:
    http: httpx.Client
    cookie_name: str = DEFAULT_SESSION_COOKIE
    request_guard: LatestRequestGuard = field(default_factory=LatestRequestGuard)

    def services_for(self, *, session_token: Optional[str], current_path: str) -> Services:
        client = BackendClient(
            self.http,
            session_token=session_token,
            current_path=current_path,
            cookie_name=self.cookie_name,
        )
        return build_services(client)


def build_container(
    *,
    api_base_url: str,
    timeout: float = 10.0,
    cookie_name: str = DEFAULT_SESSION_COOKIE,
    transport: Optional[httpx.BaseTransport] = None,
) -> Container:
    http = create_http_client(base_url=api_base_url, timeout=timeout, transport=transport)
    return Container(http=http, cookie_name=cookie_name)
