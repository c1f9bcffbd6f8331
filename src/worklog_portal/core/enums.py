from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role; decides which employees' data a viewer may see."""

    EMPLOYEE = "EMPLOYEE"
    TEAM_LEAD = "TEAM_LEAD"
    DIRECTOR = "DIRECTOR"


class PeriodFilter(str, Enum):
    """Period selector shown on every report page."""

    WEEK = "week"
    MONTH = "month"
    CUSTOM = "custom"
