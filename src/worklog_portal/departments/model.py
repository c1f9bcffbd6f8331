from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DepartmentSummary:
    id: int
    name: str
    code: str = ""


@dataclass(frozen=True)
class Person:
    id: Optional[int]
    name: str
    email: str = ""
    grade: str = ""


@dataclass(frozen=True)
class Team:
    team_lead_id: int
    team_lead_name: str
    team_lead_email: str
    team_size: int
    members: tuple[Person, ...] = ()


@dataclass(frozen=True)
class DepartmentHierarchy:
    department: str
    department_code: str
    director: Optional[Person]
    total_employees: int
    total_team_leads: int
    teams: tuple[Team, ...] = ()


@dataclass(frozen=True)
class TeamNode:
    """A team as rendered: expansion state and which names match the search."""

    team: Team
    expanded: bool
    lead_matches: bool
    matching_member_ids: frozenset = frozenset()
