from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Union

from ..core.constants import HOURS_PER_DAY, UTILIZATION_THRESHOLDS
from ..core.enums import PeriodFilter
from ..core.exceptions import InvalidDateError, ValidationError

ISO_FORMAT = "%Y-%m-%d"

DateLike = Union[date, str]


def parse_iso_date(value: DateLike) -> date:
    """Parse YYYY-MM-DD string into date (dates pass through)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value).strip(), ISO_FORMAT).date()
    except (TypeError, ValueError):
        raise InvalidDateError(f"Invalid date: {value!r}")


def format_iso_date(value: date) -> str:
    return value.strftime(ISO_FORMAT)


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return date.today()


def working_days(start: DateLike, end: DateLike) -> int:
    """Count Monday-Friday days in ``[start, end]``, both bounds included."""
    start_d = parse_iso_date(start)
    end_d = parse_iso_date(end)
    if end_d < start_d:
        return 0

    total_days = (end_d - start_d).days + 1
    full_weeks, remainder = divmod(total_days, 7)
    count = full_weeks * 5
    for offset in range(remainder):
        if (start_d + timedelta(days=offset)).weekday() < 5:
            count += 1
    return count


def expected_hours(start: DateLike, end: DateLike) -> int:
    return working_days(start, end) * HOURS_PER_DAY


def utilization_rate(actual_hours: float, expected: float) -> float:
    """Percentage of expected hours logged, clipped to 100."""
    if expected <= 0:
        return 0.0
    return min(100.0, actual_hours / expected * 100.0)


def _week_window(reference: date) -> tuple[date, date]:
    monday = reference - timedelta(days=reference.weekday())
    return monday, monday + timedelta(days=6)


def _month_window(reference: date) -> tuple[date, date]:
    last_day = calendar.monthrange(reference.year, reference.month)[1]
    return reference.replace(day=1), reference.replace(day=last_day)


def date_range_for_period(period: Union[PeriodFilter, str], reference: Optional[DateLike] = None) -> tuple[date, date]:
    ref = parse_iso_date(reference) if reference is not None else today_local()
    try:
        period = PeriodFilter(period)
    except ValueError:
        raise ValidationError(f"Invalid period: {period}")

    if period == PeriodFilter.WEEK:
        return _week_window(ref)
    if period == PeriodFilter.MONTH:
        return _month_window(ref)
    raise ValidationError(f"Invalid period: {period.value}")


def _short(d: date) -> str:
    return f"{d:%b} {d.day}"


def period_description(start: DateLike, end: DateLike, now: Optional[DateLike] = None) -> str:
    """Human label for a range, e.g. ``Jan 15 - Feb 28, 2025``."""
    start_d = parse_iso_date(start)
    end_d = parse_iso_date(end)
    ref = parse_iso_date(now) if now is not None else today_local()

    if (start_d, end_d) == _week_window(ref):
        return "This Week"
    if (start_d, end_d) == _month_window(ref):
        return "This Month"

    if start_d == end_d:
        return f"{_short(start_d)}, {start_d.year}"
    if start_d.year != end_d.year:
        return f"{_short(start_d)}, {start_d.year} - {_short(end_d)}, {end_d.year}"
    if start_d.month != end_d.month:
        return f"{_short(start_d)} - {_short(end_d)}, {end_d.year}"
    return f"{_short(start_d)} - {end_d.day}, {end_d.year}"


@dataclass(frozen=True)
class DateRange:
    """Closed date interval selected by the viewer."""

    start: date
    end: date

    @classmethod
    def parse(cls, start: DateLike, end: DateLike) -> "DateRange":
        return cls(start=parse_iso_date(start), end=parse_iso_date(end))

    @classmethod
    def for_period(cls, period: Union[PeriodFilter, str], reference: Optional[DateLike] = None) -> "DateRange":
        start, end = date_range_for_period(period, reference)
        return cls(start=start, end=end)

    @property
    def start_iso(self) -> str:
        return format_iso_date(self.start)

    @property
    def end_iso(self) -> str:
        return format_iso_date(self.end)

    @property
    def working_days(self) -> int:
        return working_days(self.start, self.end)

    @property
    def expected_hours(self) -> int:
        return expected_hours(self.start, self.end)

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def description(self, now: Optional[DateLike] = None) -> str:
        return period_description(self.start, self.end, now)


def resolve_date_range(
    period: Optional[str],
    start: Optional[str],
    end: Optional[str],
    *,
    today: Optional[date] = None,
) -> tuple[PeriodFilter, DateRange]:
    """Turn page query arguments into a period filter and a date range.

    ``custom`` needs both dates; a missing or unknown period falls back to the
    current week.
    """
    today = today or today_local()
    if period == PeriodFilter.CUSTOM.value or (period is None and start and end):
        if not start or not end:
            raise InvalidDateError("Please select both a start and an end date")
        return PeriodFilter.CUSTOM, DateRange.parse(start, end)

    try:
        selected = PeriodFilter(period) if period else PeriodFilter.WEEK
    except ValueError:
        selected = PeriodFilter.WEEK
    return selected, DateRange.for_period(selected, today)


def _level(rate: float) -> int:
    for idx, threshold in enumerate(UTILIZATION_THRESHOLDS):
        if rate >= threshold:
            return idx
    return len(UTILIZATION_THRESHOLDS)


def utilization_css_class(rate: float) -> str:
    return ("text-success", "text-primary", "text-warning", "text-danger")[_level(rate)]


def progress_bar_css_class(rate: float) -> str:
    return ("bg-success", "bg-primary", "bg-warning", "bg-danger")[_level(rate)]
