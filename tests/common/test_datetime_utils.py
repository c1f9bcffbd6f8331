from __future__ import annotations

from datetime import date

import pytest

from worklog_portal.common.datetime_utils import (
    DateRange,
    date_range_for_period,
    expected_hours,
    parse_iso_date,
    period_description,
    progress_bar_css_class,
    resolve_date_range,
    utilization_css_class,
    utilization_rate,
    working_days,
)
from worklog_portal.core.enums import PeriodFilter
from worklog_portal.core.exceptions import InvalidDateError, ValidationError

WEDNESDAY = date(2024, 1, 3)


def test_single_day_counts_only_on_weekdays():
    assert working_days("2024-01-01", "2024-01-01") == 1  # Monday
    assert working_days("2024-01-06", "2024-01-06") == 0  # Saturday
    assert working_days("2024-01-07", "2024-01-07") == 0  # Sunday


def test_full_week_and_month():
    assert working_days("2024-01-01", "2024-01-07") == 5
    assert working_days(date(2024, 1, 1), date(2024, 1, 31)) == 23


def test_reversed_range_has_no_working_days():
    assert working_days("2024-01-07", "2024-01-01") == 0


def test_expected_hours_is_eight_per_working_day():
    assert expected_hours("2024-01-01", "2024-01-07") == 40
    assert expected_hours("2024-01-06", "2024-01-07") == 0


@pytest.mark.parametrize("actual", [0, 5, 1000])
def test_utilization_is_zero_without_expected_hours(actual):
    assert utilization_rate(actual, 0) == 0


def test_utilization_is_clipped_to_100():
    assert utilization_rate(40, 40) == 100
    assert utilization_rate(80, 40) == 100
    assert utilization_rate(12, 40) == 30


def test_week_window_is_monday_to_sunday():
    assert date_range_for_period("week", WEDNESDAY) == (date(2024, 1, 1), date(2024, 1, 7))
    assert date_range_for_period(PeriodFilter.WEEK, date(2024, 1, 7)) == (date(2024, 1, 1), date(2024, 1, 7))


def test_month_window_handles_leap_february():
    assert date_range_for_period("month", date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))


def test_invalid_period_is_rejected():
    with pytest.raises(ValidationError):
        date_range_for_period("year", WEDNESDAY)
    with pytest.raises(ValidationError):
        date_range_for_period("custom", WEDNESDAY)


def test_period_description_labels():
    assert period_description("2024-01-01", "2024-01-07", WEDNESDAY) == "This Week"
    assert period_description("2024-01-01", "2024-01-31", WEDNESDAY) == "This Month"
    assert period_description("2025-01-15", "2025-01-15", WEDNESDAY) == "Jan 15, 2025"
    assert period_description("2025-01-15", "2025-01-22", WEDNESDAY) == "Jan 15 - 22, 2025"
    assert period_description("2025-01-15", "2025-02-28", WEDNESDAY) == "Jan 15 - Feb 28, 2025"
    assert period_description("2024-12-25", "2025-01-05", WEDNESDAY) == "Dec 25, 2024 - Jan 5, 2025"


def test_parse_iso_date_rejects_garbage():
    with pytest.raises(InvalidDateError):
        parse_iso_date("2024-13-01")
    with pytest.raises(InvalidDateError):
        parse_iso_date("not a date")


def test_date_range_helpers():
    dr = DateRange.parse("2024-01-01", "2024-01-07")
    assert dr.start_iso == "2024-01-01"
    assert dr.working_days == 5
    assert dr.expected_hours == 40
    assert dr.contains(date(2024, 1, 7))
    assert not dr.contains(date(2024, 1, 8))


def test_resolve_custom_range_needs_both_dates():
    period, dr = resolve_date_range("custom", "2024-01-01", "2024-01-10", today=WEDNESDAY)
    assert period == PeriodFilter.CUSTOM
    assert (dr.start, dr.end) == (date(2024, 1, 1), date(2024, 1, 10))

    with pytest.raises(InvalidDateError):
        resolve_date_range("custom", "2024-01-01", None, today=WEDNESDAY)


def test_resolve_dates_without_period_means_custom():
    period, dr = resolve_date_range(None, "2024-01-01", "2024-01-02", today=WEDNESDAY)
    assert period == PeriodFilter.CUSTOM
    assert dr.end == date(2024, 1, 2)


@pytest.mark.parametrize("period", [None, "", "fortnight"])
def test_resolve_falls_back_to_current_week(period):
    selected, dr = resolve_date_range(period, None, None, today=WEDNESDAY)
    assert selected == PeriodFilter.WEEK
    assert (dr.start, dr.end) == (date(2024, 1, 1), date(2024, 1, 7))


def test_resolve_named_period_ignores_dates():
    selected, dr = resolve_date_range("month", "2023-05-01", "2023-05-02", today=WEDNESDAY)
    assert selected == PeriodFilter.MONTH
    assert dr.end == date(2024, 1, 31)


@pytest.mark.parametrize(
    "rate, text_class, bar_class",
    [
        (95, "text-success", "bg-success"),
        (90, "text-success", "bg-success"),
        (75, "text-primary", "bg-primary"),
        (55, "text-warning", "bg-warning"),
        (10, "text-danger", "bg-danger"),
    ],
)
def test_utilization_css_levels(rate, text_class, bar_class):
    assert utilization_css_class(rate) == text_class
    assert progress_bar_css_class(rate) == bar_class


@pytest.mark.parametrize("start,end", [("2024-02-30", "2024-03-01"), ("2024-03-01", "not-a-date")])
def test_working_days_rejects_invalid_bounds(start, end):
    with pytest.raises(InvalidDateError):
        working_days(start, end)


def test_expected_hours_rejects_invalid_bound():
    with pytest.raises(InvalidDateError):
        expected_hours("2024-13-01", "2024-12-31")
