"""Tests for report window resolution."""

from datetime import datetime

import pytest
from kiotnote.reports.date_ranges import InvalidReportRangeError, ReportDateRange

NOW = datetime(2024, 5, 15, 12, 30)  # a Wednesday


def test_today() -> None:
    assert ReportDateRange.today().resolve(now=NOW) == (
        datetime(2024, 5, 15, 0, 0, 0),
        datetime(2024, 5, 15, 23, 59, 59),
    )


def test_this_week_starts_monday_by_default() -> None:
    assert ReportDateRange.this_week().resolve(now=NOW) == (
        datetime(2024, 5, 13, 0, 0, 0),
        datetime(2024, 5, 19, 23, 59, 59),
    )


def test_this_week_with_sunday_first() -> None:
    assert ReportDateRange.this_week().resolve(now=NOW, first_weekday=6) == (
        datetime(2024, 5, 12, 0, 0, 0),
        datetime(2024, 5, 18, 23, 59, 59),
    )


@pytest.mark.parametrize(
    ("now", "start", "end"),
    [
        (NOW, datetime(2024, 5, 1), datetime(2024, 5, 31, 23, 59, 59)),
        (datetime(2024, 2, 10), datetime(2024, 2, 1), datetime(2024, 2, 29, 23, 59, 59)),
        (datetime(2024, 12, 31, 23, 0), datetime(2024, 12, 1), datetime(2024, 12, 31, 23, 59, 59)),
    ],
)
def test_this_month(now: datetime, start: datetime, end: datetime) -> None:
    assert ReportDateRange.this_month().resolve(now=now) == (start, end)


@pytest.mark.parametrize(
    ("now", "start", "end"),
    [
        (NOW, datetime(2024, 4, 1), datetime(2024, 6, 30, 23, 59, 59)),
        (datetime(2024, 1, 1), datetime(2024, 1, 1), datetime(2024, 3, 31, 23, 59, 59)),
        (datetime(2024, 11, 20), datetime(2024, 10, 1), datetime(2024, 12, 31, 23, 59, 59)),
    ],
)
def test_this_quarter(now: datetime, start: datetime, end: datetime) -> None:
    assert ReportDateRange.this_quarter().resolve(now=now) == (start, end)


def test_custom_passes_through() -> None:
    start = datetime(2024, 5, 1, 8, 0)
    end = datetime(2024, 5, 3, 17, 0)

    assert ReportDateRange.custom(start, end).resolve(now=NOW) == (start, end)


def test_custom_start_after_end_is_rejected() -> None:
    with pytest.raises(InvalidReportRangeError):
        ReportDateRange.custom(datetime(2024, 5, 3), datetime(2024, 5, 1))


def test_custom_requires_both_bounds() -> None:
    with pytest.raises(InvalidReportRangeError):
        ReportDateRange("custom", start=datetime(2024, 5, 1))


def test_invalid_range_is_a_value_error() -> None:
    assert issubclass(InvalidReportRangeError, ValueError)


def test_titles() -> None:
    assert ReportDateRange.today().title == "Hôm nay"
    assert ReportDateRange.this_quarter().title == "Quý này"
