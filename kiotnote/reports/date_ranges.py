"""Report windows and their resolution to concrete local datetimes.

All bounds are naive local datetimes and both ends are inclusive, e.g.
"today" is 00:00:00 through 23:59:59 of the current local day.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Literal

RangeKind = Literal["today", "this_week", "this_month", "this_quarter", "custom"]

RANGE_TITLES: dict[str, str] = {
    "today": "Hôm nay",
    "this_week": "Tuần này",
    "this_month": "Tháng này",
    "this_quarter": "Quý này",
    "custom": "Tùy chỉnh",
}

ONE_SECOND = timedelta(seconds=1)


class InvalidReportRangeError(ValueError):
    """Raised for a report window whose start is after its end."""


def to_local_naive(moment: datetime) -> datetime:
    """Convert aware datetimes to naive local time; naive ones are already local."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


def local_day(moment: datetime) -> date:
    """Local calendar day a record belongs to."""
    return to_local_naive(moment).date()


def _start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def _add_months(day: date, months: int) -> date:
    month_index = day.month - 1 + months
    return day.replace(year=day.year + month_index // 12, month=month_index % 12 + 1, day=1)


@dataclass(frozen=True)
class ReportDateRange:
    """A named or custom reporting window."""

    kind: RangeKind
    start: datetime | None = None
    end: datetime | None = None

    def __post_init__(self) -> None:
        if self.kind != "custom":
            return
        if self.start is None or self.end is None:
            raise InvalidReportRangeError("Custom report range needs both start and end")
        if to_local_naive(self.start) > to_local_naive(self.end):
            raise InvalidReportRangeError(f"Report range start {self.start} is after end {self.end}")

    @classmethod
    def today(cls) -> ReportDateRange:
        return cls("today")

    @classmethod
    def this_week(cls) -> ReportDateRange:
        return cls("this_week")

    @classmethod
    def this_month(cls) -> ReportDateRange:
        return cls("this_month")

    @classmethod
    def this_quarter(cls) -> ReportDateRange:
        return cls("this_quarter")

    @classmethod
    def custom(cls, start: datetime, end: datetime) -> ReportDateRange:
        return cls("custom", start=start, end=end)

    @property
    def title(self) -> str:
        return RANGE_TITLES[self.kind]

    def resolve(self, now: datetime | None = None, first_weekday: int = 0) -> tuple[datetime, datetime]:
        """
        Resolve to an inclusive (start, end) pair of naive local datetimes.

        Args:
            now: Reference moment; defaults to the current local time
            first_weekday: First day of the week, 0=Monday .. 6=Sunday

        Returns:
            (start, end) tuple
        """
        if self.kind == "custom":
            assert self.start is not None and self.end is not None
            return to_local_naive(self.start), to_local_naive(self.end)

        today = to_local_naive(now).date() if now is not None else datetime.now().date()

        if self.kind == "today":
            start = _start_of_day(today)
            return start, datetime.combine(today, time(23, 59, 59))

        if self.kind == "this_week":
            offset = (today.weekday() - first_weekday) % 7
            start = _start_of_day(today - timedelta(days=offset))
            return start, start + timedelta(days=7) - ONE_SECOND

        if self.kind == "this_month":
            first = today.replace(day=1)
            return _start_of_day(first), _start_of_day(_add_months(first, 1)) - ONE_SECOND

        quarter_first = today.replace(month=3 * ((today.month - 1) // 3) + 1, day=1)
        return _start_of_day(quarter_first), _start_of_day(_add_months(quarter_first, 3)) - ONE_SECOND
