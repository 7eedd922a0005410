"""Financial report workflow."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from pathlib import Path
from typing import Literal

from kiotnote.domain.financial import DailyFinancialStats, ReportTotals
from kiotnote.domain.repository import RecordRepository
from kiotnote.reports import InvalidReportRangeError, ReportDateRange, generate_report, summarize, write_csv
from kiotnote.reports.date_ranges import RangeKind
from kiotnote.runtime import JsonRecordStore, get_paths

ReportStatus = Literal["ok", "error"]

RANGE_CHOICES: dict[str, RangeKind] = {
    "today": "today",
    "week": "this_week",
    "month": "this_month",
    "quarter": "this_quarter",
}


@dataclass(frozen=True)
class FinancialReportRequest:
    """Inputs for the report workflow.

    ``range_name`` is one of today, week, month, quarter or custom. Custom
    ranges take ISO dates (YYYY-MM-DD); the end date is included in full.
    A CSV is written when ``csv_dir`` is given, or into the project exports
    directory when only ``export_csv`` is set.
    """

    range_name: str = "today"
    start_date: str | None = None
    end_date: str | None = None
    csv_dir: Path | None = None
    export_csv: bool = False
    now: datetime | None = None


@dataclass(frozen=True)
class FinancialReportResult:
    """Outcome for the report workflow."""

    status: ReportStatus
    date_range: ReportDateRange | None = None
    stats: tuple[DailyFinancialStats, ...] = ()
    totals: ReportTotals | None = None
    csv_path: Path | None = None
    error: str | None = None


def build_date_range(range_name: str, start_date: str | None, end_date: str | None) -> ReportDateRange:
    """Build a ReportDateRange from CLI-style inputs.

    Raises:
        InvalidReportRangeError: unknown range name, missing or malformed
            custom dates, or start after end
    """
    if range_name in RANGE_CHOICES:
        return ReportDateRange(RANGE_CHOICES[range_name])
    if range_name != "custom":
        raise InvalidReportRangeError(f"Unknown report range: {range_name}")
    if not start_date or not end_date:
        raise InvalidReportRangeError("Custom range needs --start and --end (YYYY-MM-DD)")
    try:
        start = date.fromisoformat(start_date)
        end = date.fromisoformat(end_date)
    except ValueError as exc:
        raise InvalidReportRangeError(f"Invalid date: {exc}") from exc
    return ReportDateRange.custom(datetime.combine(start, time.min), datetime.combine(end, time(23, 59, 59)))


def run_financial_report(
    request: FinancialReportRequest,
    store: RecordRepository | None = None,
) -> FinancialReportResult:
    """Aggregate stored records over the requested window, optionally exporting CSV."""
    try:
        date_range = build_date_range(request.range_name, request.start_date, request.end_date)
    except InvalidReportRangeError as exc:
        return FinancialReportResult(status="error", error=str(exc))

    store = store or JsonRecordStore()
    stats = generate_report(
        store.load_orders(),
        store.load_expenses(),
        store.load_restocks(),
        date_range,
        now=request.now,
    )

    csv_dir = request.csv_dir
    if csv_dir is None and request.export_csv:
        csv_dir = get_paths().exports
    csv_path = write_csv(stats, csv_dir) if csv_dir is not None else None
    return FinancialReportResult(
        status="ok",
        date_range=date_range,
        stats=tuple(stats),
        totals=summarize(stats),
        csv_path=csv_path,
    )
