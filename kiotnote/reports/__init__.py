"""Financial aggregation and report export."""

from kiotnote.reports.aggregator import generate_report, summarize
from kiotnote.reports.csv_export import CSV_HEADER, export_csv, write_csv
from kiotnote.reports.date_ranges import InvalidReportRangeError, ReportDateRange

__all__ = [
    "CSV_HEADER",
    "InvalidReportRangeError",
    "ReportDateRange",
    "export_csv",
    "generate_report",
    "summarize",
    "write_csv",
]
