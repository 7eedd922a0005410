"""Export daily financial stats as CSV."""

from __future__ import annotations

import csv
import io
import time
from collections.abc import Sequence
from decimal import Decimal
from pathlib import Path

from kiotnote.domain.financial import DailyFinancialStats
from kiotnote.runtime.logging import get_logger

logger = get_logger(__name__)

CSV_HEADER = (
    "Ngày",
    "Doanh thu",
    "Giá vốn (COGS)",
    "Chi phí vận hành",
    "Chi phí phát sinh",
    "Lợi nhuận ròng",
    "Tỷ suất (%)",
)
DATE_FORMAT = "%d/%m/%Y"


def format_amount(value: Decimal) -> str:
    """Plain decimal, no grouping or exponent: 30000, -1500, 2.5."""
    if value == value.to_integral_value():
        return str(value.quantize(Decimal("1")))
    return format(value.normalize(), "f")


def format_margin(value: Decimal) -> str:
    return f"{value:.2f}%"


def stats_to_rows(stats: Sequence[DailyFinancialStats]) -> list[list[str]]:
    rows = [list(CSV_HEADER)]
    for stat in stats:
        rows.append(
            [
                stat.date.strftime(DATE_FORMAT),
                format_amount(stat.revenue),
                format_amount(stat.cogs),
                format_amount(stat.operating_costs),
                format_amount(stat.incurred_fees),
                format_amount(stat.net_profit),
                format_margin(stat.profit_margin),
            ]
        )
    return rows


def export_csv(stats: Sequence[DailyFinancialStats]) -> bytes:
    """Render stats as UTF-8 CSV bytes, one row per day after the header."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerows(stats_to_rows(stats))
    return buffer.getvalue().encode("utf-8")


def write_csv(stats: Sequence[DailyFinancialStats], directory: Path) -> Path:
    """Write the CSV export to ``directory`` and return the file path."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"Financial_Report_{int(time.time())}.csv"

    # Handle filename collisions by appending a counter
    counter = 1
    base_name = path.stem
    while path.exists():
        path = directory / f"{base_name}_{counter}.csv"
        counter += 1

    path.write_bytes(export_csv(stats))
    logger.info("Saved financial report to %s", path)
    return path
