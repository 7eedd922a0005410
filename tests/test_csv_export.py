"""Tests for the CSV report export."""

from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest
from kiotnote.domain.financial import DailyFinancialStats
from kiotnote.reports.csv_export import export_csv, format_amount, write_csv

HEADER = "Ngày,Doanh thu,Giá vốn (COGS),Chi phí vận hành,Chi phí phát sinh,Lợi nhuận ròng,Tỷ suất (%)"


@pytest.fixture
def stats() -> list[DailyFinancialStats]:
    return [
        DailyFinancialStats(
            date=date(2024, 5, 15),
            revenue=Decimal("100000"),
            cogs=Decimal("40000"),
            operating_costs=Decimal("10000"),
            incurred_fees=Decimal("5000"),
        ),
        DailyFinancialStats(
            date=date(2024, 5, 3),
            revenue=Decimal("20000"),
            cogs=Decimal("10000"),
            incurred_fees=Decimal("20000"),
        ),
    ]


def test_export_csv(stats: list[DailyFinancialStats]) -> None:
    text = export_csv(stats).decode("utf-8")

    assert text.splitlines() == [
        HEADER,
        "15/05/2024,100000,40000,10000,5000,45000,45.00%",
        "03/05/2024,20000,10000,0,20000,-10000,-50.00%",
    ]


def test_export_csv_empty_has_header_only() -> None:
    assert export_csv([]) == (HEADER + "\n").encode("utf-8")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (Decimal("30000"), "30000"),
        (Decimal("30000.00"), "30000"),
        (Decimal("3E+4"), "30000"),
        (Decimal("3333.33"), "3333.33"),
        (Decimal("2.50"), "2.5"),
        (Decimal("-1500"), "-1500"),
    ],
)
def test_format_amount(value: Decimal, expected: str) -> None:
    assert format_amount(value) == expected


def test_write_csv(tmp_path: Path, stats: list[DailyFinancialStats]) -> None:
    first = write_csv(stats, tmp_path / "exports")
    second = write_csv(stats, tmp_path / "exports")

    assert first.name.startswith("Financial_Report_")
    assert first.suffix == ".csv"
    assert first != second
    assert first.read_bytes() == export_csv(stats)
