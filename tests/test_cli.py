"""CLI tests: argument wiring, output and exit codes."""

from decimal import Decimal
from pathlib import Path

import pytest
from kiotnote.cli.commands import format_vnd
from kiotnote.cli.main import main
from kiotnote.runtime.paths import ProjectPaths
from kiotnote.runtime.record_storage import JsonRecordStore


def _store(home: Path) -> JsonRecordStore:
    return JsonRecordStore(ProjectPaths(root=home))


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (Decimal("0"), "0đ"),
        (Decimal("30000"), "30.000đ"),
        (Decimal("1500000"), "1.500.000đ"),
        (Decimal("3333.5"), "3.334đ"),
        (Decimal("-24000"), "-24.000đ"),
    ],
)
def test_format_vnd(value: Decimal, expected: str) -> None:
    assert format_vnd(value) == expected


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    assert "Commands:" in capsys.readouterr().out


def test_parse_command(kiotnote_home: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["parse", "2 cà phê 30k, nhập 10 bút 5k"]) == 0

    out = capsys.readouterr().out
    assert "[sale] cà phê x2 @ 30.000đ = 60.000đ" in out
    assert "[restock] bút x10 @ 5.000đ" in out
    assert _store(kiotnote_home).load_orders() == []


def test_parse_command_with_only_failures(kiotnote_home: Path) -> None:
    assert main(["parse", "30k"]) == 1


def test_order_command(kiotnote_home: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["order", "2 cà phê 30k giảm 10%"]) == 0

    out = capsys.readouterr().out
    assert "Total: 54.000đ" in out
    assert len(_store(kiotnote_home).load_orders()) == 1


def test_order_command_error(kiotnote_home: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["order", "nhập 10 bút 5k"]) == 1
    assert "kiotnote restock" in capsys.readouterr().out


def test_restock_command(kiotnote_home: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["restock", "Nhập 50 hoa hồng giá 5k phí ship 30k"]) == 0

    out = capsys.readouterr().out
    assert "Fees: 30.000đ" in out
    assert "Total cost: 280.000đ" in out
    assert [entry.name for entry in _store(kiotnote_home).load_catalog()] == ["hoa hồng"]


def test_expense_command(kiotnote_home: Path) -> None:
    assert main(["expense", "Tiền điện", "500k", "--note", "tháng 4"]) == 0

    expenses = _store(kiotnote_home).load_expenses()
    assert [(e.title, e.amount, e.note) for e in expenses] == [("Tiền điện", Decimal("500000"), "tháng 4")]


def test_expense_command_invalid_amount(kiotnote_home: Path) -> None:
    assert main(["expense", "Tiền điện", "nhiều"]) == 1


def test_report_command_with_csv(kiotnote_home: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["order", "2 cà phê 30k"])
    main(["expense", "Tiền điện", "15k"])
    capsys.readouterr()

    assert main(["report", "--range", "today", "--csv", str(kiotnote_home / "exports")]) == 0

    out = capsys.readouterr().out
    assert "Hôm nay" in out
    assert "Net profit:       45.000đ" in out
    assert list((kiotnote_home / "exports").glob("Financial_Report_*.csv"))


def test_report_command_bare_csv_uses_exports_directory(kiotnote_home: Path) -> None:
    main(["order", "2 cà phê 30k"])

    assert main(["report", "--csv"]) == 0

    assert list((kiotnote_home / "exports").glob("Financial_Report_*.csv"))


def test_report_command_custom_without_dates(kiotnote_home: Path) -> None:
    assert main(["report", "--range", "custom"]) == 1


def test_report_command_empty_period(kiotnote_home: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["report", "--range", "custom", "--start", "2020-01-01", "--end", "2020-01-31"]) == 0
    assert "No data for this period." in capsys.readouterr().out
