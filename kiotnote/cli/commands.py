"""Command handlers used by the unified CLI. Each returns an exit code."""

import argparse
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path

from kiotnote.domain.orders import OrderLine
from kiotnote.domain.parsed_line import Intent, ParseFailure
from kiotnote.parser import ParsedOrderLine, ParsedRestockLine


def format_vnd(value: Decimal) -> str:
    """Display an amount in whole đồng with dot grouping: 1.500.000đ."""
    rounded = int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return f"{rounded:,}".replace(",", ".") + "đ"


def _print_error(error: str) -> None:
    for line in error.splitlines():
        print(line)


def _describe_order_line(line: OrderLine) -> str:
    text = f"{line.name} x{line.quantity} @ {format_vnd(line.unit_price)}"
    if line.discount:
        text += f" - {format_vnd(line.discount)}"
    return f"{text} = {format_vnd(line.line_total)}"


def _print_failures(failures: tuple[ParseFailure, ...]) -> None:
    for failure in failures:
        print(f"  ? could not parse {failure.raw_text.strip()!r} ({failure.reason})")


def cmd_parse(args: argparse.Namespace) -> int:
    """Show how each line would be parsed, without saving anything."""
    from kiotnote.application.parsing import ParsePreviewRequest, run_parse_preview

    result = run_parse_preview(
        ParsePreviewRequest(text=args.text, intent=Intent.RESTOCK if args.restock else None),
    )
    if not result.lines:
        print("Nothing to parse.")
        return 1

    for i, line in enumerate(result.lines, 1):
        if isinstance(line, ParseFailure):
            print(f"{i}. ? {line.raw_text.strip()!r} ({line.reason})")
        elif isinstance(line, ParsedRestockLine):
            item = line.item
            suggested = f", suggested {format_vnd(item.suggested_price)}" if item.suggested_price else ""
            fee = f", fee {format_vnd(item.additional_cost)}" if item.additional_cost else ""
            print(f"{i}. [restock] {item.name} x{item.quantity} @ {format_vnd(item.unit_price)}{fee}{suggested}")
        else:
            assert isinstance(line, ParsedOrderLine)
            source = "" if line.price_source == "parsed" else f" (price from {line.price_source})"
            print(f"{i}. [sale] {_describe_order_line(line.line)}{source}")
    return 0 if any(not isinstance(line, ParseFailure) for line in result.lines) else 1


def cmd_order(args: argparse.Namespace) -> int:
    """Parse dictated text into an order and save it."""
    from kiotnote.application.orders import CreateOrderRequest, run_create_order

    result = run_create_order(CreateOrderRequest(text=args.text))
    if result.status == "error":
        assert result.error is not None
        _print_failures(result.failures)
        _print_error(result.error)
        return 1

    assert result.order is not None
    order = result.order
    print(f"Order {order.id}")
    for line in order.lines:
        print(f"  {_describe_order_line(line)}")
    _print_failures(result.failures)
    print(f"Total: {format_vnd(order.total)}")
    return 0


def cmd_restock(args: argparse.Namespace) -> int:
    """Parse a restock bill and save it."""
    from kiotnote.application.restocks import RecordRestockRequest, run_record_restock

    result = run_record_restock(RecordRestockRequest(text=args.text))
    if result.status == "error":
        assert result.error is not None
        _print_failures(result.failures)
        _print_error(result.error)
        return 1

    assert result.restock is not None
    restock = result.restock
    print(f"Restock {restock.id}")
    for item in restock.items:
        print(f"  {item.name} x{item.quantity} @ {format_vnd(item.unit_price)}")
    _print_failures(result.failures)
    if restock.incurred_fees:
        print(f"Fees: {format_vnd(restock.incurred_fees)}")
    print(f"Total cost: {format_vnd(restock.total_cost)}")
    return 0


def cmd_expense(args: argparse.Namespace) -> int:
    """Record an operating expense."""
    from kiotnote.application.expenses import RecordExpenseRequest, run_record_expense

    result = run_record_expense(RecordExpenseRequest(title=args.title, amount=args.amount, note=args.note))
    if result.status == "error":
        assert result.error is not None
        _print_error(result.error)
        return 1

    assert result.expense is not None
    print(f"Saved expense {result.expense.title}: {format_vnd(result.expense.amount)}")
    return 0


def cmd_report(args: argparse.Namespace) -> int:
    """Print daily profit and loss, optionally exporting CSV."""
    from kiotnote.application.reports import FinancialReportRequest, run_financial_report

    result = run_financial_report(
        FinancialReportRequest(
            range_name=args.range,
            start_date=args.start,
            end_date=args.end,
            csv_dir=Path(args.csv) if args.csv else None,
            export_csv=args.csv is not None,
        )
    )
    if result.status == "error":
        assert result.error is not None
        _print_error(result.error)
        return 1

    assert result.date_range is not None and result.totals is not None
    print("=" * 60)
    print(f"BÁO CÁO TÀI CHÍNH - {result.date_range.title}")
    print("=" * 60)
    if not result.stats:
        print("No data for this period.")
    for stats in result.stats:
        print(
            f"{stats.date.strftime('%d/%m/%Y')}  revenue {format_vnd(stats.revenue)}"
            f"  net {format_vnd(stats.net_profit)}  ({stats.profit_margin:.2f}%)"
        )

    totals = result.totals
    print("-" * 60)
    print(f"Revenue:          {format_vnd(totals.revenue)}")
    print(f"COGS:             {format_vnd(totals.cogs)}")
    print(f"Gross profit:     {format_vnd(totals.gross_profit)}")
    print(f"Operating costs:  {format_vnd(totals.operating_costs)}")
    print(f"Incurred fees:    {format_vnd(totals.incurred_fees)}")
    print(f"Net profit:       {format_vnd(totals.net_profit)} ({totals.profit_margin:.2f}%)")

    if result.csv_path is not None:
        print(f"\nExported CSV to: {result.csv_path}")
    return 0
