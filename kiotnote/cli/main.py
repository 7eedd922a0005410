#!/usr/bin/env python3

import argparse
from collections.abc import Sequence


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="kiotnote point-of-sale notes CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  parse <text> [--restock]   Show how dictated text is parsed (nothing saved)
  order <text>               Create and save an order
  restock <text>             Record a restock bill
  expense <title> <amount>   Record an operating expense
  report [--range]           Daily profit and loss report

Notes:
  Records live under $KIOTNOTE_HOME/data (default: current directory).
  Extra parser keywords are read from config/parser_keywords.toml.
""",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser("parse", help="Preview how text is parsed")
    parse_parser.add_argument("text", help='Dictated text, e.g. "2 cà phê 30k, 1 bánh mì"')
    parse_parser.add_argument("--restock", action="store_true", help="Parse every line as a restock")

    order_parser = subparsers.add_parser("order", help="Create and save an order")
    order_parser.add_argument("text", help="Dictated order text")

    restock_parser = subparsers.add_parser("restock", help="Record a restock bill")
    restock_parser.add_argument("text", help='Restock text, e.g. "Nhập 50 hoa hồng giá 5k phí ship 30k"')

    expense_parser = subparsers.add_parser("expense", help="Record an operating expense")
    expense_parser.add_argument("title", help="Expense title")
    expense_parser.add_argument("amount", help='Amount, e.g. "500k" or "1.500.000"')
    expense_parser.add_argument("--note", default=None, help="Optional note")

    report_parser = subparsers.add_parser("report", help="Daily profit and loss report")
    report_parser.add_argument(
        "--range",
        choices=["today", "week", "month", "quarter", "custom"],
        default="today",
        help="Report window (default: today)",
    )
    report_parser.add_argument("--start", default=None, help="Custom range start (YYYY-MM-DD)")
    report_parser.add_argument("--end", default=None, help="Custom range end (YYYY-MM-DD)")
    report_parser.add_argument(
        "--csv",
        nargs="?",
        const="",
        default=None,
        metavar="DIR",
        help="Export the report as CSV into DIR (default: exports/ under the project root)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "parse":
        from kiotnote.cli.commands import cmd_parse

        return cmd_parse(args)
    elif args.command == "order":
        from kiotnote.cli.commands import cmd_order

        return cmd_order(args)
    elif args.command == "restock":
        from kiotnote.cli.commands import cmd_restock

        return cmd_restock(args)
    elif args.command == "expense":
        from kiotnote.cli.commands import cmd_expense

        return cmd_expense(args)
    elif args.command == "report":
        from kiotnote.cli.commands import cmd_report

        return cmd_report(args)

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
