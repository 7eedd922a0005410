"""Core domain models for kiotnote.

- CatalogEntry: product catalog snapshot entries
- ParsedLine, ParseFailure, Intent, TokenRole: parser results
- OrderLine, OrderDraft, Order: sales
- RestockItem, RestockBill, OperatingExpense: costs
- DailyFinancialStats, ReportTotals: report figures

Usage:
    from kiotnote.domain import Order, OrderLine, ParsedLine
"""

from kiotnote.domain.catalog import CatalogEntry
from kiotnote.domain.costs import OperatingExpense, RestockBill, RestockItem
from kiotnote.domain.financial import DailyFinancialStats, ReportTotals
from kiotnote.domain.orders import EmptyOrderError, Order, OrderDraft, OrderLine
from kiotnote.domain.parsed_line import Intent, ParsedLine, ParseFailure, TokenRole
from kiotnote.domain.repository import RecordRepository

__all__ = [
    "CatalogEntry",
    "DailyFinancialStats",
    "EmptyOrderError",
    "Intent",
    "OperatingExpense",
    "Order",
    "OrderDraft",
    "OrderLine",
    "ParseFailure",
    "ParsedLine",
    "RecordRepository",
    "ReportTotals",
    "RestockBill",
    "RestockItem",
    "TokenRole",
]
