"""Aggregate orders, operating expenses and restocks into daily stats.

- Orders contribute revenue (order total) and COGS (cost price x quantity).
- Operating expenses contribute operating costs.
- Restocks contribute only their additional costs as incurred fees; the
  purchase price is inventory value and reaches COGS when the stock sells.

Buckets are local calendar days, output is most recent day first.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, datetime
from decimal import Decimal

from kiotnote.domain.costs import OperatingExpense, RestockBill
from kiotnote.domain.financial import DailyFinancialStats, ReportTotals
from kiotnote.domain.orders import Order
from kiotnote.reports.date_ranges import ReportDateRange, local_day, to_local_naive
from kiotnote.runtime.logging import get_logger

logger = get_logger(__name__)

ZERO = Decimal("0")


def _in_window(moment: datetime, start: datetime, end: datetime) -> bool:
    local = to_local_naive(moment)
    return start <= local <= end


def _bucket(stats_by_day: dict[date, DailyFinancialStats], moment: datetime) -> DailyFinancialStats:
    day = local_day(moment)
    stats = stats_by_day.get(day)
    if stats is None:
        stats = DailyFinancialStats(date=day)
        stats_by_day[day] = stats
    return stats


def generate_report(
    orders: Iterable[Order],
    expenses: Iterable[OperatingExpense],
    restocks: Iterable[RestockBill],
    date_range: ReportDateRange,
    now: datetime | None = None,
    first_weekday: int = 0,
) -> list[DailyFinancialStats]:
    """
    Roll records inside ``date_range`` up into per-day statistics.

    Args:
        orders: Finalized orders
        expenses: Operating expenses
        restocks: Restock bills
        date_range: Reporting window, bounds inclusive
        now: Reference moment for named windows (defaults to now)
        first_weekday: First day of the week for "this_week", 0=Monday

    Returns:
        Daily stats sorted by date, most recent first. Empty when nothing
        falls inside the window.
    """
    start, end = date_range.resolve(now=now, first_weekday=first_weekday)
    stats_by_day: dict[date, DailyFinancialStats] = {}

    for order in orders:
        if _in_window(order.created_at, start, end):
            stats = _bucket(stats_by_day, order.created_at)
            stats.revenue += order.total
            stats.cogs += order.total_cost

    for expense in expenses:
        if _in_window(expense.created_at, start, end):
            stats = _bucket(stats_by_day, expense.created_at)
            stats.operating_costs += expense.amount

    for restock in restocks:
        if _in_window(restock.created_at, start, end):
            stats = _bucket(stats_by_day, restock.created_at)
            stats.incurred_fees += restock.incurred_fees

    logger.debug("Report %s (%s .. %s): %d day(s)", date_range.kind, start, end, len(stats_by_day))
    return sorted(stats_by_day.values(), key=lambda s: s.date, reverse=True)


def summarize(stats: Sequence[DailyFinancialStats]) -> ReportTotals:
    """Sum daily stats into period totals."""
    return ReportTotals(
        days=len(stats),
        revenue=sum((s.revenue for s in stats), ZERO),
        cogs=sum((s.cogs for s in stats), ZERO),
        operating_costs=sum((s.operating_costs for s in stats), ZERO),
        incurred_fees=sum((s.incurred_fees for s in stats), ZERO),
    )
