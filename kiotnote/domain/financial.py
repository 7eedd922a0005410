"""Daily profit and loss statistics.

Stored fields are additive accumulators; profit figures are always derived
so a bucket can never hold an inconsistent net profit.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def _margin(net_profit: Decimal, revenue: Decimal) -> Decimal:
    if revenue == 0:
        return ZERO
    return net_profit / revenue * HUNDRED


@dataclass
class DailyFinancialStats:
    """Aggregated figures for one local calendar day."""

    date: date
    revenue: Decimal = ZERO
    cogs: Decimal = ZERO
    operating_costs: Decimal = ZERO
    incurred_fees: Decimal = ZERO

    @property
    def gross_profit(self) -> Decimal:
        return self.revenue - self.cogs

    @property
    def net_profit(self) -> Decimal:
        return self.gross_profit - (self.operating_costs + self.incurred_fees)

    @property
    def profit_margin(self) -> Decimal:
        """Net profit as a percentage of revenue (0 when there is no revenue)."""
        return _margin(self.net_profit, self.revenue)


@dataclass(frozen=True)
class ReportTotals:
    """Period totals across a list of daily stats."""

    days: int
    revenue: Decimal
    cogs: Decimal
    operating_costs: Decimal
    incurred_fees: Decimal

    @property
    def gross_profit(self) -> Decimal:
        return self.revenue - self.cogs

    @property
    def net_profit(self) -> Decimal:
        return self.gross_profit - (self.operating_costs + self.incurred_fees)

    @property
    def profit_margin(self) -> Decimal:
        return _margin(self.net_profit, self.revenue)
