"""Order line and order models."""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from kiotnote.domain.catalog import CatalogEntry


class EmptyOrderError(ValueError):
    """Raised when finalizing an order that has no lines."""


@dataclass(frozen=True)
class OrderLine:
    """A single line of an order.

    ``discount`` is always an amount; percent discounts are converted when the
    line is built.
    """

    name: str
    quantity: int
    unit_price: Decimal
    discount: Decimal = Decimal("0")
    cost_price: Decimal = Decimal("0")

    @property
    def gross_amount(self) -> Decimal:
        return self.unit_price * self.quantity

    @property
    def line_total(self) -> Decimal:
        return self.gross_amount - self.discount

    @property
    def total_cost(self) -> Decimal:
        """Cost of goods sold for this line."""
        return self.cost_price * self.quantity


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Order:
    """A finalized, historical order (bill)."""

    created_at: datetime
    lines: tuple[OrderLine, ...]
    total: Decimal
    id: str = field(default_factory=_new_id)

    @property
    def total_cost(self) -> Decimal:
        return sum((line.total_cost for line in self.lines), Decimal("0"))

    @classmethod
    def from_lines(cls, lines: Sequence[OrderLine], created_at: datetime, order_id: str | None = None) -> Order:
        total = sum((line.line_total for line in lines), Decimal("0"))
        if order_id is None:
            return cls(created_at=created_at, lines=tuple(lines), total=total)
        return cls(created_at=created_at, lines=tuple(lines), total=total, id=order_id)


@dataclass
class OrderDraft:
    """In-progress order that lines are appended to before checkout."""

    lines: list[OrderLine] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return sum((line.line_total for line in self.lines), Decimal("0"))

    def add_line(self, line: OrderLine) -> None:
        self.lines.append(line)

    def remove_line(self, index: int) -> OrderLine:
        return self.lines.pop(index)

    def add_catalog_entry(self, entry: CatalogEntry) -> OrderLine:
        """Add one unit of a catalog product, merging with an identical line."""
        for index, line in enumerate(self.lines):
            if line.name == entry.name and line.unit_price == entry.price:
                merged = OrderLine(
                    name=line.name,
                    quantity=line.quantity + 1,
                    unit_price=line.unit_price,
                    discount=line.discount,
                    cost_price=line.cost_price,
                )
                self.lines[index] = merged
                return merged

        line = OrderLine(name=entry.name, quantity=1, unit_price=entry.price, cost_price=entry.cost_price)
        self.lines.append(line)
        return line

    def finalize(self, created_at: datetime) -> Order:
        """Freeze the draft into an Order. Lines are immutable afterwards."""
        if not self.lines:
            raise EmptyOrderError("Cannot finalize an order without lines")
        return Order.from_lines(self.lines, created_at=created_at)

    def clear(self) -> None:
        self.lines.clear()
