"""Restock bills and operating expenses."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class RestockItem:
    """A restocked product line.

    ``additional_cost`` holds freight and other incidental fees. Unlike the
    purchase price it hits profit on the day of the restock.
    """

    name: str
    quantity: int
    unit_price: Decimal
    additional_cost: Decimal = Decimal("0")
    suggested_price: Decimal | None = None

    @property
    def purchase_cost(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class RestockBill:
    """A historical restock (import) bill."""

    created_at: datetime
    items: tuple[RestockItem, ...]
    id: str = field(default_factory=_new_id)

    @property
    def incurred_fees(self) -> Decimal:
        return sum((item.additional_cost for item in self.items), Decimal("0"))

    @property
    def total_cost(self) -> Decimal:
        return sum((item.purchase_cost for item in self.items), Decimal("0")) + self.incurred_fees


@dataclass(frozen=True)
class OperatingExpense:
    """Rent, salaries, utilities and other operating costs."""

    title: str
    amount: Decimal
    created_at: datetime
    note: str | None = None
    id: str = field(default_factory=_new_id)
