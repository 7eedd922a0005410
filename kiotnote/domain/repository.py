"""Storage collaborator contract.

Persistence is owned by the surrounding application. The core only reads
snapshots handed to it; this protocol documents what a store must provide so
workflows can be wired to any backend.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Protocol

from kiotnote.domain.catalog import CatalogEntry
from kiotnote.domain.costs import OperatingExpense, RestockBill
from kiotnote.domain.orders import Order


class RecordRepository(Protocol):
    """Minimal record store used by the application workflows."""

    def load_orders(self) -> list[Order]: ...

    def load_expenses(self) -> list[OperatingExpense]: ...

    def load_restocks(self) -> list[RestockBill]: ...

    def load_catalog(self) -> list[CatalogEntry]: ...

    def load_price_history(self) -> dict[str, Decimal]: ...

    def save_order(self, order: Order) -> None: ...

    def save_expense(self, expense: OperatingExpense) -> None: ...

    def save_restock(self, restock: RestockBill) -> None: ...

    def save_catalog(self, catalog: list[CatalogEntry]) -> None: ...

    def save_price_history(self, history: Mapping[str, Decimal]) -> None: ...


__all__ = ["RecordRepository"]
