"""JSON file storage for orders, expenses, restocks, catalog and price history.

Directory structure:
    data/
    ├── orders.json         - Finalized orders
    ├── expenses.json       - Operating expenses
    ├── restocks.json       - Restock bills
    ├── catalog.json        - Product catalog snapshot
    └── price_history.json  - Last unit price per lowercased product name

Decimals are stored as strings and datetimes as ISO 8601 so values survive a
round trip exactly.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, TypeVar

from kiotnote.domain.catalog import CatalogEntry
from kiotnote.domain.costs import OperatingExpense, RestockBill, RestockItem
from kiotnote.domain.orders import Order, OrderLine
from kiotnote.runtime.logging import get_logger
from kiotnote.runtime.paths import ProjectPaths, get_paths

logger = get_logger(__name__)

T = TypeVar("T")


class RecordStoreError(RuntimeError):
    """Raised when a record file exists but cannot be decoded."""


def _decimal(value: Any) -> Decimal:
    return Decimal(str(value))


def _optional_decimal(value: Any) -> Decimal | None:
    return None if value is None else _decimal(value)


def order_to_dict(order: Order) -> dict[str, Any]:
    return {
        "id": order.id,
        "created_at": order.created_at.isoformat(),
        "total": str(order.total),
        "lines": [
            {
                "name": line.name,
                "quantity": line.quantity,
                "unit_price": str(line.unit_price),
                "discount": str(line.discount),
                "cost_price": str(line.cost_price),
            }
            for line in order.lines
        ],
    }


def order_from_dict(data: Mapping[str, Any]) -> Order:
    lines = tuple(
        OrderLine(
            name=line["name"],
            quantity=int(line["quantity"]),
            unit_price=_decimal(line["unit_price"]),
            discount=_decimal(line.get("discount", "0")),
            cost_price=_decimal(line.get("cost_price", "0")),
        )
        for line in data["lines"]
    )
    return Order(
        created_at=datetime.fromisoformat(data["created_at"]),
        lines=lines,
        total=_decimal(data["total"]),
        id=data["id"],
    )


def expense_to_dict(expense: OperatingExpense) -> dict[str, Any]:
    return {
        "id": expense.id,
        "title": expense.title,
        "amount": str(expense.amount),
        "created_at": expense.created_at.isoformat(),
        "note": expense.note,
    }


def expense_from_dict(data: Mapping[str, Any]) -> OperatingExpense:
    return OperatingExpense(
        title=data["title"],
        amount=_decimal(data["amount"]),
        created_at=datetime.fromisoformat(data["created_at"]),
        note=data.get("note"),
        id=data["id"],
    )


def restock_to_dict(restock: RestockBill) -> dict[str, Any]:
    return {
        "id": restock.id,
        "created_at": restock.created_at.isoformat(),
        "items": [
            {
                "name": item.name,
                "quantity": item.quantity,
                "unit_price": str(item.unit_price),
                "additional_cost": str(item.additional_cost),
                "suggested_price": None if item.suggested_price is None else str(item.suggested_price),
            }
            for item in restock.items
        ],
    }


def restock_from_dict(data: Mapping[str, Any]) -> RestockBill:
    items = tuple(
        RestockItem(
            name=item["name"],
            quantity=int(item["quantity"]),
            unit_price=_decimal(item["unit_price"]),
            additional_cost=_decimal(item.get("additional_cost", "0")),
            suggested_price=_optional_decimal(item.get("suggested_price")),
        )
        for item in data["items"]
    )
    return RestockBill(created_at=datetime.fromisoformat(data["created_at"]), items=items, id=data["id"])


def catalog_entry_from_dict(data: Mapping[str, Any]) -> CatalogEntry:
    return CatalogEntry(
        name=data["name"],
        price=_decimal(data.get("price", "0")),
        cost_price=_decimal(data.get("cost_price", "0")),
        barcode=data.get("barcode"),
    )


def catalog_entry_to_dict(entry: CatalogEntry) -> dict[str, Any]:
    return {
        "name": entry.name,
        "price": str(entry.price),
        "cost_price": str(entry.cost_price),
        "barcode": entry.barcode,
    }


class JsonRecordStore:
    """RecordRepository backed by one JSON file per record type."""

    def __init__(self, paths: ProjectPaths | None = None) -> None:
        self.paths = paths or get_paths()

    def _read(self, path: Path) -> Any:
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise RecordStoreError(f"Corrupt record file {path}: {exc}") from exc

    def _write(self, path: Path, payload: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")

    def _load_list(self, path: Path, decode: Callable[[Mapping[str, Any]], T]) -> list[T]:
        payload = self._read(path)
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise RecordStoreError(f"Expected a JSON list in {path}")
        try:
            return [decode(item) for item in payload]
        except (KeyError, TypeError, ValueError, InvalidOperation) as exc:
            raise RecordStoreError(f"Malformed record in {path}: {exc}") from exc

    def _append(self, path: Path, record: dict[str, Any]) -> None:
        payload = self._read(path) or []
        if not isinstance(payload, list):
            raise RecordStoreError(f"Expected a JSON list in {path}")
        payload.append(record)
        self._write(path, payload)

    def load_orders(self) -> list[Order]:
        return self._load_list(self.paths.orders, order_from_dict)

    def load_expenses(self) -> list[OperatingExpense]:
        return self._load_list(self.paths.expenses, expense_from_dict)

    def load_restocks(self) -> list[RestockBill]:
        return self._load_list(self.paths.restocks, restock_from_dict)

    def load_catalog(self) -> list[CatalogEntry]:
        return self._load_list(self.paths.catalog, catalog_entry_from_dict)

    def load_price_history(self) -> dict[str, Decimal]:
        payload = self._read(self.paths.price_history)
        if payload is None:
            return {}
        if not isinstance(payload, dict):
            raise RecordStoreError(f"Expected a JSON object in {self.paths.price_history}")
        try:
            return {str(name): _decimal(price) for name, price in payload.items()}
        except InvalidOperation as exc:
            raise RecordStoreError(f"Malformed price in {self.paths.price_history}") from exc

    def save_order(self, order: Order) -> None:
        self._append(self.paths.orders, order_to_dict(order))
        logger.info("Saved order %s (%s) to %s", order.id, order.total, self.paths.orders)

    def save_expense(self, expense: OperatingExpense) -> None:
        self._append(self.paths.expenses, expense_to_dict(expense))
        logger.info("Saved expense %r (%s) to %s", expense.title, expense.amount, self.paths.expenses)

    def save_restock(self, restock: RestockBill) -> None:
        self._append(self.paths.restocks, restock_to_dict(restock))
        logger.info("Saved restock %s (%d item(s)) to %s", restock.id, len(restock.items), self.paths.restocks)

    def save_catalog(self, catalog: list[CatalogEntry]) -> None:
        self._write(self.paths.catalog, [catalog_entry_to_dict(entry) for entry in catalog])
        logger.info("Saved %d catalog entries to %s", len(catalog), self.paths.catalog)

    def save_price_history(self, history: Mapping[str, Decimal]) -> None:
        self._write(self.paths.price_history, {name: str(price) for name, price in sorted(history.items())})
        logger.debug("Saved %d remembered prices", len(history))
