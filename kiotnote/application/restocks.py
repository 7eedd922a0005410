"""Restock workflow: parse a restock bill, save it and refresh the catalog."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from kiotnote.catalog.text import fold_diacritics
from kiotnote.domain.catalog import CatalogEntry
from kiotnote.domain.costs import RestockBill, RestockItem
from kiotnote.domain.parsed_line import ParseFailure
from kiotnote.domain.repository import RecordRepository
from kiotnote.parser import ParsedRestockLine, ParserKeywords, parse_restock_lines
from kiotnote.runtime import JsonRecordStore, get_logger, load_parser_keywords

logger = get_logger(__name__)

RestockStatus = Literal["ok", "error"]


@dataclass(frozen=True)
class RecordRestockRequest:
    """Inputs for the restock workflow."""

    text: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class RecordRestockResult:
    """Outcome for the restock workflow."""

    status: RestockStatus
    restock: RestockBill | None = None
    lines: tuple[ParsedRestockLine, ...] = ()
    failures: tuple[ParseFailure, ...] = ()
    catalog: tuple[CatalogEntry, ...] = ()
    error: str | None = None


def apply_restock_to_catalog(catalog: Sequence[CatalogEntry], items: Iterable[RestockItem]) -> list[CatalogEntry]:
    """
    Return a new catalog with restocked purchase prices applied.

    Known products (same folded name) get the new cost price and keep their
    sale price. Unknown products are added with the suggested sale price.
    Items without a unit price leave the catalog unchanged.
    """
    updated = list(catalog)
    index_by_name = {fold_diacritics(entry.name): i for i, entry in enumerate(updated)}

    for item in items:
        if item.unit_price <= 0:
            continue
        key = fold_diacritics(item.name)
        position = index_by_name.get(key)
        if position is None:
            updated.append(
                CatalogEntry(
                    name=item.name,
                    price=item.suggested_price or item.unit_price,
                    cost_price=item.unit_price,
                )
            )
            index_by_name[key] = len(updated) - 1
            logger.info("Added %r to catalog at %s", item.name, updated[-1].price)
        else:
            existing = updated[position]
            updated[position] = CatalogEntry(
                name=existing.name,
                price=existing.price,
                cost_price=item.unit_price,
                barcode=existing.barcode,
            )
    return updated


def run_record_restock(
    request: RecordRestockRequest,
    store: RecordRepository | None = None,
    keywords: ParserKeywords | None = None,
) -> RecordRestockResult:
    """Parse ``request.text`` into one restock bill and save it."""
    store = store or JsonRecordStore()
    keywords = keywords or load_parser_keywords()
    catalog = store.load_catalog()

    results = parse_restock_lines(request.text, catalog, keywords)
    lines = tuple(result for result in results if isinstance(result, ParsedRestockLine))
    failures = tuple(result for result in results if isinstance(result, ParseFailure))

    if not lines:
        return RecordRestockResult(status="error", failures=failures, error="No restock items found")

    restock = RestockBill(
        created_at=request.created_at or datetime.now(),
        items=tuple(line.item for line in lines),
    )
    store.save_restock(restock)

    updated_catalog = apply_restock_to_catalog(catalog, restock.items)
    store.save_catalog(updated_catalog)
    return RecordRestockResult(
        status="ok",
        restock=restock,
        lines=lines,
        failures=failures,
        catalog=tuple(updated_catalog),
    )
