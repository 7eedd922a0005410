"""Create-order workflow: parse dictated text, finalize and save the order."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from kiotnote.domain.orders import EmptyOrderError, Order, OrderDraft
from kiotnote.domain.parsed_line import Intent, ParseFailure
from kiotnote.domain.repository import RecordRepository
from kiotnote.parser import ParsedOrderLine, ParserKeywords, parse_order_lines, remember_prices
from kiotnote.runtime import JsonRecordStore, get_logger, load_parser_keywords

logger = get_logger(__name__)

CreateOrderStatus = Literal["ok", "error"]


@dataclass(frozen=True)
class CreateOrderRequest:
    """Inputs for the create-order workflow."""

    text: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class CreateOrderResult:
    """Outcome for the create-order workflow."""

    status: CreateOrderStatus
    order: Order | None = None
    lines: tuple[ParsedOrderLine, ...] = ()
    failures: tuple[ParseFailure, ...] = ()
    error: str | None = None


def describe_failure(failure: ParseFailure) -> str:
    if failure.reason == "empty":
        return "empty line"
    return f"no product name in {failure.raw_text.strip()!r}"


def run_create_order(
    request: CreateOrderRequest,
    store: RecordRepository | None = None,
    keywords: ParserKeywords | None = None,
) -> CreateOrderResult:
    """Parse ``request.text`` into one order and save it.

    Unparseable lines are reported but do not block the order. Lines that
    read as restocks are refused so stock purchases never count as revenue.
    """
    store = store or JsonRecordStore()
    keywords = keywords or load_parser_keywords()
    catalog = store.load_catalog()
    history = store.load_price_history()

    results = parse_order_lines(request.text, catalog, history, keywords)
    lines = tuple(result for result in results if isinstance(result, ParsedOrderLine))
    failures = tuple(result for result in results if isinstance(result, ParseFailure))

    restock_lines = [line for line in lines if line.parsed.intent is Intent.RESTOCK]
    if restock_lines:
        text = restock_lines[0].parsed.raw_text.strip()
        return CreateOrderResult(
            status="error",
            lines=lines,
            failures=failures,
            error=f"{text!r} looks like a restock; use `kiotnote restock` instead",
        )

    draft = OrderDraft()
    for line in lines:
        draft.add_line(line.line)

    try:
        order = draft.finalize(created_at=request.created_at or datetime.now())
    except EmptyOrderError as exc:
        details = "; ".join(describe_failure(failure) for failure in failures)
        return CreateOrderResult(
            status="error",
            failures=failures,
            error=f"{exc}: {details}" if details else str(exc),
        )

    unpriced = [line.line.name for line in lines if line.line.unit_price == 0]
    if unpriced:
        logger.warning("Order %s has lines without a price: %s", order.id, ", ".join(unpriced))

    store.save_order(order)
    store.save_price_history(remember_prices(history, lines))
    return CreateOrderResult(status="ok", order=order, lines=lines, failures=failures)
