"""Parse preview workflow: route each line to the sale or restock parser."""

from __future__ import annotations

from dataclasses import dataclass

from kiotnote.domain.parsed_line import Intent, ParseFailure
from kiotnote.domain.repository import RecordRepository
from kiotnote.parser import (
    ParsedOrderLine,
    ParsedRestockLine,
    ParserKeywords,
    classify_intent,
    parse_order_line,
    parse_restock_line,
    split_lines,
)
from kiotnote.runtime import JsonRecordStore, load_parser_keywords


@dataclass(frozen=True)
class ParsePreviewRequest:
    """Inputs for the parse preview workflow.

    ``intent`` forces every line to one parser; None routes each line by its
    detected intent, defaulting to sale.
    """

    text: str
    intent: Intent | None = None


@dataclass(frozen=True)
class ParsePreviewResult:
    """Parsed lines in input order, failures included."""

    lines: tuple[ParsedOrderLine | ParsedRestockLine | ParseFailure, ...]


def run_parse_preview(
    request: ParsePreviewRequest,
    store: RecordRepository | None = None,
    keywords: ParserKeywords | None = None,
) -> ParsePreviewResult:
    """Parse text against the stored catalog and price history without saving."""
    store = store or JsonRecordStore()
    keywords = keywords or load_parser_keywords()
    catalog = store.load_catalog()
    history = store.load_price_history()

    lines: list[ParsedOrderLine | ParsedRestockLine | ParseFailure] = []
    for fragment in split_lines(request.text):
        intent = request.intent or classify_intent(fragment, keywords) or Intent.SALE
        if intent is Intent.RESTOCK:
            lines.append(parse_restock_line(fragment, catalog, keywords))
        else:
            lines.append(parse_order_line(fragment, catalog, history, keywords))
    return ParsePreviewResult(lines=tuple(lines))
