"""Turn parsed text into order lines.

This is the caller-side layer around parse_text(): it applies the price
fallbacks (price history, then catalog), resolves catalog entries, converts
total prices and percent discounts, and builds OrderLine values.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal

from kiotnote.catalog.matcher import find_best_match
from kiotnote.domain.catalog import CatalogEntry
from kiotnote.domain.orders import OrderLine
from kiotnote.domain.parsed_line import ParsedLine, ParseFailure
from kiotnote.parser.common import DEFAULT_KEYWORDS, ParserKeywords
from kiotnote.parser.text_parser import parse_text
from kiotnote.runtime.logging import get_logger

logger = get_logger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENT = Decimal("0.01")

# Split dictated text into lines on newlines and on commas that are not
# inside a numeral ("2,5" and "30,000" stay intact).
LINE_SPLIT_PATTERN = re.compile(r"\n|,(?!\d)|(?<!\d),")

PriceSource = Literal["parsed", "history", "catalog", "none"]


@dataclass(frozen=True)
class ParsedOrderLine:
    """A parsed line together with the order line built from it."""

    parsed: ParsedLine
    line: OrderLine
    catalog_entry: CatalogEntry | None = None
    price_source: PriceSource = "parsed"

    @property
    def is_resolved(self) -> bool:
        return self.catalog_entry is not None


def history_key(name: str) -> str:
    return name.strip().lower()


def resolve_price(
    parsed: ParsedLine,
    entry: CatalogEntry | None,
    price_history: Mapping[str, Decimal] | None,
) -> tuple[Decimal, PriceSource]:
    """Pick the spoken price, else the remembered price, else the catalog price."""
    if parsed.unit_price > 0:
        return parsed.unit_price, "parsed"

    if price_history:
        remembered = price_history.get(history_key(parsed.name))
        if remembered is None and entry is not None:
            remembered = price_history.get(history_key(entry.name))
        if remembered is not None and remembered > 0:
            return remembered, "history"

    if entry is not None and entry.price > 0:
        return entry.price, "catalog"

    return ZERO, "none"


def unit_price_from_total(total: Decimal, quantity: int) -> Decimal:
    """Split a spoken total across units, rounded half-up to 0.01."""
    if quantity <= 1:
        return total
    return (total / quantity).quantize(CENT, rounding=ROUND_HALF_UP)


def discount_amount(parsed: ParsedLine, gross: Decimal) -> Decimal:
    """Convert the parsed discount to an amount of ``gross``, clamped and rounded to 0.01."""
    if gross <= 0 or parsed.discount_value <= 0:
        return ZERO
    if parsed.discount_is_percent:
        amount = gross * parsed.discount_value / HUNDRED
    else:
        amount = parsed.discount_value
    return min(amount, gross).quantize(CENT, rounding=ROUND_HALF_UP)


def build_order_line(
    parsed: ParsedLine,
    catalog: Sequence[CatalogEntry] = (),
    price_history: Mapping[str, Decimal] | None = None,
) -> ParsedOrderLine:
    """Build an OrderLine from a ParsedLine with catalog and history fallbacks."""
    entry = find_best_match(parsed.name, catalog) if catalog else None
    if entry is not None:
        logger.debug("Resolved %r to catalog entry %r", parsed.name, entry.name)

    price, source = resolve_price(parsed, entry, price_history)
    if source == "parsed" and parsed.price_is_total:
        spoken_total = price
        price = unit_price_from_total(spoken_total, parsed.quantity)
        discount = discount_amount(parsed, spoken_total)
        if discount > 0:
            # Discount is taken off the spoken total; unit rounding is absorbed
            # so the line still nets to total minus discount.
            discount = max(price * parsed.quantity - (spoken_total - discount), ZERO)
    else:
        discount = discount_amount(parsed, price * parsed.quantity)

    line = OrderLine(
        name=entry.name if entry is not None else parsed.name,
        quantity=parsed.quantity,
        unit_price=price,
        discount=discount,
        cost_price=entry.cost_price if entry is not None else ZERO,
    )
    return ParsedOrderLine(parsed=parsed, line=line, catalog_entry=entry, price_source=source)


def parse_order_line(
    text: str,
    catalog: Sequence[CatalogEntry] = (),
    price_history: Mapping[str, Decimal] | None = None,
    keywords: ParserKeywords = DEFAULT_KEYWORDS,
) -> ParsedOrderLine | ParseFailure:
    """Parse one line of text into an order line, or a ParseFailure."""
    parsed = parse_text(text, keywords)
    if isinstance(parsed, ParseFailure):
        return parsed
    return build_order_line(parsed, catalog, price_history)


def split_lines(text: str) -> list[str]:
    """Split dictated text into non-blank line fragments."""
    return [fragment.strip() for fragment in LINE_SPLIT_PATTERN.split(text) if fragment.strip()]


def parse_order_lines(
    text: str,
    catalog: Sequence[CatalogEntry] = (),
    price_history: Mapping[str, Decimal] | None = None,
    keywords: ParserKeywords = DEFAULT_KEYWORDS,
) -> list[ParsedOrderLine | ParseFailure]:
    """Parse every fragment of a multi-item utterance, keeping failures in place."""
    return [parse_order_line(fragment, catalog, price_history, keywords) for fragment in split_lines(text)]


def remember_prices(
    price_history: Mapping[str, Decimal],
    results: Iterable[ParsedOrderLine | ParseFailure],
) -> dict[str, Decimal]:
    """Return a copy of ``price_history`` updated with every priced line."""
    updated = dict(price_history)
    for result in results:
        if not isinstance(result, ParsedOrderLine):
            continue
        if result.line.unit_price > 0:
            updated[history_key(result.parsed.name)] = result.line.unit_price
    return updated
