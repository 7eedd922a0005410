"""Turn restock dictation into restock items.

Restock lines carry an extra amount the sale parser has no slot for: freight
and incidental fees ("phí ship 30k"). Fee phrases are cut out of the text
first, then the remainder goes through the normal line parser.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from kiotnote.catalog.matcher import find_best_match
from kiotnote.domain.catalog import CatalogEntry
from kiotnote.domain.costs import RestockItem
from kiotnote.domain.parsed_line import ParsedLine, ParseFailure
from kiotnote.parser.common import DEFAULT_KEYWORDS, ParserKeywords, phrase_pattern
from kiotnote.parser.order_lines import split_lines, unit_price_from_total
from kiotnote.parser.text_parser import parse_text
from kiotnote.parser.tokenizer import THOUSAND, normalize_numeral
from kiotnote.runtime.logging import get_logger

logger = get_logger(__name__)

ZERO = Decimal("0")
SUGGESTED_MARKUP = Decimal("1.3")


@dataclass(frozen=True)
class ParsedRestockLine:
    """A parsed restock line together with the restock item built from it."""

    parsed: ParsedLine
    item: RestockItem
    catalog_entry: CatalogEntry | None = None


def _fee_pattern(keyword: str, keywords: ParserKeywords) -> re.Pattern[str]:
    suffixes = sorted(set(keywords.multiplier) | set(keywords.currency), key=len, reverse=True)
    suffix_group = "|".join(re.escape(s) for s in suffixes)
    return re.compile(
        phrase_pattern(keyword).pattern
        + r"\s*[:=]?\s*(?P<number>\d+(?:[.,]\d+)*)"
        + rf"(?:\s*(?P<suffix>{suffix_group})(?!\w))?",
        re.IGNORECASE,
    )


def split_additional_cost(text: str, keywords: ParserKeywords = DEFAULT_KEYWORDS) -> tuple[str, Decimal]:
    """Remove fee phrases from ``text`` and return (remaining text, total fee)."""
    remaining = unicodedata.normalize("NFC", text)
    total_fee = ZERO

    for keyword in sorted(keywords.fee, key=len, reverse=True):
        pattern = _fee_pattern(keyword, keywords)
        fees: list[Decimal] = []

        def _take(match: re.Match[str]) -> str:
            value = normalize_numeral(match.group("number"))
            if value is None:
                return match.group(0)
            suffix = (match.group("suffix") or "").lower()
            if suffix in keywords.multiplier:
                value = value * THOUSAND
            fees.append(value)
            return " "

        remaining = pattern.sub(_take, remaining)
        total_fee += sum(fees, ZERO)

    if total_fee:
        logger.debug("Additional cost %s split from %r", total_fee, text)
    return " ".join(remaining.split()), total_fee


def suggested_sale_price(unit_price: Decimal) -> Decimal | None:
    """Default retail price for a restocked product: 30% over purchase price."""
    if unit_price <= 0:
        return None
    return (unit_price * SUGGESTED_MARKUP).quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def parse_restock_line(
    text: str,
    catalog: Sequence[CatalogEntry] = (),
    keywords: ParserKeywords = DEFAULT_KEYWORDS,
) -> ParsedRestockLine | ParseFailure:
    """Parse a restock line such as "Nhập 50 hoa hồng giá 5k phí ship 30k"."""
    remaining, additional_cost = split_additional_cost(text, keywords)
    parsed = parse_text(remaining, keywords)
    if isinstance(parsed, ParseFailure):
        return ParseFailure(raw_text=text, reason=parsed.reason)

    entry = find_best_match(parsed.name, catalog) if catalog else None

    unit_price = parsed.unit_price
    if unit_price > 0 and parsed.price_is_total:
        unit_price = unit_price_from_total(unit_price, parsed.quantity)
    elif unit_price == 0 and entry is not None:
        # The catalog cost price is the last purchase price.
        unit_price = entry.cost_price

    item = RestockItem(
        name=entry.name if entry is not None else parsed.name,
        quantity=parsed.quantity,
        unit_price=unit_price,
        additional_cost=additional_cost,
        suggested_price=suggested_sale_price(unit_price),
    )
    return ParsedRestockLine(parsed=parsed, item=item, catalog_entry=entry)


def parse_restock_lines(
    text: str,
    catalog: Sequence[CatalogEntry] = (),
    keywords: ParserKeywords = DEFAULT_KEYWORDS,
) -> list[ParsedRestockLine | ParseFailure]:
    """Parse every fragment of a multi-item restock utterance."""
    return [parse_restock_line(fragment, catalog, keywords) for fragment in split_lines(text)]
