"""Parse one line of free text into a ParsedLine."""

from __future__ import annotations

from decimal import Decimal

from kiotnote.domain.parsed_line import ParsedLine, ParseFailure
from kiotnote.parser.common import DEFAULT_KEYWORDS, ParserKeywords
from kiotnote.parser.intent import classify
from kiotnote.parser.roles import assign_roles
from kiotnote.parser.tokenizer import tokenize
from kiotnote.runtime.logging import get_logger

logger = get_logger(__name__)


def parse_text(text: str, keywords: ParserKeywords = DEFAULT_KEYWORDS) -> ParsedLine | ParseFailure:
    """
    Parse a typed or dictated line such as "Bán 2 cà phê 30k".

    Supports inputs like:
    - "2 cà phê 30k"
    - "cà phê 30k 2"
    - "bún bò hai tô 50.000"
    - "3 trà sữa giảm 10%"

    Returns:
        ParsedLine, or ParseFailure when the text is blank or nothing is left
        over for a product name. Malformed text never raises.
    """
    stripped = text.strip()
    if not stripped:
        return ParseFailure(raw_text=text, reason="empty")

    tokens = tokenize(stripped)
    if not tokens:
        return ParseFailure(raw_text=text, reason="empty")

    context = classify(stripped, keywords)
    assignment = assign_roles(tokens, keywords)

    name = assignment.name
    if not name:
        logger.debug("No product name left in %r", stripped)
        return ParseFailure(raw_text=text, reason="no_name")

    return ParsedLine(
        raw_text=text,
        name=name,
        quantity=assignment.quantity if assignment.quantity is not None else 1,
        unit_price=assignment.price if assignment.price is not None else Decimal("0"),
        discount_value=assignment.discount if assignment.discount is not None else Decimal("0"),
        discount_is_percent=assignment.discount_is_percent,
        price_is_total=context.price_is_total,
        intent=context.intent,
        tokens=assignment.tokens,
        roles=dict(assignment.roles),
        name_indices=assignment.name_indices,
    )
