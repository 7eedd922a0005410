"""Role assignment engine: decide which tokens are quantity, price, discount
or name.

The engine is index-tracked. Every token index receives at most one role, and
the name is built from whatever no pass consumed.

Passes, in order:
1. Discount scan: a discount keyword consumes itself and the number after it.
2. Number classification, first come first served:
   - percent numbers -> discount
   - numbers >= 1000 or carrying a k/đ/nghìn suffix -> price
   - integers 1..999 -> quantity, then price
   - other small numbers -> price
   Numbers that find no free slot are consumed as DROPPED: one line is one
   item, so "cà phê 30k trà 50k" keeps 30k and drops 50k.
3. Quantity fallback: first bare integer or Vietnamese number word.
4. Name: unconsumed tokens minus intent, price-context and filler keywords.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import Decimal

from kiotnote.domain.parsed_line import TokenRole
from kiotnote.parser.common import (
    DEFAULT_KEYWORDS,
    MAX_QUANTITY,
    PERCENT_SUFFIX,
    ParserKeywords,
    find_phrase_spans,
)
from kiotnote.parser.tokenizer import THOUSAND, NumberToken, classify_token
from kiotnote.runtime.logging import get_logger

logger = get_logger(__name__)

PRICE_THRESHOLD = Decimal("1000")


@dataclass(frozen=True)
class ResolvedNumber:
    """A numeric token with any detached suffix folded in."""

    value: Decimal
    is_percent: bool
    has_price_suffix: bool
    suffix_index: int | None = None


@dataclass
class RoleAssignment:
    """Slots filled by the engine plus the role of every consumed index."""

    tokens: tuple[str, ...]
    roles: dict[int, TokenRole] = field(default_factory=dict)
    quantity: int | None = None
    price: Decimal | None = None
    discount: Decimal | None = None
    discount_is_percent: bool = False
    keyword_indices: frozenset[int] = frozenset()
    name_indices: tuple[int, ...] = ()

    @property
    def name(self) -> str:
        return " ".join(self.tokens[i] for i in self.name_indices)

    def consume(self, index: int, role: TokenRole) -> None:
        if index in self.roles:
            raise AssertionError(f"token {index} already consumed as {self.roles[index].value}")
        self.roles[index] = role


def resolve_number(
    tokens: Sequence[str],
    index: int,
    consumed: dict[int, TokenRole],
    keywords: ParserKeywords = DEFAULT_KEYWORDS,
) -> ResolvedNumber | None:
    """Parse ``tokens[index]`` as a number, looking ahead for a detached suffix."""
    token = classify_token(tokens[index])
    if not isinstance(token, NumberToken):
        return None

    value = token.value
    is_percent = token.is_percent
    has_price_suffix = token.has_price_suffix
    suffix_index = None

    next_index = index + 1
    if token.suffix is None and next_index < len(tokens) and next_index not in consumed:
        following = tokens[next_index].lower()
        if following in keywords.multiplier:
            value = value * THOUSAND
            has_price_suffix = True
            suffix_index = next_index
        elif following in keywords.currency:
            has_price_suffix = True
            suffix_index = next_index
        elif following == PERCENT_SUFFIX:
            is_percent = True
            suffix_index = next_index

    return ResolvedNumber(
        value=value,
        is_percent=is_percent,
        has_price_suffix=has_price_suffix,
        suffix_index=suffix_index,
    )


def _is_small_integer(value: Decimal) -> bool:
    return value == value.to_integral_value() and 1 <= value <= MAX_QUANTITY


def _consume_number(assignment: RoleAssignment, index: int, number: ResolvedNumber, role: TokenRole) -> None:
    assignment.consume(index, role)
    if number.suffix_index is not None:
        assignment.consume(number.suffix_index, TokenRole.SUFFIX)


def _scan_discounts(assignment: RoleAssignment, lowered: list[str], keywords: ParserKeywords) -> None:
    for start, end in find_phrase_spans(lowered, keywords.discount):
        for index in range(start, end):
            if index not in assignment.roles:
                assignment.consume(index, TokenRole.DISCOUNT_KEYWORD)

        if end >= len(lowered) or end in assignment.roles:
            continue
        number = resolve_number(assignment.tokens, end, assignment.roles, keywords)
        if number is None:
            continue
        if assignment.discount is None:
            assignment.discount = number.value
            assignment.discount_is_percent = number.is_percent
            _consume_number(assignment, end, number, TokenRole.DISCOUNT)
        else:
            logger.debug("Dropping extra discount %s in %r", number.value, " ".join(assignment.tokens))
            _consume_number(assignment, end, number, TokenRole.DROPPED)


def _classify_numbers(assignment: RoleAssignment, keywords: ParserKeywords) -> None:
    for index in range(len(assignment.tokens)):
        if index in assignment.roles:
            continue
        number = resolve_number(assignment.tokens, index, assignment.roles, keywords)
        if number is None:
            continue

        role = TokenRole.DROPPED
        if number.is_percent:
            if assignment.discount is None:
                assignment.discount = number.value
                assignment.discount_is_percent = True
                role = TokenRole.DISCOUNT
        elif number.has_price_suffix or number.value >= PRICE_THRESHOLD:
            if assignment.price is None:
                assignment.price = number.value
                role = TokenRole.PRICE
        elif _is_small_integer(number.value):
            if assignment.quantity is None:
                assignment.quantity = int(number.value)
                role = TokenRole.QUANTITY
            elif assignment.price is None:
                assignment.price = number.value
                role = TokenRole.PRICE
        elif assignment.price is None:
            assignment.price = number.value
            role = TokenRole.PRICE

        if role is TokenRole.DROPPED:
            logger.debug("Dropping surplus number %r in %r", assignment.tokens[index], " ".join(assignment.tokens))
        _consume_number(assignment, index, number, role)


def _fallback_quantity(assignment: RoleAssignment, lowered: list[str], keywords: ParserKeywords) -> None:
    for index, token in enumerate(lowered):
        if index in assignment.roles or index in assignment.keyword_indices:
            continue
        if token.isdecimal() and 1 <= int(token) <= MAX_QUANTITY:
            assignment.quantity = int(token)
        else:
            word_value = keywords.number_word(token)
            if word_value is None:
                continue
            assignment.quantity = word_value
        assignment.consume(index, TokenRole.QUANTITY)
        logger.debug("Quantity %d taken from word %r", assignment.quantity, token)
        return


def _keyword_indices(lowered: list[str], keywords: ParserKeywords) -> frozenset[int]:
    claimed: set[int] = set()
    # Same precedence as the classifier: restock before sale, total before unit.
    find_phrase_spans(lowered, keywords.restock, claimed)
    find_phrase_spans(lowered, keywords.sale, claimed)
    find_phrase_spans(lowered, keywords.total, claimed)
    find_phrase_spans(lowered, keywords.unit, claimed)
    find_phrase_spans(lowered, keywords.filler, claimed)
    return frozenset(claimed)


def assign_roles(tokens: Sequence[str], keywords: ParserKeywords = DEFAULT_KEYWORDS) -> RoleAssignment:
    """Run all passes over ``tokens`` and return the filled assignment."""
    assignment = RoleAssignment(tokens=tuple(tokens))
    lowered = [token.lower() for token in assignment.tokens]

    _scan_discounts(assignment, lowered, keywords)
    _classify_numbers(assignment, keywords)

    # Intent, price-context and filler keywords are hidden from the name but keep no role.
    assignment.keyword_indices = _keyword_indices(lowered, keywords)

    if assignment.quantity is None:
        _fallback_quantity(assignment, lowered, keywords)

    assignment.name_indices = tuple(
        index
        for index in range(len(assignment.tokens))
        if index not in assignment.roles and index not in assignment.keyword_indices
    )
    return assignment
