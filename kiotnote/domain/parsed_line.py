"""Results produced by the free-text line parser."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Literal


class Intent(str, Enum):
    """Whether a line sells stock or brings it in."""

    SALE = "sale"
    RESTOCK = "restock"


class TokenRole(str, Enum):
    """Role a consumed token plays in a parsed line."""

    QUANTITY = "quantity"
    PRICE = "price"
    DISCOUNT = "discount"
    DISCOUNT_KEYWORD = "discount_keyword"
    # Detached "k", "nghìn", "đ", "%" that belongs to the number before it.
    SUFFIX = "suffix"
    # Numeric token that found no free slot (one item per line).
    DROPPED = "dropped"


@dataclass(frozen=True)
class ParsedLine:
    """Structured result of parsing one utterance.

    ``unit_price`` is the price as spoken. When ``price_is_total`` is True it
    is the amount for all units; order assembly divides it by quantity.
    """

    raw_text: str
    name: str
    quantity: int = 1
    unit_price: Decimal = Decimal("0")
    discount_value: Decimal = Decimal("0")
    discount_is_percent: bool = False
    price_is_total: bool | None = None
    intent: Intent | None = None
    tokens: tuple[str, ...] = ()
    roles: Mapping[int, TokenRole] = field(default_factory=dict)
    name_indices: tuple[int, ...] = ()

    @property
    def effective_intent(self) -> Intent:
        """Intent with the caller default (sale) applied."""
        return self.intent or Intent.SALE


ParseFailureReason = Literal["empty", "no_name"]


@dataclass(frozen=True)
class ParseFailure:
    """Typed "could not understand" result. Never raised."""

    raw_text: str
    reason: ParseFailureReason

    def __bool__(self) -> bool:
        return False
