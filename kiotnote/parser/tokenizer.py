"""Tokenizer and numeral normalization for dictated order lines.

Numeral shorthand handled here:
- "30k" -> 30000 (k multiplies by 1000)
- "30.000" / "30,000" -> 30000 (3-digit final group is a thousands mark)
- "2,5" / "2.5" -> 2.5 (otherwise the separator is a decimal point)
- "50%" -> 50, percent
- "30000đ" / "30000d" -> 30000, currency marker only

Detached suffixes ("30 k", "30 nghìn", "50 %") are resolved by the role
engine, which owns token consumption.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

# A number keeps inner "." / "," groups and an optional trailing "%"; letters
# glued to it ("30k", "30.000đ") stay in the same token.
TOKEN_PATTERN = re.compile(r"\d+(?:[.,]\d+)*%?[^\W_]*|[^\W_]+|%")

NUMBER_PATTERN = re.compile(r"^(\d+(?:[.,]\d+)*)([k%đd])?$", re.IGNORECASE)

THOUSAND = Decimal("1000")


@dataclass(frozen=True)
class NumberToken:
    """A token that parsed as a number."""

    text: str
    value: Decimal
    suffix: str | None = None

    @property
    def is_percent(self) -> bool:
        return self.suffix == "%"

    @property
    def has_price_suffix(self) -> bool:
        """True for "k" multipliers and "đ"/"d" currency markers."""
        return self.suffix in ("k", "đ", "d")


@dataclass(frozen=True)
class WordToken:
    """Any token that is not a number."""

    text: str


def tokenize(text: str) -> list[str]:
    """Split free text into word tokens, keeping numerals intact."""
    if not text or not text.strip():
        return []
    normalized = unicodedata.normalize("NFC", text)
    return TOKEN_PATTERN.findall(normalized)


def normalize_numeral(raw: str) -> Decimal | None:
    """Convert a digit string with "." / "," separators to a Decimal."""
    if "." in raw or "," in raw:
        groups = re.split(r"[.,]", raw)
        if len(groups[-1]) == 3:
            raw = "".join(groups)
        else:
            raw = raw.replace(",", ".")
    try:
        value = Decimal(raw)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


def classify_token(token: str) -> NumberToken | WordToken:
    """Return a tagged NumberToken or WordToken. Never raises."""
    lowered = token.lower()
    match = NUMBER_PATTERN.match(lowered)
    if not match:
        return WordToken(token)

    value = normalize_numeral(match.group(1))
    if value is None:
        # "2.5.3" looks numeric but is not a number; keep it as a word
        return WordToken(token)

    suffix = match.group(2)
    if suffix == "k":
        value = value * THOUSAND
    return NumberToken(text=token, value=value, suffix=suffix)
