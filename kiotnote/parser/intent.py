"""Keyword classifier for transaction intent and price context.

Both classifications are pure functions of the lowercased text. Keyword sets
are checked in a fixed order (restock before sale, total before unit): a
phrase from a later set that overlaps text already claimed by an earlier set
is ignored. If both sets still match, or neither does, the result is unknown.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from kiotnote.domain.parsed_line import Intent
from kiotnote.parser.common import DEFAULT_KEYWORDS, ParserKeywords, phrase_pattern


@dataclass(frozen=True)
class TextContext:
    """Classifier output for one line."""

    intent: Intent | None
    price_is_total: bool | None


def _prepare(text: str) -> str:
    return unicodedata.normalize("NFC", text).lower()


def _overlaps(start: int, end: int, claimed: Iterable[tuple[int, int]]) -> bool:
    return any(start < c_end and c_start < end for c_start, c_end in claimed)


def _match_in_order(text: str, keyword_sets: Sequence[Sequence[str]]) -> list[bool]:
    """Return, per keyword set, whether it matched any unclaimed span."""
    claimed: list[tuple[int, int]] = []
    results: list[bool] = []
    for keywords in keyword_sets:
        matched = False
        # Longer phrases claim first so "nhập kho" wins over "nhập".
        for keyword in sorted(keywords, key=len, reverse=True):
            for match in phrase_pattern(keyword).finditer(text):
                if _overlaps(match.start(), match.end(), claimed):
                    continue
                claimed.append((match.start(), match.end()))
                matched = True
        results.append(matched)
    return results


def classify_intent(text: str, keywords: ParserKeywords = DEFAULT_KEYWORDS) -> Intent | None:
    """Detect sale vs. restock intent; None when ambiguous or absent."""
    is_restock, is_sale = _match_in_order(_prepare(text), (keywords.restock, keywords.sale))
    if is_restock and not is_sale:
        return Intent.RESTOCK
    if is_sale and not is_restock:
        return Intent.SALE
    return None


def classify_price_context(text: str, keywords: ParserKeywords = DEFAULT_KEYWORDS) -> bool | None:
    """Detect whether a spoken price is a total (True) or per unit (False)."""
    is_total, is_unit = _match_in_order(_prepare(text), (keywords.total, keywords.unit))
    if is_total and not is_unit:
        return True
    if is_unit and not is_total:
        return False
    return None


def classify(text: str, keywords: ParserKeywords = DEFAULT_KEYWORDS) -> TextContext:
    return TextContext(
        intent=classify_intent(text, keywords),
        price_is_total=classify_price_context(text, keywords),
    )
