"""Shared keyword tables and phrase helpers for the line parser.

The built-in tables below cover Vietnamese POS dictation. Extra keywords can be
layered on top from TOML (see kiotnote.runtime.parser_keywords); layers only
extend the built-ins, they never remove entries.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

RESTOCK_KEYWORDS = ("nhập", "mua thêm", "restock", "về kho", "nhập kho")
SALE_KEYWORDS = ("bán", "khách mua", "order", "tính tiền", "lên đơn", "tạo đơn")
TOTAL_PRICE_KEYWORDS = ("tổng", "hết", "thành tiền", "total", "sum")
UNIT_PRICE_KEYWORDS = ("mỗi", "từng", "unit", "each", "per", "/")
DISCOUNT_KEYWORDS = ("giảm", "off", "bớt", "chiết khấu", "discount", "km")
FILLER_KEYWORDS = ("cho", "của", "với", "lấy", "giá")

# Detached numeral suffixes: "30 k", "30 nghìn", "30000 đ", "50 %"
MULTIPLIER_SUFFIXES = ("k", "nghìn", "nghin")
CURRENCY_SUFFIXES = ("đ", "d", "vnd")
PERCENT_SUFFIX = "%"

# Freight and incidental fee phrases on restock lines, longest first wins
FEE_KEYWORDS = ("phí ship", "phí vận chuyển", "phí giao hàng", "tiền ship", "phí", "ship")

NUMBER_WORDS: dict[str, int] = {
    "một": 1,
    "mot": 1,
    "hai": 2,
    "ba": 3,
    "bốn": 4,
    "bon": 4,
    "năm": 5,
    "nam": 5,
    "sáu": 6,
    "sau": 6,
    "bảy": 7,
    "bay": 7,
    "tám": 8,
    "tam": 8,
    "chín": 9,
    "chin": 9,
    "mười": 10,
    "muoi": 10,
    "chục": 10,
    "chuc": 10,
}

MAX_QUANTITY = 999

KEYWORD_GROUPS = ("restock", "sale", "total", "unit", "discount", "filler", "multiplier", "currency", "fee")


@dataclass(frozen=True)
class ParserKeywords:
    """Keyword tables consulted by the classifier and role engine."""

    restock: tuple[str, ...] = RESTOCK_KEYWORDS
    sale: tuple[str, ...] = SALE_KEYWORDS
    total: tuple[str, ...] = TOTAL_PRICE_KEYWORDS
    unit: tuple[str, ...] = UNIT_PRICE_KEYWORDS
    discount: tuple[str, ...] = DISCOUNT_KEYWORDS
    filler: tuple[str, ...] = FILLER_KEYWORDS
    multiplier: tuple[str, ...] = MULTIPLIER_SUFFIXES
    currency: tuple[str, ...] = CURRENCY_SUFFIXES
    fee: tuple[str, ...] = FEE_KEYWORDS
    number_words: tuple[tuple[str, int], ...] = tuple(NUMBER_WORDS.items())

    def number_word(self, token: str) -> int | None:
        return dict(self.number_words).get(token)


DEFAULT_KEYWORDS = ParserKeywords()


def _normalize_keywords(raw: Any) -> tuple[str, ...]:
    """Normalize a TOML keywords value into a tuple of lowercase phrases."""
    if isinstance(raw, str):
        value = raw.strip().lower()
        return (value,) if value else tuple()
    if isinstance(raw, list):
        return tuple(str(v).strip().lower() for v in raw if str(v).strip())
    return tuple()


def _merge(base: Sequence[str], extra: Iterable[str]) -> tuple[str, ...]:
    merged = list(base)
    for keyword in extra:
        if keyword not in merged:
            merged.append(keyword)
    return tuple(merged)


def build_parser_keywords(configs: Sequence[Mapping[str, Any]] | None = None) -> ParserKeywords:
    """Layer in-memory keyword configs on top of the built-in tables.

    Each config may carry a ``[keywords]`` table whose keys are keyword group
    names (restock, sale, total, unit, discount, filler, multiplier, currency,
    fee) and a ``[number_words]`` table mapping words to integers.
    """
    groups: dict[str, tuple[str, ...]] = {name: getattr(DEFAULT_KEYWORDS, name) for name in KEYWORD_GROUPS}
    number_words = dict(DEFAULT_KEYWORDS.number_words)

    for config in configs or ():
        keyword_table = config.get("keywords", {})
        if isinstance(keyword_table, Mapping):
            for group, raw in keyword_table.items():
                if group not in groups:
                    continue
                groups[group] = _merge(groups[group], _normalize_keywords(raw))

        word_table = config.get("number_words", {})
        if isinstance(word_table, Mapping):
            for word, value in word_table.items():
                if isinstance(value, int) and 0 < value <= MAX_QUANTITY:
                    number_words[str(word).strip().lower()] = value

    return ParserKeywords(number_words=tuple(number_words.items()), **groups)


def split_phrase(phrase: str) -> tuple[str, ...]:
    return tuple(phrase.lower().split())


def find_phrase_spans(
    lowered_tokens: Sequence[str],
    phrases: Iterable[str],
    claimed: set[int] | None = None,
) -> list[tuple[int, int]]:
    """Find non-overlapping token spans matching any phrase.

    Longer phrases are tried first at each position. Indices in ``claimed``
    cannot be part of a match, and matched indices are added to it.
    """
    if claimed is None:
        claimed = set()
    candidates = sorted({split_phrase(p) for p in phrases if split_phrase(p)}, key=len, reverse=True)

    spans: list[tuple[int, int]] = []
    i = 0
    while i < len(lowered_tokens):
        matched = False
        for phrase in candidates:
            end = i + len(phrase)
            if end > len(lowered_tokens):
                continue
            if tuple(lowered_tokens[i:end]) != phrase:
                continue
            if any(index in claimed for index in range(i, end)):
                continue
            spans.append((i, end))
            claimed.update(range(i, end))
            i = end
            matched = True
            break
        if not matched:
            i += 1
    return spans


@lru_cache(maxsize=256)
def phrase_pattern(phrase: str) -> re.Pattern[str]:
    """Compile a whole-word pattern for a keyword phrase.

    Edges made of letters or digits must sit on a word boundary so that "bán"
    does not fire inside "bánh"; symbol keywords such as "/" match anywhere.
    """
    words = phrase.lower().split()
    body = r"\s+".join(re.escape(word) for word in words)
    prefix = r"(?<!\w)" if words[0][0].isalnum() else ""
    suffix = r"(?!\w)" if words[-1][-1].isalnum() else ""
    return re.compile(prefix + body + suffix)
