"""Resolve a free-text product name against the catalog.

Matching stages, first hit wins:
1. Exact match after diacritic folding
2. Substring match in either direction, closest length wins
3. Levenshtein distance within max(2, 40% of the catalog name length),
   smallest distance wins

No match is a normal outcome: the caller keeps the free-text line without
catalog linkage.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from rapidfuzz.distance import Levenshtein

from kiotnote.catalog.text import fold_diacritics
from kiotnote.domain.catalog import CatalogEntry
from kiotnote.runtime.logging import get_logger

logger = get_logger(__name__)

MIN_EDIT_THRESHOLD = 2
EDIT_THRESHOLD_RATIO = 0.4

MatchStage = Literal["exact", "substring", "fuzzy"]


@dataclass(frozen=True)
class CatalogMatch:
    """A resolved catalog entry and how it was found."""

    entry: CatalogEntry
    stage: MatchStage
    distance: int = 0


def levenshtein(a: str, b: str) -> int:
    """Edit distance over code points (insert, delete, substitute cost 1)."""
    return Levenshtein.distance(a, b)


def edit_threshold(catalog_name: str) -> int:
    """Maximum accepted edit distance for a folded catalog name."""
    return max(MIN_EDIT_THRESHOLD, int(len(catalog_name) * EDIT_THRESHOLD_RATIO))


def match_catalog(name: str, catalog: Sequence[CatalogEntry]) -> CatalogMatch | None:
    """Find the best catalog entry for ``name`` and report the stage used."""
    needle = fold_diacritics(name)
    if not needle or not catalog:
        return None

    folded = [(entry, fold_diacritics(entry.name)) for entry in catalog]

    # 1. Exact match (insensitive)
    for entry, entry_name in folded:
        if entry_name == needle:
            return CatalogMatch(entry=entry, stage="exact")

    # 2. Contains match, closest length; min() keeps the first on ties
    contains = [
        (entry, entry_name)
        for entry, entry_name in folded
        if entry_name and (needle in entry_name or entry_name in needle)
    ]
    if contains:
        entry, _ = min(contains, key=lambda pair: abs(len(pair[1]) - len(needle)))
        return CatalogMatch(entry=entry, stage="substring")

    # 3. Fuzzy match
    best: CatalogMatch | None = None
    for entry, entry_name in folded:
        if not entry_name:
            continue
        distance = levenshtein(needle, entry_name)
        if distance > edit_threshold(entry_name):
            continue
        if best is None or distance < best.distance:
            best = CatalogMatch(entry=entry, stage="fuzzy", distance=distance)

    if best is None:
        logger.debug("No catalog match for %r", name)
    return best


def find_best_match(name: str, catalog: Sequence[CatalogEntry]) -> CatalogEntry | None:
    """Return the catalog entry matching ``name``, or None when unresolved."""
    match = match_catalog(name, catalog)
    return match.entry if match is not None else None
