"""Catalog resolution for parsed product names."""

from kiotnote.catalog.matcher import CatalogMatch, edit_threshold, find_best_match, levenshtein, match_catalog
from kiotnote.catalog.text import fold_diacritics

__all__ = [
    "CatalogMatch",
    "edit_threshold",
    "find_best_match",
    "fold_diacritics",
    "levenshtein",
    "match_catalog",
]
