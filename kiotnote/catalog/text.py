"""Diacritic folding for catalog comparisons."""

import unicodedata

# Stroked letters have no Unicode decomposition, so fold them explicitly.
_STROKE_MAP = str.maketrans({"đ": "d", "Đ": "d"})


def fold_diacritics(text: str) -> str:
    """Lowercase and strip Vietnamese tone/vowel marks: "Cà Phê Đá" -> "ca phe da"."""
    decomposed = unicodedata.normalize("NFD", text.translate(_STROKE_MAP))
    stripped = "".join(c for c in decomposed if unicodedata.category(c) != "Mn")
    return unicodedata.normalize("NFC", stripped).lower().strip()
