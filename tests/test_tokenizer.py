"""Tests for tokenization and numeral normalization."""

import unicodedata
from decimal import Decimal

import pytest
from kiotnote.parser.tokenizer import NumberToken, WordToken, classify_token, normalize_numeral, tokenize


def test_tokenize_keeps_numerals_and_words() -> None:
    assert tokenize("2 cà phê 30k") == ["2", "cà", "phê", "30k"]


def test_tokenize_keeps_grouped_numerals_and_currency() -> None:
    assert tokenize("bún bò 50.000đ") == ["bún", "bò", "50.000đ"]


def test_tokenize_drops_punctuation_but_keeps_detached_percent() -> None:
    assert tokenize("trà, giảm 10 %!") == ["trà", "giảm", "10", "%"]


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_tokenize_blank_input(text: str) -> None:
    assert tokenize(text) == []


def test_tokenize_normalizes_decomposed_unicode() -> None:
    decomposed = unicodedata.normalize("NFD", "cà phê")
    assert tokenize(decomposed) == ["cà", "phê"]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("30", Decimal("30")),
        ("30.000", Decimal("30000")),
        ("30,000", Decimal("30000")),
        ("1.500.000", Decimal("1500000")),
        ("2,5", Decimal("2.5")),
        ("2.5", Decimal("2.5")),
        ("0,75", Decimal("0.75")),
    ],
)
def test_normalize_numeral(raw: str, expected: Decimal) -> None:
    assert normalize_numeral(raw) == expected


def test_normalize_numeral_rejects_malformed_groups() -> None:
    assert normalize_numeral("2.5.3") is None


@pytest.mark.parametrize(
    ("token", "value", "suffix"),
    [
        ("30k", Decimal("30000"), "k"),
        ("30K", Decimal("30000"), "k"),
        ("1.5k", Decimal("1500"), "k"),
        ("2.000", Decimal("2000"), None),
        ("50%", Decimal("50"), "%"),
        ("30000đ", Decimal("30000"), "đ"),
        ("30000d", Decimal("30000"), "d"),
    ],
)
def test_classify_token_numbers(token: str, value: Decimal, suffix: str | None) -> None:
    result = classify_token(token)
    assert isinstance(result, NumberToken)
    assert result.value == value
    assert result.suffix == suffix


def test_percent_and_price_suffix_flags() -> None:
    percent = classify_token("50%")
    price = classify_token("30k")
    plain = classify_token("3")

    assert isinstance(percent, NumberToken) and percent.is_percent and not percent.has_price_suffix
    assert isinstance(price, NumberToken) and price.has_price_suffix and not price.is_percent
    assert isinstance(plain, NumberToken) and not plain.has_price_suffix and not plain.is_percent


@pytest.mark.parametrize("token", ["cà", "30kg", "2.5.3", "%", "k"])
def test_classify_token_words(token: str) -> None:
    assert classify_token(token) == WordToken(token)
