"""Tests for intent and price-context classification."""

import pytest
from kiotnote.domain.parsed_line import Intent
from kiotnote.parser.intent import TextContext, classify, classify_intent, classify_price_context


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Bán 2 cà phê 30k", Intent.SALE),
        ("khách mua 3 bánh mì", Intent.SALE),
        ("lên đơn trà sữa", Intent.SALE),
        ("Nhập 50 hoa hồng giá 5k", Intent.RESTOCK),
        ("nhập kho 10 thùng bia", Intent.RESTOCK),
        ("mua thêm 5 bao gạo", Intent.RESTOCK),
    ],
)
def test_classify_intent(text: str, expected: Intent) -> None:
    assert classify_intent(text) is expected


def test_intent_unknown_without_keywords() -> None:
    assert classify_intent("2 cà phê 30k") is None


def test_intent_unknown_when_both_sets_match() -> None:
    assert classify_intent("nhập hàng về rồi bán") is None


def test_sale_keyword_does_not_fire_inside_longer_word() -> None:
    # "bán" must not match inside "bánh"
    assert classify_intent("2 bánh mì 20k") is None


def test_restock_phrase_claims_overlapping_sale_phrase() -> None:
    # "mua thêm" (restock) is checked first and claims "mua", so "khách mua" is ignored.
    assert classify_intent("khách mua thêm 2 ly") is Intent.RESTOCK


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("3 áo tổng 300k", True),
        ("10 bút hết 25k", True),
        ("thành tiền 90k cho 3 ly", True),
        ("cà phê 30k mỗi ly", False),
        ("cà phê 30k/ly", False),
        ("2 cà phê 30k", None),
        ("tổng 60k mỗi ly 30k", None),
    ],
)
def test_classify_price_context(text: str, expected: bool | None) -> None:
    assert classify_price_context(text) is expected


def test_classify_combines_both() -> None:
    assert classify("Bán 3 áo tổng 300k") == TextContext(intent=Intent.SALE, price_is_total=True)
