"""Tests for restock line parsing and additional cost extraction."""

from decimal import Decimal

import pytest
from kiotnote.domain.catalog import CatalogEntry
from kiotnote.domain.parsed_line import Intent, ParseFailure
from kiotnote.parser.restock_lines import (
    ParsedRestockLine,
    parse_restock_line,
    parse_restock_lines,
    split_additional_cost,
    suggested_sale_price,
)


def _restock(text: str, **kwargs) -> ParsedRestockLine:
    result = parse_restock_line(text, **kwargs)
    assert isinstance(result, ParsedRestockLine), result
    return result


@pytest.mark.parametrize(
    ("text", "remaining", "fee"),
    [
        ("Nhập 50 hoa hồng giá 5k phí ship 30k", "Nhập 50 hoa hồng giá 5k", Decimal("30000")),
        ("nhập 10 thùng bia 250k phí vận chuyển 50.000", "nhập 10 thùng bia 250k", Decimal("50000")),
        ("nhập 5 gạo 100k ship: 20 k", "nhập 5 gạo 100k", Decimal("20000")),
        ("nhập 5 gạo 100k phí ship 15k phí 5k", "nhập 5 gạo 100k", Decimal("20000")),
        ("nhập 5 gạo 100k phí ship", "nhập 5 gạo 100k phí ship", Decimal("0")),
    ],
)
def test_split_additional_cost(text: str, remaining: str, fee: Decimal) -> None:
    assert split_additional_cost(text) == (remaining, fee)


def test_restock_item_from_dictation() -> None:
    result = _restock("Nhập 50 hoa hồng giá 5k phí ship 30k")

    assert result.parsed.intent is Intent.RESTOCK
    assert result.item.name == "hoa hồng"
    assert result.item.quantity == 50
    assert result.item.unit_price == Decimal("5000")
    assert result.item.additional_cost == Decimal("30000")
    assert result.item.suggested_price == Decimal("6500")
    assert result.item.purchase_cost == Decimal("250000")


def test_restock_total_price_is_split() -> None:
    result = _restock("nhập 10 bút tổng 50k")

    assert result.item.unit_price == Decimal("5000")


def test_restock_falls_back_to_catalog_cost_price() -> None:
    catalog = [CatalogEntry(name="Hoa Hồng", price=Decimal("10000"), cost_price=Decimal("4000"))]

    result = _restock("nhập 20 hoa hong", catalog=catalog)

    assert result.catalog_entry == catalog[0]
    assert result.item.name == "Hoa Hồng"
    assert result.item.unit_price == Decimal("4000")


@pytest.mark.parametrize(
    ("unit_price", "expected"),
    [
        (Decimal("5000"), Decimal("6500")),
        (Decimal("3333"), Decimal("4333")),
        (Decimal("0"), None),
    ],
)
def test_suggested_sale_price(unit_price: Decimal, expected: Decimal | None) -> None:
    assert suggested_sale_price(unit_price) == expected


def test_failure_keeps_original_text() -> None:
    text = "nhập 30k phí ship 10k"

    assert parse_restock_line(text) == ParseFailure(raw_text=text, reason="no_name")


def test_parse_restock_lines_splits_fragments() -> None:
    results = parse_restock_lines("nhập 10 bút 5k, nhập 2 thùng giấy 300k\nphí ship 20k")

    assert [type(result) for result in results] == [ParsedRestockLine, ParsedRestockLine, ParseFailure]
