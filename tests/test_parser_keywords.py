"""Tests for parser keyword layers loaded from TOML."""

from pathlib import Path

from kiotnote.domain.parsed_line import Intent, ParsedLine
from kiotnote.parser.common import DEFAULT_KEYWORDS, build_parser_keywords
from kiotnote.parser.text_parser import parse_text
from kiotnote.runtime.parser_keywords import load_parser_keywords

SHOP_KEYWORDS = """
[keywords]
sale = ["chốt đơn"]
filler = "nha"

[number_words]
"tá" = 12
"""


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_layers_extend_builtin_keywords(tmp_path: Path) -> None:
    path = _write(tmp_path / "keywords.toml", SHOP_KEYWORDS)

    keywords = load_parser_keywords((str(path),))

    assert "chốt đơn" in keywords.sale
    assert set(DEFAULT_KEYWORDS.sale) <= set(keywords.sale)
    assert "nha" in keywords.filler
    assert keywords.number_word("tá") == 12
    assert keywords.number_word("hai") == 2


def test_loaded_keywords_drive_the_parser(tmp_path: Path) -> None:
    keywords = load_parser_keywords((str(_write(tmp_path / "keywords.toml", SHOP_KEYWORDS)),))

    parsed = parse_text("chốt đơn tá trứng nha", keywords)

    assert isinstance(parsed, ParsedLine)
    assert parsed.intent is Intent.SALE
    assert parsed.quantity == 12
    assert parsed.name == "trứng"


def test_missing_file_gives_builtin_keywords(tmp_path: Path) -> None:
    assert load_parser_keywords((str(tmp_path / "missing.toml"),)) == DEFAULT_KEYWORDS


def test_project_config_is_used_by_default(kiotnote_home: Path) -> None:
    _write(kiotnote_home / "config" / "parser_keywords.toml", '[keywords]\nrestock = ["lấy hàng"]\n')

    assert "lấy hàng" in load_parser_keywords().restock


def test_build_ignores_unknown_groups_and_bad_number_words() -> None:
    keywords = build_parser_keywords(
        [
            {
                "keywords": {"nonsense": ["x"], "fee": ["cước"]},
                "number_words": {"zero": 0, "huge": 5000, "text": "ba", "đôi": 2},
            }
        ]
    )

    assert "cước" in keywords.fee
    assert keywords.number_word("zero") is None
    assert keywords.number_word("huge") is None
    assert keywords.number_word("text") is None
    assert keywords.number_word("đôi") == 2


def test_build_without_configs_is_default() -> None:
    assert build_parser_keywords() == DEFAULT_KEYWORDS
