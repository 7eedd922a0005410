"""Free-text order and restock line parser.

Public entry points:
    parse_text(text) -> ParsedLine | ParseFailure
    parse_order_line(text, catalog, price_history) -> ParsedOrderLine | ParseFailure
    parse_restock_line(text, catalog) -> ParsedRestockLine | ParseFailure
"""

from kiotnote.parser.common import DEFAULT_KEYWORDS, ParserKeywords, build_parser_keywords
from kiotnote.parser.intent import TextContext, classify, classify_intent, classify_price_context
from kiotnote.parser.order_lines import (
    ParsedOrderLine,
    build_order_line,
    parse_order_line,
    parse_order_lines,
    remember_prices,
    split_lines,
)
from kiotnote.parser.restock_lines import (
    ParsedRestockLine,
    parse_restock_line,
    parse_restock_lines,
    split_additional_cost,
)
from kiotnote.parser.roles import RoleAssignment, assign_roles
from kiotnote.parser.text_parser import parse_text
from kiotnote.parser.tokenizer import NumberToken, WordToken, classify_token, tokenize

__all__ = [
    "DEFAULT_KEYWORDS",
    "NumberToken",
    "ParsedOrderLine",
    "ParsedRestockLine",
    "ParserKeywords",
    "RoleAssignment",
    "TextContext",
    "WordToken",
    "assign_roles",
    "build_order_line",
    "build_parser_keywords",
    "classify",
    "classify_intent",
    "classify_price_context",
    "classify_token",
    "parse_order_line",
    "parse_order_lines",
    "parse_restock_line",
    "parse_restock_lines",
    "parse_text",
    "remember_prices",
    "split_additional_cost",
    "split_lines",
    "tokenize",
]
