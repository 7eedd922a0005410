"""Product catalog entries, as supplied by the product repository."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class CatalogEntry:
    """A known product. Read-only to the parser and matcher."""

    name: str
    price: Decimal
    cost_price: Decimal = Decimal("0")
    barcode: str | None = None
