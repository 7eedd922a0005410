"""Shared pytest fixtures for kiotnote tests."""

from __future__ import annotations

from collections.abc import Iterator
from decimal import Decimal
from pathlib import Path

import pytest
from kiotnote.domain.catalog import CatalogEntry
from kiotnote.runtime.parser_keywords import load_parser_keywords
from kiotnote.runtime.paths import ProjectPaths, reset_paths
from kiotnote.runtime.record_storage import JsonRecordStore


@pytest.fixture
def kiotnote_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point KIOTNOTE_HOME at a temporary directory for the duration of a test."""
    monkeypatch.setenv("KIOTNOTE_HOME", str(tmp_path))
    reset_paths()
    load_parser_keywords.cache_clear()
    yield tmp_path
    reset_paths()
    load_parser_keywords.cache_clear()


@pytest.fixture
def store(tmp_path: Path) -> JsonRecordStore:
    return JsonRecordStore(ProjectPaths(root=tmp_path))


@pytest.fixture
def catalog() -> list[CatalogEntry]:
    return [
        CatalogEntry(name="Cà Phê", price=Decimal("25000"), cost_price=Decimal("8000")),
        CatalogEntry(name="Cà Phê Sữa Đá", price=Decimal("30000"), cost_price=Decimal("10000")),
        CatalogEntry(name="Trà Sữa", price=Decimal("35000"), cost_price=Decimal("12000")),
        CatalogEntry(name="Bánh Mì", price=Decimal("20000"), cost_price=Decimal("9000"), barcode="8930001"),
    ]
