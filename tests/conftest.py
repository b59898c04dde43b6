"""Shared pytest fixtures for the full Scriptvoice test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from scriptvoice.io.storage import InMemoryItemStore
from scriptvoice.models.datatypes import ScreenplayDocument
from tests.screenplay_fixtures import COFFEE_SHOP_FOUNTAIN, coffee_shop_elements


@pytest.fixture
def memory_store() -> InMemoryItemStore:
    """Provide an empty in-memory item store."""

    return InMemoryItemStore()


@pytest.fixture
def coffee_shop_document() -> ScreenplayDocument:
    """Provide the two-speaker coffee shop scene as a parsed document."""

    return ScreenplayDocument(
        elements=tuple(coffee_shop_elements()),
        filename="coffee-shop",
        raw_content=COFFEE_SHOP_FOUNTAIN,
    )


@pytest.fixture
def coffee_shop_fountain_path(tmp_path: Path) -> Path:
    """Write the coffee shop scene as a Fountain file and return its path."""

    path = tmp_path / "coffee-shop.fountain"
    path.write_text(COFFEE_SHOP_FOUNTAIN, encoding="utf-8")
    return path
