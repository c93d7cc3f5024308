"""
Pytest fixtures shared by the restock tests.

All dates are fixed so evaluations never depend on the wall clock, and every
file the code writes goes under pytest's tmp_path.
"""

from datetime import date
from typing import Callable

import pytest

from restock import settings
from restock.schemas import InventoryItem
from restock.store import ItemStore

TODAY = date(2026, 10, 18)


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================

@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def make_item() -> Callable[..., InventoryItem]:
    """Factory for items; any field can be overridden by its snake_case name."""
    counter = {"next_id": 1}

    def _make(**overrides) -> InventoryItem:
        data = {
            "id": str(counter["next_id"]),
            "name": f"Item {counter['next_id']}",
            "unit": "kg",
            "current_stock": 10,
            "requirement_per_recipe": 1,
            "recipes_today": 1,
            "lead_time": 1,
            "supplier_whatsapp": None,
        }
        data.update(overrides)
        counter["next_id"] += 1
        return InventoryItem(**data)

    return _make


@pytest.fixture
def seed_items() -> list[InventoryItem]:
    """The four seed materials: Tepung Terigu, Gula Pasir, Kotak Kemasan, Mentega."""
    return [InventoryItem(**row) for row in settings.SEED_ITEMS]


# =============================================================================
# STORAGE / OUTPUT FIXTURES
# =============================================================================

@pytest.fixture
def store(tmp_path) -> ItemStore:
    return ItemStore(tmp_path / "data" / "inventory_items.csv")


@pytest.fixture
def seeded_store(store: ItemStore) -> ItemStore:
    store.seed_if_empty()
    return store


@pytest.fixture
def output_dir(tmp_path, monkeypatch):
    """Redirects report output to a temporary directory and disables the webhook."""
    out = tmp_path / "output"
    monkeypatch.setattr(settings, "OUTPUT_DIR", out)
    monkeypatch.setattr(settings, "SAVE_JSON_OUTPUT", True)
    monkeypatch.setattr(settings, "REPORT_FILENAME_BASE", "reorder_report")
    monkeypatch.setattr(settings, "WEBHOOK_URL", None)
    return out
