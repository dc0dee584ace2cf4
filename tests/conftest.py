"""Shared fixtures for the warehouse tests."""

from decimal import Decimal
from pathlib import Path
from typing import Any, Callable

import pytest

from warehouse.components.catalog import ItemCatalog
from warehouse.components.transaction_log import TransactionLog
from warehouse.engine import WarehouseEngine
from warehouse.schemas import InventoryItem
from warehouse.store import CsvInventoryStore, MemoryInventoryStore


@pytest.fixture
def make_item() -> Callable[..., InventoryItem]:
    """Factory for items with sensible defaults."""

    def _make(item_id: int = 1, **overrides: Any) -> InventoryItem:
        fields: dict[str, Any] = {
            "id": item_id,
            "name": f"Item {item_id}",
            "category": "General",
            "quantity": 10,
            "price": Decimal("9.99"),
            "min_stock_level": 2,
        }
        fields.update(overrides)
        return InventoryItem(**fields)

    return _make


@pytest.fixture
def catalog() -> ItemCatalog:
    return ItemCatalog()


@pytest.fixture
def log() -> TransactionLog:
    return TransactionLog()


@pytest.fixture
def memory_store() -> MemoryInventoryStore:
    return MemoryInventoryStore()


@pytest.fixture
def engine(memory_store: MemoryInventoryStore) -> WarehouseEngine:
    return WarehouseEngine(store=memory_store)


@pytest.fixture
def inventory_file(tmp_path: Path) -> Path:
    return tmp_path / "inventory.csv"


@pytest.fixture
def csv_engine(inventory_file: Path) -> WarehouseEngine:
    return WarehouseEngine(store=CsvInventoryStore(inventory_file))
