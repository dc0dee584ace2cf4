"""Tests for WarehouseEngine."""

from decimal import Decimal
from pathlib import Path

import pytest

from warehouse.engine import WarehouseEngine
from warehouse.exceptions import EmptyQueueError, InvalidOrderError, PersistenceError
from warehouse.schemas import InventoryItem, ProcessOutcome, TransactionAction
from warehouse.store import CsvInventoryStore, InventoryStore, MemoryInventoryStore


class FailingStore(InventoryStore):
    def load(self) -> list[InventoryItem]:
        return []

    def save(self, items: list[InventoryItem]) -> None:
        raise PersistenceError("disk full")


# ============================================================================
# Start-up
# ============================================================================


class TestEngineLoad:
    def test_loads_items_and_rebuilds_categories(self, make_item) -> None:
        store = MemoryInventoryStore(
            [make_item(4, category="Electronics/Phones"), make_item(7, category="Electronics")]
        )
        engine = WarehouseEngine(store=store)

        assert engine.next_item_id() == 8
        assert [item.id for item in engine.items_by_category("Electronics/Phones")] == [4]
        assert engine.category_paths() == ["Electronics", "Electronics/Phones"]
        assert store.save_count == 0

    def test_empty_store(self, engine: WarehouseEngine) -> None:
        assert engine.list_all_items() == []
        assert engine.next_item_id() == 1


# ============================================================================
# Item CRUD
# ============================================================================


class TestItemCrud:
    def test_next_id_is_max_plus_one_after_each_add(self, engine: WarehouseEngine, make_item) -> None:
        added = []
        for item_id in (1, 5, 3, 9, 2):
            engine.add_item(make_item(item_id))
            added.append(item_id)
            assert engine.next_item_id() == max(added) + 1

    def test_add_persists_and_records(
        self, engine: WarehouseEngine, memory_store: MemoryInventoryStore, make_item
    ) -> None:
        engine.add_item(make_item(1, name="Drill", category="Tools"))

        assert memory_store.save_count == 1
        assert [item.id for item in memory_store.items] == [1]
        latest = engine.transaction_history(1)[0]
        assert latest.action == TransactionAction.ADD
        assert latest.details == "Added Drill to category Tools"

    def test_add_stores_a_copy(self, engine: WarehouseEngine, make_item) -> None:
        item = make_item(1, quantity=5)
        engine.add_item(item)
        item.quantity = 0
        assert engine.find_item(1).quantity == 5

    def test_re_adding_an_id_moves_its_category(self, engine: WarehouseEngine, make_item) -> None:
        engine.add_item(make_item(1, category="Old"))
        engine.add_item(make_item(1, category="New"))

        assert engine.items_by_category("Old") == []
        assert [item.id for item in engine.items_by_category("New")] == [1]

    @pytest.mark.parametrize("item_id", [1, 2, 42])
    def test_remove_then_find_is_none(self, engine: WarehouseEngine, make_item, item_id: int) -> None:
        engine.add_item(make_item(1))
        engine.remove_item(item_id)
        assert engine.find_item(item_id) is None

    def test_remove_syncs_category_tree(
        self, engine: WarehouseEngine, memory_store: MemoryInventoryStore, make_item
    ) -> None:
        engine.add_item(make_item(1, category="Electronics"))

        assert engine.remove_item(1) is True
        assert engine.items_by_category("Electronics") == []
        assert engine.items_under_category("Electronics") == []
        assert memory_store.save_count == 2
        assert engine.transaction_history(1)[0].action == TransactionAction.REMOVE

    def test_remove_unknown_does_not_persist(
        self, engine: WarehouseEngine, memory_store: MemoryInventoryStore
    ) -> None:
        assert engine.remove_item(3) is False
        assert memory_store.save_count == 0

    def test_update_unknown_leaves_catalog_unchanged(
        self, engine: WarehouseEngine, memory_store: MemoryInventoryStore, make_item
    ) -> None:
        engine.add_item(make_item(1))
        before = engine.list_all_items()

        assert engine.update_item(make_item(2)) is False
        assert engine.list_all_items() == before
        assert memory_store.save_count == 1

    def test_update_moves_category(self, engine: WarehouseEngine, make_item) -> None:
        engine.add_item(make_item(1, category="Electronics"))
        assert engine.update_item(make_item(1, category="Electronics/Phones", quantity=4)) is True

        assert engine.items_by_category("Electronics") == []
        assert [item.id for item in engine.items_by_category("Electronics/Phones")] == [1]
        assert engine.find_item(1).quantity == 4
        assert engine.transaction_history(1)[0].action == TransactionAction.UPDATE

    def test_next_id_survives_removal(self, engine: WarehouseEngine, make_item) -> None:
        engine.add_item(make_item(1))
        engine.add_item(make_item(2))
        engine.remove_item(2)
        assert engine.next_item_id() == 3

    def test_update_with_edited_live_record_moves_category(
        self, engine: WarehouseEngine, make_item
    ) -> None:
        engine.add_item(make_item(1, category="Old"))
        record = engine.find_item(1)
        record.category = "New"

        assert engine.update_item(record) is True
        assert engine.items_by_category("Old") == []
        assert [item.id for item in engine.items_by_category("New")] == [1]

    def test_remove_after_editing_live_record_clears_old_category(
        self, engine: WarehouseEngine, make_item
    ) -> None:
        engine.add_item(make_item(1, category="Old"))
        engine.find_item(1).category = "New"

        assert engine.remove_item(1) is True
        assert engine.items_by_category("Old") == []
        assert engine.items_by_category("New") == []
        assert engine.items_under_category("") == []


# ============================================================================
# Queries
# ============================================================================


class TestQueries:
    @pytest.fixture
    def stocked(self, engine: WarehouseEngine, make_item) -> WarehouseEngine:
        engine.add_item(make_item(1, name="Phone", category="Electronics/Phones", quantity=5))
        engine.add_item(make_item(2, name="Cable", category="Electronics", quantity=1))
        engine.add_item(make_item(3, name="Chair", category="Furniture", quantity=5))
        engine.add_item(make_item(4, name="Adapter", category="Electronics", quantity=0))
        return engine

    def test_items_by_category_is_exact(self, stocked: WarehouseEngine) -> None:
        assert [item.id for item in stocked.items_by_category("Electronics")] == [2, 4]
        assert stocked.items_by_category("Toys") == []

    def test_tree_and_flat_scan_agree(self, stocked: WarehouseEngine) -> None:
        for path in ("Electronics", "Electronics/Phones", "Furniture"):
            assert stocked.items_by_category(path) == stocked.catalog.filter_by_category(path)

    def test_items_under_category(self, stocked: WarehouseEngine) -> None:
        assert [item.id for item in stocked.items_under_category("Electronics")] == [1, 2, 4]

    def test_low_stock(self, stocked: WarehouseEngine) -> None:
        assert [item.id for item in stocked.low_stock_items()] == [2, 4]

    def test_sorted_by_name(self, stocked: WarehouseEngine) -> None:
        names = [item.name for item in stocked.sorted_by_name()]
        assert names == ["Adapter", "Cable", "Chair", "Phone"]

    def test_sorted_by_quantity_breaks_ties_by_id(self, stocked: WarehouseEngine) -> None:
        assert [item.id for item in stocked.sorted_by_quantity()] == [4, 2, 1, 3]

    def test_sorting_does_not_touch_storage(self, stocked: WarehouseEngine) -> None:
        stocked.sorted_by_name()
        assert [item.id for item in stocked.list_all_items()] == [1, 2, 3, 4]

    def test_reads_do_not_persist(
        self, stocked: WarehouseEngine, memory_store: MemoryInventoryStore
    ) -> None:
        saves = memory_store.save_count
        stocked.list_all_items()
        stocked.find_item(1)
        stocked.items_by_category("Electronics")
        stocked.sorted_by_quantity()
        stocked.transaction_history()
        stocked.order_queue_snapshot()
        assert memory_store.save_count == saves


# ============================================================================
# Orders
# ============================================================================


class TestOrders:
    def test_fulfilled_order(
        self, engine: WarehouseEngine, memory_store: MemoryInventoryStore, make_item
    ) -> None:
        engine.add_item(make_item(5, quantity=10))
        engine.create_order(5, 3)
        saves = memory_store.save_count

        result = engine.process_next_order()

        assert result.outcome == ProcessOutcome.FULFILLED
        assert engine.find_item(5).quantity == 7
        assert engine.order_queue_snapshot() == []
        assert engine.transaction_history(1)[0].action == TransactionAction.ORDER_PROCESSED
        assert memory_store.save_count == saves + 1
        assert memory_store.items[0].quantity == 7

    def test_insufficient_stock(
        self, engine: WarehouseEngine, memory_store: MemoryInventoryStore, make_item
    ) -> None:
        engine.add_item(make_item(1, quantity=2))
        order = engine.create_order(1, 5)
        saves = memory_store.save_count

        result = engine.process_next_order()

        assert result.outcome == ProcessOutcome.INSUFFICIENT_STOCK
        assert engine.find_item(1).quantity == 2
        assert [view.order_id for view in engine.order_queue_snapshot()] == [order.order_id]
        assert memory_store.save_count == saves

    def test_create_order_does_not_persist(
        self, engine: WarehouseEngine, memory_store: MemoryInventoryStore, make_item
    ) -> None:
        engine.add_item(make_item(1))
        engine.create_order(1, 1)
        assert memory_store.save_count == 1

    def test_invalid_and_empty(self, engine: WarehouseEngine) -> None:
        with pytest.raises(InvalidOrderError):
            engine.create_order(1, 1)
        with pytest.raises(EmptyQueueError):
            engine.process_next_order()

    def test_order_for_removed_item_is_cancelled(self, engine: WarehouseEngine, make_item) -> None:
        engine.add_item(make_item(1))
        engine.create_order(1, 1)
        engine.remove_item(1)

        assert engine.order_queue_snapshot()[0].item_name == "Unknown"
        assert engine.process_next_order().outcome == ProcessOutcome.ITEM_MISSING
        assert engine.order_queue_snapshot() == []


# ============================================================================
# History, persistence failures and export
# ============================================================================


class TestHistoryAndPersistence:
    def test_history_limit(self, engine: WarehouseEngine, make_item) -> None:
        for item_id in range(1, 6):
            engine.add_item(make_item(item_id))

        history = engine.transaction_history(limit=2)
        assert [tx.item_id for tx in history] == [5, 4]

    def test_save_failure_propagates(self, make_item) -> None:
        engine = WarehouseEngine(store=FailingStore())
        with pytest.raises(PersistenceError, match="disk full"):
            engine.add_item(make_item(1))
        # The in-memory change has already been applied.
        assert engine.find_item(1) is not None

    def test_round_trip_through_csv(self, inventory_file: Path, make_item) -> None:
        first = WarehouseEngine(store=CsvInventoryStore(inventory_file))
        first.add_item(make_item(1, name="Bolt", category="Hardware/Fasteners", price=Decimal("0.5")))
        first.add_item(make_item(3, name="Saw", category="Tools", quantity=0, price=Decimal("24.999")))

        second = WarehouseEngine(store=CsvInventoryStore(inventory_file))

        def as_tuples(engine: WarehouseEngine) -> set:
            return {
                (
                    item.id,
                    item.name,
                    item.category,
                    item.quantity,
                    item.price.quantize(Decimal("0.01")),
                    item.min_stock_level,
                )
                for item in engine.list_all_items()
            }

        assert as_tuples(second) == as_tuples(first)
        assert second.next_item_id() == 4
        assert [item.id for item in second.items_by_category("Hardware/Fasteners")] == [1]

    def test_export_snapshot(self, csv_engine: WarehouseEngine, tmp_path: Path, make_item) -> None:
        csv_engine.add_item(make_item(1))
        paths = csv_engine.export_snapshot(tmp_path / "out")

        assert paths[0].suffix == ".csv"
        assert all(path.exists() for path in paths)
