import logging
from pathlib import Path
from typing import Optional

from warehouse import data_handler, settings
from warehouse.components.catalog import ItemCatalog
from warehouse.components.category_tree import CategoryTree
from warehouse.components.order_queue import OrderQueue
from warehouse.components.transaction_log import TransactionLog
from warehouse.schemas import (
    InventoryItem,
    Order,
    ProcessOutcome,
    ProcessResult,
    QueuedOrder,
    Transaction,
    TransactionAction,
)
from warehouse.store import CsvInventoryStore, InventoryStore

logger = logging.getLogger(__name__)


class WarehouseEngine:
    """
    The single entry point the CLI talks to.

    Owns the item catalog, the category tree, the transaction log and the order
    queue, and keeps them consistent with each other. Every successful mutation
    of the catalog is flushed to the store in full; reads never touch it.
    The category tree is rebuilt from the catalog on load and follows every
    add, category change and removal, so it always indexes exactly the catalog.
    """

    def __init__(self, store: Optional[InventoryStore] = None):
        self.store = store if store is not None else CsvInventoryStore()
        self.catalog = ItemCatalog()
        self.categories = CategoryTree()
        self.transactions = TransactionLog()
        self.orders = OrderQueue(self.catalog, self.transactions)
        self._load()

    def _load(self):
        for item in self.store.load():
            self.catalog.add(item)
            self.categories.file_item(item.id, item.category)
        logger.info(
            f"Warehouse ready: {len(self.catalog)} items, next id {self.catalog.next_id}"
        )

    def _persist(self):
        self.store.save(self.catalog.list_all())

    # --- Item CRUD ---

    def add_item(self, item: InventoryItem):
        """Adds an item, or replaces the item already stored under its id."""
        item = item.model_copy()
        self.catalog.add(item)
        self.categories.file_item(item.id, item.category)
        self.transactions.record(
            TransactionAction.ADD,
            item.id,
            f"Added {item.name} to category {item.category}",
        )
        self._persist()

    def remove_item(self, item_id: int) -> bool:
        item = self.catalog.find(item_id)
        if item is None:
            logger.warning(f"⚠️ Remove rejected: item {item_id} not found.")
            return False

        self.catalog.remove(item_id)
        self.categories.unfile_item(item_id)
        self.transactions.record(TransactionAction.REMOVE, item_id, f"Removed {item.name}")
        self._persist()
        return True

    def update_item(self, item: InventoryItem) -> bool:
        if item.id not in self.catalog:
            logger.warning(f"⚠️ Update rejected: item {item.id} not found.")
            return False

        item = item.model_copy()
        self.catalog.update(item)
        # Compare against where the item was filed: the caller may have edited
        # the live record returned by find_item.
        if self.categories.filed_path(item.id) != item.category:
            self.categories.file_item(item.id, item.category)
        self.transactions.record(TransactionAction.UPDATE, item.id, f"Updated {item.name}")
        self._persist()
        return True

    def find_item(self, item_id: int) -> InventoryItem | None:
        return self.catalog.find(item_id)

    def next_item_id(self) -> int:
        return self.catalog.next_id

    # --- Read-side views ---

    def list_all_items(self) -> list[InventoryItem]:
        return self.catalog.list_all()

    def low_stock_items(self) -> list[InventoryItem]:
        return self.catalog.low_stock()

    def items_by_category(self, category: str) -> list[InventoryItem]:
        """Items filed at exactly this category path, not its sub-categories."""
        node = self.categories.find(category)
        if node is None:
            return []
        return self._items_for_ids(node.item_ids)

    def items_under_category(self, category: str) -> list[InventoryItem]:
        """Items filed at this category path or anywhere below it."""
        return self._items_for_ids(self.categories.item_ids_under(category))

    def category_paths(self) -> list[str]:
        return self.categories.paths()

    def sorted_by_name(self) -> list[InventoryItem]:
        return sorted(self.catalog.list_all(), key=lambda item: item.name)

    def sorted_by_quantity(self) -> list[InventoryItem]:
        # list_all is id-ordered and sorted() is stable, so ties stay in id order.
        return sorted(self.catalog.list_all(), key=lambda item: item.quantity)

    def _items_for_ids(self, item_ids: list[int]) -> list[InventoryItem]:
        return [self.catalog.find(item_id).model_copy() for item_id in sorted(item_ids)]

    # --- Orders ---

    def create_order(self, item_id: int, quantity: int) -> Order:
        order = self.orders.enqueue(item_id, quantity)
        logger.info(f"✅ Order #{order.order_id} created for item {item_id} x{quantity}")
        return order

    def process_next_order(self) -> ProcessResult:
        result = self.orders.process_next()
        if result.outcome == ProcessOutcome.FULFILLED:
            self._persist()
        return result

    def order_queue_snapshot(self) -> list[QueuedOrder]:
        return self.orders.snapshot()

    # --- History & export ---

    def transaction_history(self, limit: int = settings.HISTORY_LIMIT) -> list[Transaction]:
        return self.transactions.recent(limit)

    def export_snapshot(self, output_dir: Optional[Path] = None) -> list[Path]:
        return data_handler.export_snapshot(self.catalog.list_all(), output_dir)
