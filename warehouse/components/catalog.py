from typing import Iterable, Optional

from warehouse.schemas import InventoryItem


class ItemCatalog:
    """
    Id-keyed store of inventory items.
    Lookups hand back the stored record; listings hand back copies in ascending id order.
    """

    def __init__(self, items: Optional[Iterable[InventoryItem]] = None):
        self._items: dict[int, InventoryItem] = {}
        # Ids are never reused, even after a removal.
        self.next_id = 1
        for item in items or []:
            self.add(item)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: int) -> bool:
        return item_id in self._items

    def ids(self) -> list[int]:
        return sorted(self._items)

    def add(self, item: InventoryItem):
        """Inserts or overwrites by id and advances next_id past it."""
        self._items[item.id] = item
        self.next_id = max(self.next_id, item.id + 1)

    def remove(self, item_id: int) -> bool:
        if item_id not in self._items:
            return False
        del self._items[item_id]
        return True

    def update(self, item: InventoryItem) -> bool:
        if item.id not in self._items:
            return False
        self._items[item.id] = item
        return True

    def find(self, item_id: int) -> InventoryItem | None:
        return self._items.get(item_id)

    def list_all(self) -> list[InventoryItem]:
        return [self._items[item_id].model_copy() for item_id in self.ids()]

    def filter_by_category(self, category: str) -> list[InventoryItem]:
        # Exact match only: "Electronics" does not include "Electronics/Phones".
        return [item for item in self.list_all() if item.category == category]

    def low_stock(self) -> list[InventoryItem]:
        return [item for item in self.list_all() if item.is_low_stock]
