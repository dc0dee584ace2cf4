import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from warehouse import data_handler, settings
from warehouse.schemas import InventoryItem

logger = logging.getLogger(__name__)


class InventoryStore(ABC):
    """
    Abstract base class for the engine's backing store.
    The engine loads once at start-up and saves the full catalog after every mutation.
    """

    @abstractmethod
    def load(self) -> list[InventoryItem]:
        """Returns every persisted item. An absent store is an empty inventory."""
        pass

    @abstractmethod
    def save(self, items: list[InventoryItem]):
        """Replaces the persisted inventory. Raises PersistenceError on failure."""
        pass


class CsvInventoryStore(InventoryStore):
    """The flat CSV file: ID,Name,Category,Quantity,Price,MinStockLevel."""

    def __init__(self, file_path: Optional[Path] = None):
        self.file_path = Path(file_path) if file_path else settings.INVENTORY_FILE

    def load(self) -> list[InventoryItem]:
        return data_handler.load_inventory(self.file_path)

    def save(self, items: list[InventoryItem]):
        data_handler.save_inventory(self.file_path, items)


class MemoryInventoryStore(InventoryStore):
    """Keeps copies in process. Counts saves so callers can see when a flush happened."""

    def __init__(self, items: Optional[list[InventoryItem]] = None):
        self.items = [item.model_copy() for item in items or []]
        self.save_count = 0

    def load(self) -> list[InventoryItem]:
        return [item.model_copy() for item in self.items]

    def save(self, items: list[InventoryItem]):
        self.items = [item.model_copy() for item in items]
        self.save_count += 1
