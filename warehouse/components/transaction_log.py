import logging
from typing import Iterator

from warehouse.schemas import Transaction, TransactionAction

logger = logging.getLogger(__name__)


class TransactionLog:
    """Append-only action history. Reads are most-recent first and never consume entries."""

    def __init__(self):
        # Stored oldest first; readers walk it backwards.
        self._entries: list[Transaction] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Transaction]:
        return reversed(self._entries)

    def record(self, action: TransactionAction, item_id: int, details: str) -> Transaction:
        transaction = Transaction(action=action, item_id=item_id, details=details)
        self._entries.append(transaction)
        logger.info(str(transaction))
        return transaction

    def recent(self, limit: int = 10) -> list[Transaction]:
        if limit <= 0:
            return []
        return self._entries[::-1][:limit]
