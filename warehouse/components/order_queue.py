import logging
from collections import deque

from warehouse import settings
from warehouse.components.catalog import ItemCatalog
from warehouse.components.transaction_log import TransactionLog
from warehouse.exceptions import EmptyQueueError, InvalidOrderError
from warehouse.schemas import (
    Order,
    OrderStatus,
    ProcessOutcome,
    ProcessResult,
    QueuedOrder,
    TransactionAction,
)

logger = logging.getLogger(__name__)


class OrderQueue:
    """
    FIFO queue of pending orders against the catalog.

    Processing pops the front order and either fulfills it (stock is taken from
    the catalog record), sends it to the back when stock is short, or cancels it
    when its item no longer exists.
    """

    def __init__(self, catalog: ItemCatalog, log: TransactionLog):
        self.catalog = catalog
        self.log = log
        self._pending: deque[Order] = deque()
        self.next_order_id = 1

    def __len__(self) -> int:
        return len(self._pending)

    def enqueue(self, item_id: int, quantity: int) -> Order:
        if self.catalog.find(item_id) is None:
            raise InvalidOrderError(f"Item {item_id} does not exist.")
        if quantity <= 0:
            raise InvalidOrderError(f"Order quantity must be positive, got {quantity}.")

        order = Order(order_id=self.next_order_id, item_id=item_id, quantity=quantity)
        self.next_order_id += 1
        self._pending.append(order)
        self.log.record(TransactionAction.ORDER_CREATED, item_id, f"Ordered {quantity} units")
        return order

    def process_next(self) -> ProcessResult:
        if not self._pending:
            raise EmptyQueueError("No orders to process.")

        order = self._pending.popleft()
        item = self.catalog.find(order.item_id)

        # --- 1. Item removed since the order was placed ---
        if item is None:
            order.status = OrderStatus.CANCELLED
            self.log.record(
                TransactionAction.ORDER_CANCELLED,
                order.item_id,
                f"Cancelled order #{order.order_id}: item no longer exists",
            )
            logger.warning(f"⚠️ Order #{order.order_id} cancelled, item {order.item_id} is gone.")
            return ProcessResult(
                order=order,
                outcome=ProcessOutcome.ITEM_MISSING,
                message=f"Order #{order.order_id} cancelled: item {order.item_id} no longer exists.",
            )

        # --- 2. Not enough stock, back of the line ---
        if item.quantity < order.quantity:
            self._pending.append(order)
            logger.warning(
                f"⚠️ Insufficient stock for order #{order.order_id} "
                f"({item.quantity} on hand, {order.quantity} ordered). Requeued."
            )
            return ProcessResult(
                order=order,
                outcome=ProcessOutcome.INSUFFICIENT_STOCK,
                message=f"Insufficient stock for order #{order.order_id}!",
            )

        # --- 3. Fulfill ---
        item.quantity -= order.quantity
        order.status = OrderStatus.FULFILLED
        self.log.record(
            TransactionAction.ORDER_PROCESSED,
            order.item_id,
            f"Processed order #{order.order_id} for {order.quantity} units",
        )
        return ProcessResult(
            order=order,
            outcome=ProcessOutcome.FULFILLED,
            message=f"Order #{order.order_id} processed successfully!",
        )

    def snapshot(self) -> list[QueuedOrder]:
        views = []
        for order in self._pending:
            item = self.catalog.find(order.item_id)
            views.append(
                QueuedOrder(
                    order_id=order.order_id,
                    item_id=order.item_id,
                    item_name=item.name if item else settings.UNKNOWN_ITEM_NAME,
                    quantity=order.quantity,
                    status=order.status,
                    created_at=order.created_at,
                )
            )
        return views
