from datetime import datetime
from decimal import Decimal
from enum import Enum
from pydantic import BaseModel, Field


class TransactionAction(str, Enum):
    """Actions recorded in the transaction log."""

    ADD = "Add"
    UPDATE = "Update"
    REMOVE = "Remove"
    ORDER_CREATED = "Order Created"
    ORDER_PROCESSED = "Order Processed"
    ORDER_CANCELLED = "Order Cancelled"


class OrderStatus(str, Enum):
    PENDING = "Pending"
    FULFILLED = "Fulfilled"
    CANCELLED = "Cancelled"


class ProcessOutcome(str, Enum):
    """What happened to the order at the front of the queue."""

    FULFILLED = "Fulfilled"
    INSUFFICIENT_STOCK = "InsufficientStock"
    ITEM_MISSING = "ItemMissing"


class InventoryItem(BaseModel):
    """
    Defines the data contract for a single stock item, one row of the inventory file.
    The aliases are the CSV column headers, so rows load straight into the model.
    """

    id: int = Field(..., ge=1, alias="ID")
    name: str = Field(..., alias="Name")
    category: str = Field(default="", alias="Category")
    quantity: int = Field(default=0, ge=0, alias="Quantity")
    price: Decimal = Field(default=Decimal("0"), ge=0, alias="Price")
    min_stock_level: int = Field(default=0, ge=0, alias="MinStockLevel")

    class Config:
        # Build from either field names or CSV headers, and re-validate on
        # assignment since order fulfillment edits quantity in place.
        populate_by_name = True
        validate_assignment = True

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.min_stock_level


class Transaction(BaseModel):
    """One immutable entry of the transaction history."""

    timestamp: datetime = Field(default_factory=datetime.now)
    action: TransactionAction
    item_id: int
    details: str = ""

    class Config:
        frozen = True

    def __str__(self) -> str:
        return (
            f"{self.timestamp.ctime()} - {self.action.value} "
            f"(Item ID: {self.item_id}) {self.details}"
        )


class Order(BaseModel):
    order_id: int = Field(..., ge=1)
    item_id: int
    quantity: int = Field(..., gt=0)
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = Field(default_factory=datetime.now)

    class Config:
        validate_assignment = True


class QueuedOrder(BaseModel):
    """Read model for the order queue display, item name resolved at read time."""

    order_id: int
    item_id: int
    item_name: str
    quantity: int
    status: OrderStatus
    created_at: datetime


class ProcessResult(BaseModel):
    order: Order
    outcome: ProcessOutcome
    message: str
