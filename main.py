from decimal import Decimal, InvalidOperation
import pandas as pd
from pydantic import ValidationError

from warehouse import data_handler, settings
from warehouse.engine import WarehouseEngine
from warehouse.exceptions import WarehouseError
from warehouse.logger import setup_logger
from warehouse.schemas import InventoryItem, ProcessOutcome

MENU = """
Warehouse Management System
1. Add New Item
2. Remove Item
3. Update Item
4. Find Item
5. Display All Items
6. Display Low Stock Items
7. Display Items by Category
8. Sort Items by Name
9. Sort Items by Quantity
10. Create Order
11. Process Next Order
12. Display Order Queue
13. Display Transaction History
14. Export Inventory Snapshot
15. Display Items Under Category
16. Display Category Paths
0. Exit"""


# --- Input helpers: reprompt until the value parses ---


def prompt_int(label: str, minimum: int = 0) -> int:
    while True:
        raw = input(label).strip()
        try:
            value = int(raw)
        except ValueError:
            print("Please enter a whole number.")
            continue
        if value < minimum:
            print(f"Please enter a number >= {minimum}.")
            continue
        return value


def prompt_decimal(label: str) -> Decimal:
    while True:
        raw = input(label).strip()
        try:
            value = Decimal(raw)
        except InvalidOperation:
            print("Please enter a price like 12.50.")
            continue
        if not value.is_finite() or value < 0:
            print("Please enter a non-negative price.")
            continue
        return value


def input_item_details(engine: WarehouseEngine, is_new: bool = True) -> InventoryItem:
    item_id = engine.next_item_id() if is_new else prompt_int("Enter item ID: ", minimum=1)
    name = input("Enter item name: ").strip()
    category = input("Enter category: ").strip()
    quantity = prompt_int("Enter quantity: ")
    price = prompt_decimal("Enter price: ")
    min_stock_level = prompt_int("Enter minimum stock level: ")
    return InventoryItem(
        id=item_id,
        name=name,
        category=category,
        quantity=quantity,
        price=price,
        min_stock_level=min_stock_level,
    )


# --- Display helpers ---


def print_items(items: list[InventoryItem], empty_message: str = "No items found."):
    if not items:
        print(empty_message)
        return
    print(data_handler.items_to_dataframe(items).to_string(index=False))


def print_order_queue(engine: WarehouseEngine):
    queue = engine.order_queue_snapshot()
    if not queue:
        print("No pending orders.")
        return
    print("\nPending Orders:")
    print("-" * 50)
    df = pd.DataFrame([order.model_dump(mode="json") for order in queue])
    print(df.to_string(index=False))


def print_history(engine: WarehouseEngine):
    print("\nRecent Transaction History:")
    print("-" * 50)
    for transaction in engine.transaction_history(settings.HISTORY_LIMIT):
        print(transaction)


# --- Menu actions ---


def handle_choice(engine: WarehouseEngine, choice: int) -> bool:
    """Runs one menu action. Returns False when the user asked to exit."""
    if choice == 1:
        engine.add_item(input_item_details(engine))
        print("Item added successfully!")
    elif choice == 2:
        item_id = prompt_int("Enter item ID to remove: ")
        print("Item removed successfully!" if engine.remove_item(item_id) else "Item not found!")
    elif choice == 3:
        item = input_item_details(engine, is_new=False)
        print("Item updated successfully!" if engine.update_item(item) else "Item not found!")
    elif choice == 4:
        item = engine.find_item(prompt_int("Enter item ID to find: "))
        print_items([item] if item else [], "Item not found!")
    elif choice == 5:
        print_items(engine.list_all_items())
    elif choice == 6:
        print_items(engine.low_stock_items(), "No items are low on stock.")
    elif choice == 7:
        category = input("Enter category: ").strip()
        print_items(
            engine.items_by_category(category), f"No items found in category: {category}"
        )
    elif choice == 8:
        print_items(engine.sorted_by_name())
    elif choice == 9:
        print_items(engine.sorted_by_quantity())
    elif choice == 10:
        item_id = prompt_int("Enter item ID: ")
        quantity = prompt_int("Enter quantity: ")
        engine.create_order(item_id, quantity)
        print("Order created successfully!")
    elif choice == 11:
        result = engine.process_next_order()
        print(result.message)
        if result.outcome == ProcessOutcome.INSUFFICIENT_STOCK:
            print("The order was moved to the back of the queue.")
    elif choice == 12:
        print_order_queue(engine)
    elif choice == 13:
        print_history(engine)
    elif choice == 14:
        for path in engine.export_snapshot():
            print(f"✅ Saved {path}")
    elif choice == 15:
        category = input("Enter category: ").strip()
        print_items(
            engine.items_under_category(category), f"No items found under category: {category}"
        )
    elif choice == 16:
        paths = engine.category_paths()
        print("\n".join(paths) if paths else "No categories yet.")
    elif choice == 0:
        print("Thank you for using the Warehouse Management System!")
        return False
    else:
        print("Invalid choice! Please try again.")
    return True


def run_menu(engine: WarehouseEngine):
    running = True
    while running:
        print(MENU)
        choice = prompt_int("Enter your choice: ")
        try:
            running = handle_choice(engine, choice)
        except ValidationError as e:
            print("❌ Invalid item details:")
            print(e)
        except WarehouseError as e:
            print(f"❌ {e}")


if __name__ == "__main__":
    setup_logger("warehouse")
    run_menu(WarehouseEngine())
