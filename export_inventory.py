from warehouse.engine import WarehouseEngine
from warehouse.exceptions import PersistenceError
from warehouse.logger import setup_logger


def run_export():
    """Writes a dated CSV (and JSON, if enabled) copy of the current inventory file."""
    print("--- Starting Inventory Snapshot Export ---")
    try:
        engine = WarehouseEngine()
        paths = engine.export_snapshot()
    except PersistenceError as e:
        print(f"❌ Export failed: {e}")
        return

    items = engine.list_all_items()
    low_stock = engine.low_stock_items()
    print(f"   Total Items: {len(items)}")
    print(f"   Low Stock Items: {len(low_stock)}")
    for path in paths:
        print(f"✅ Saved to: {path}")

    print("\n--- Process Finished Successfully ---")


if __name__ == "__main__":
    setup_logger("warehouse")
    run_export()
