import os
from pathlib import Path
from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")

# --- Path Configuration ---
# Use Path objects for robust, OS-agnostic path handling.
INVENTORY_FILE = BASE_DIR / os.getenv("INVENTORY_FILE", "inventory.csv")
OUTPUT_DIR = BASE_DIR / os.getenv("OUTPUT_DIR", "output")
LOG_DIR = BASE_DIR / os.getenv("LOG_DIR", "logs")

# --- Export Configuration ---
EXPORT_FILENAME_BASE = os.getenv("EXPORT_FILENAME_BASE", "inventory_snapshot")
SAVE_JSON_OUTPUT = os.getenv("SAVE_JSON_OUTPUT", "true").strip().lower() not in (
    "false",
    "0",
    "no",
)

# --- Logging ---
# Threshold for the console handler only; the log file follows setup_logger's log_level.
CONSOLE_LOG_LEVEL = os.getenv("CONSOLE_LOG_LEVEL", "WARNING").strip().upper()

# --- Display ---
HISTORY_LIMIT = int(os.getenv("HISTORY_LIMIT", "10"))

# --- Shared Business Logic ---
# Column order of the persisted inventory file. Also the pydantic aliases.
CSV_COLUMNS = [
    "ID",
    "Name",
    "Category",
    "Quantity",
    "Price",
    "MinStockLevel",
]

CATEGORY_SEPARATOR = "/"
ROOT_CATEGORY_NAME = "Root"

# Shown in the order queue when an order's item has been removed.
UNKNOWN_ITEM_NAME = "Unknown"
