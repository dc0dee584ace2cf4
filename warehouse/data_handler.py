import json
import logging
from pathlib import Path
from typing import Iterable, Optional
import pandas as pd
from pydantic import ValidationError

from . import settings
from . import utils
from .exceptions import PersistenceError
from .schemas import InventoryItem

logger = logging.getLogger(__name__)


def items_to_dataframe(items: Iterable[InventoryItem]) -> pd.DataFrame:
    """One row per item, CSV headers as columns, price fixed to 2 decimals."""
    rows = [item.model_dump(by_alias=True) for item in items]
    df = pd.DataFrame(rows, columns=settings.CSV_COLUMNS)
    df["Price"] = df["Price"].map(lambda price: f"{price:.2f}")
    return df


def load_inventory(file_path: Path) -> list[InventoryItem]:
    """
    Reads the inventory file into validated items.
    A missing file is an empty inventory; a malformed one raises PersistenceError.
    """
    df = utils.load_csv(file_path)
    if df is None:
        return []

    missing = [col for col in settings.CSV_COLUMNS if col not in df.columns]
    if missing:
        raise PersistenceError(f"{file_path.name} is missing columns: {missing}")

    try:
        items = [InventoryItem(**row) for row in df[settings.CSV_COLUMNS].to_dict("records")]
    except ValidationError as e:
        logger.error(f"❌ {file_path.name} does not match the inventory schema.")
        raise PersistenceError(f"Invalid row in {file_path.name}: {e}") from e

    logger.info(f"✅ Loaded {len(items)} items from {file_path}")
    return items


def save_inventory(file_path: Path, items: Iterable[InventoryItem]):
    """Rewrites the whole inventory file, items in ascending id order."""
    df = items_to_dataframe(sorted(items, key=lambda item: item.id))
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(file_path, index=False, encoding="utf-8", lineterminator="\n")
    except OSError as e:
        logger.error(f"❌ Could not write inventory file {file_path}: {e}")
        raise PersistenceError(f"Could not write {file_path}: {e}") from e
    logger.debug(f"Saved {len(df)} items to {file_path}")


def export_snapshot(
    items: list[InventoryItem],
    output_dir: Optional[Path] = None,
    save_json: Optional[bool] = None,
) -> list[Path]:
    """Saves a dated copy of the inventory to CSV and conditionally to JSON."""
    output_dir = output_dir or settings.OUTPUT_DIR
    save_json = settings.SAVE_JSON_OUTPUT if save_json is None else save_json
    date_suffix = utils.get_date_suffix_for_filename()

    csv_path = output_dir / f"{settings.EXPORT_FILENAME_BASE}_{date_suffix}.csv"
    json_path = output_dir / f"{settings.EXPORT_FILENAME_BASE}_{date_suffix}.json"

    save_inventory(csv_path, items)
    written = [csv_path]
    logger.info(f"✅ Inventory snapshot saved to: {csv_path}")

    if save_json:
        try:
            with open(json_path, "w", encoding="utf-8") as f:
                json_data = [item.model_dump(mode="json", by_alias=True) for item in items]
                json.dump(json_data, f, indent=2, default=str)
        except OSError as e:
            raise PersistenceError(f"Could not write {json_path}: {e}") from e
        written.append(json_path)
        logger.info(f"✅ JSON output saved to: {json_path}")
    else:
        logger.info("Skipping JSON file save as per configuration.")

    return written
