import logging
from datetime import datetime
from pathlib import Path
import pandas as pd

from . import settings
from .exceptions import PersistenceError

logger = logging.getLogger(__name__)


def get_date_suffix_for_filename() -> str:
    """Returns the current date as a YYYY-MM-DD string for filenames."""
    return datetime.now().strftime("%Y-%m-%d")


def split_category_path(category: str) -> list[str]:
    """
    Splits 'Electronics/Phones' into ['Electronics', 'Phones'].
    Empty segments are dropped, so '' is the root and 'A//B/' is the same as 'A/B'.
    """
    return [segment for segment in category.split(settings.CATEGORY_SEPARATOR) if segment]


def load_csv(file_path: Path) -> pd.DataFrame | None:
    """
    A CSV loader with an encoding fallback that keeps every cell as a string.
    It will attempt to read a file in the following order:
    1. UTF-8 with BOM support ('utf-8-sig').
    2. Latin-1, which can read any byte.
    A missing or empty file returns None. Anything else unreadable raises PersistenceError.
    """
    read_options = {"dtype": str, "keep_default_na": False}
    try:
        return pd.read_csv(file_path, encoding="utf-8-sig", **read_options)

    except UnicodeDecodeError:
        # Only runs if the first attempt failed specifically due to encoding.
        logger.info(f"UTF-8 decoding failed for {file_path.name}. Retrying with 'latin-1'.")
        try:
            return pd.read_csv(file_path, encoding="latin-1", **read_options)
        except (OSError, ValueError) as e_latin1:
            raise PersistenceError(
                f"Could not read {file_path.name} even with latin-1: {e_latin1}"
            ) from e_latin1

    except FileNotFoundError:
        logger.info(f"Inventory file not found at {file_path}, starting empty.")
        return None

    except pd.errors.EmptyDataError:
        logger.info(f"Inventory file {file_path.name} is empty, starting empty.")
        return None

    except (OSError, ValueError) as e_general:
        # pandas.errors.ParserError is a ValueError (e.g. a row with extra fields).
        raise PersistenceError(f"Could not read {file_path.name}: {e_general}") from e_general
