import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from . import settings


def setup_logger(
    name: str = None,
    log_level: int = logging.INFO,
    log_dir: Optional[Path] = None,
    console_level: Optional[str] = None,
) -> logging.Logger:
    """
    Sets up the logger with both console (StreamHandler) and file (RotatingFileHandler) output.
    The warehouse engine logs every mutation here; the CLI prints its own results.
    """
    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Prevent adding handlers multiple times if this logger is already set up
    if logger.handlers:
        return logger

    # Formatters
    console_format = logging.Formatter("%(message)s")  # Keep console output clean/minimal
    file_format = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # 1. Console Handler (warnings and up by default, the menu prints normal feedback)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level or settings.CONSOLE_LOG_LEVEL)
    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)

    # 2. File Handler
    log_dir = log_dir or settings.LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "warehouse.log"

    file_handler = RotatingFileHandler(
        log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"  # 5 MB
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(file_format)
    logger.addHandler(file_handler)

    return logger
