# backend/utils/logging_config.py
"""Logging setup for the storefront API.

Console output carries warnings and errors; when ``LOG_DIR`` is set each
process start also gets its own debug-level file (``run_YYYYmmdd_HHMMSS.log``).
"""
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from config import settings

_DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(module)s:%(funcName)s:%(lineno)d | "
    "%(message)s"
)
_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_dir: Optional[str] = None) -> Optional[Path]:
    """Attach handlers to the root logger once. Returns the run's log file, if any."""
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    # Repeated calls (reloads, tests) must not stack handlers
    if getattr(root_logger, "_storefront_configured", False):
        return None
    root_logger._storefront_configured = True

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT))
    root_logger.addHandler(console_handler)

    log_dir = log_dir if log_dir is not None else settings.LOG_DIR
    if not log_dir:
        return None

    logs_path = Path(log_dir)
    logs_path.mkdir(parents=True, exist_ok=True)
    log_file = logs_path / f"run_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(_DETAILED_FORMAT, datefmt=_DATE_FORMAT))
    root_logger.addHandler(file_handler)

    root_logger.info("Logging initialised, log file: %s", log_file)
    return log_file
