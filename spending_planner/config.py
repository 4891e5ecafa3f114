"""Configuration management for the spending planner.

This module centralizes configuration values including paths, the storage
key, and environment variable overrides.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

# Base project root - assumes this file is in spending_planner/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Fixed key under which the planner state is persisted
STORAGE_KEY = "daily-spending-planner"

# Data directories
DATA_DIR = Path(os.getenv("SPENDING_PLANNER_DATA_DIR", _PROJECT_ROOT / "data"))
REPORTS_DIR = Path(os.getenv("SPENDING_PLANNER_REPORTS_DIR", DATA_DIR / "reports"))

# Planner state blob
STATE_PATH = Path(
    os.getenv("SPENDING_PLANNER_STATE_PATH", DATA_DIR / f"{STORAGE_KEY}.json")
).resolve()

LOG_LEVEL = os.getenv("SPENDING_PLANNER_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_logging_configured = False


def configure_logging(level: str | None = None) -> None:
    """Attach a stream handler to the package logger once per process."""
    global _logging_configured
    if _logging_configured:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger("spending_planner")
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, (level or LOG_LEVEL).upper(), logging.WARNING))
    _logging_configured = True
