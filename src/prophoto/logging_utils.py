"""
Logging setup for ProPhoto Resume.

Writes a per-run log file (wiped on restart) to the system temp directory and
mirrors messages to the console.
"""

from __future__ import annotations

import logging
import sys
import tempfile
from pathlib import Path
from typing import Optional

from prophoto.config import APP_NAME, APP_VERSION

LOGGER_NAME = "prophoto"


def default_log_file() -> Path:
    return Path(tempfile.gettempdir()) / "prophoto" / "prophoto.log"


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None) -> logging.Logger:
    """
    Configure the ``prophoto`` logger. Safe to call more than once; handlers
    are replaced, not stacked.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_level = logging.getLevelName(level.upper())
    if not isinstance(console_level, int):
        console_level = logging.INFO

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter("%(levelname)s - %(name)s - %(message)s"))
    logger.addHandler(console)

    path = log_file or default_log_file()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    except OSError as e:
        logger.warning("Could not set up file logging at %s: %s", path, e)
    else:
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(levelname)s - %(name)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
        )
        logger.addHandler(file_handler)

    logger.info("%s v%s started (log file: %s)", APP_NAME, APP_VERSION, path)
    return logger
