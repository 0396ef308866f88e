"""Application logging utilities.

Library modules only fetch loggers; handlers are attached by the command line
entrypoint so that embedding hosts keep control of their own output.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional


DEFAULT_LOG_LEVEL = logging.INFO
PACKAGE_LOGGER = "tsext"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger below the package logger without configuring it."""
    return logging.getLogger(name if name else PACKAGE_LOGGER)


def configure_logging(level: int = DEFAULT_LOG_LEVEL) -> logging.Logger:
    """Attach a console handler to the package logger, once, and set its level."""
    root_logger = logging.getLogger(PACKAGE_LOGGER)
    console = [h for h in root_logger.handlers if type(h) is logging.StreamHandler]
    if console:
        console[0].setStream(sys.stderr)
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(handler)
    root_logger.setLevel(level)
    return root_logger


def enable_file_logging(log_dir: Path, filename: str = "tsext.log", level: int = DEFAULT_LOG_LEVEL) -> Path:
    """Configure file-based logging and return the log path."""
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / filename
    handler = logging.FileHandler(log_path)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger = logging.getLogger(PACKAGE_LOGGER)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    return log_path
