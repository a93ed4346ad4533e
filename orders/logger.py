"""
Logging for the order creation package.

All module loggers hang off the "orders" logger, which owns a single
rotating file handler. Level and file location come from orders.config
(ORDERS_LOG_LEVEL, ORDERS_LOG_DIR, ORDERS_LOG_FILE).
"""

import os
import logging
from logging.handlers import RotatingFileHandler

from .config import LOG_DIR, LOG_FILE, LOG_LEVEL

ROOT_LOGGER = "orders"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 5


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        return root

    os.makedirs(LOG_DIR, exist_ok=True)
    root.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    handler = RotatingFileHandler(
        os.path.join(LOG_DIR, LOG_FILE),
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    return root


def get_logger(name: str) -> logging.Logger:
    """Logger for one part of the package, e.g. get_logger("store") -> "orders.store"."""
    _configure_root()
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
