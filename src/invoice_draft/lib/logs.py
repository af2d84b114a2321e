"""
Logging utilities for the invoice draft core.

Every module logger is a child of the "invoice_draft" package logger, which
owns the single stream handler. Applications embedding the core can raise
or lower verbosity for the whole package with set_level.
"""

import logging
from pathlib import Path

from invoice_draft import config

PACKAGE_LOGGER = "invoice_draft"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _package_logger() -> logging.Logger:
    root = logging.getLogger(PACKAGE_LOGGER)
    if not root.handlers:
        root.setLevel(getattr(logging, config.LOG_LEVEL, logging.INFO))
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(handler)
    return root


def logger(name: str) -> logging.Logger:
    """
    Return the package logger for a module.

    Args:
        name: Logger name or __file__ path. File paths are reduced to
            "invoice_draft.<module>".

    Returns:
        logging.Logger that propagates to the package handler.
    """
    root = _package_logger()
    if "/" in name or "\\" in name:
        name = Path(name).stem
    if name == PACKAGE_LOGGER:
        return root
    if not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def set_level(level: str) -> None:
    """Set the level of every invoice_draft logger, e.g. "DEBUG"."""
    _package_logger().setLevel(level.upper())
