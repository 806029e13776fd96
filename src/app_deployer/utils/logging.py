"""Logging helpers for the CLI and workflow."""

from __future__ import annotations

import logging
from typing import Optional

_LOGGING_CONFIGURED = False

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s - %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging once; ``verbose`` switches to DEBUG (HTTP calls included)."""
    global _LOGGING_CONFIGURED
    level = logging.DEBUG if verbose else logging.INFO
    if _LOGGING_CONFIGURED:
        logging.getLogger().setLevel(level)
        return
    logging.basicConfig(level=level, format=LOG_FORMAT)
    _LOGGING_CONFIGURED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if not _LOGGING_CONFIGURED:
        configure_logging()
    return logging.getLogger(name)
