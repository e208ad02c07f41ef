"""
Logger factory for stickercut modules.

Every module logs through ``get_logger(__name__)``. The command line module
reports progress at INFO, library modules stay quiet below WARNING. The
``STICKERCUT_LOG_LEVEL`` environment variable overrides both.
"""

import logging
import os

LOG_LEVEL_ENV = 'STICKERCUT_LOG_LEVEL'
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _resolve_level(name: str) -> int:
    default = logging.INFO if name.endswith('.cli') else logging.WARNING
    requested = os.getenv(LOG_LEVEL_ENV)
    if not requested:
        return default

    level = logging.getLevelName(requested.strip().upper())
    # getLevelName maps unknown names to a "Level X" string
    return level if isinstance(level, int) else default


def get_logger(name: str) -> logging.Logger:
    """Return the named logger, attaching the stderr handler on first use."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(_resolve_level(name))
    return logger
