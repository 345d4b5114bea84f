"""Logging setup for toolwire.

Modules log through ``logging.getLogger(__name__)``; everything lives
under the ``toolwire`` logger, which carries a ``NullHandler`` until the
application calls :func:`setup_logging`.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from toolwire.config.schema import LoggingConfig

_LOGGER_NAME = "toolwire"


def setup_logging(config: LoggingConfig) -> None:
    """Attach handlers to the package logger according to *config*.

    Adds a stderr stream handler, plus a file handler when
    ``config.file`` is set. Calling it again is a no-op once handlers
    other than the default ``NullHandler`` are installed.
    """
    logger = logging.getLogger(_LOGGER_NAME)

    if any(not isinstance(h, logging.NullHandler) for h in logger.handlers):
        return

    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    formatter = logging.Formatter(config.format)

    handler: logging.Handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    if config.file:
        file_handler = logging.FileHandler(config.file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.setLevel(level)

logging.getLogger(_LOGGER_NAME).addHandler(logging.NullHandler())
