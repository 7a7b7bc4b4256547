"""Logging helpers shared by offerflow_io and the offerflow application."""

# Module responsibilities:
# - Attach one rotating log file and one console stream to a named logger, once.
# - Provide get_logger() for modules under the offerflow_io namespace.

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Set, TextIO

from .paths import default_base

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_LOG_BYTES = 2 * 1024 * 1024
LOG_BACKUPS = 3

_configured: Set[str] = set()


def attach_handlers(
    logger: logging.Logger,
    log_path: Path,
    stream: Optional[TextIO] = None,
    level: int = logging.INFO,
) -> logging.Logger:
    """Route ``logger`` to ``log_path`` and a console stream.

    Handlers are attached the first time a logger name is seen; later calls
    return the logger untouched. ``stream`` defaults to stderr. The logger
    stops propagating so records are not printed twice by the root logger.
    """

    if logger.name in _configured:
        return logger

    log_path.parent.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = (
        RotatingFileHandler(log_path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"),
        logging.StreamHandler(stream),
    )
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    logger.propagate = False
    _configured.add(logger.name)
    return logger


def get_logger(name: str, log_dir: Optional[Path] = None) -> logging.Logger:
    """Return ``offerflow_io.<name>``, logging to ``<base>/logs/offerflow_io.log``."""

    directory = log_dir or default_base() / "logs"
    package_logger = attach_handlers(logging.getLogger("offerflow_io"), directory / "offerflow_io.log")
    return package_logger.getChild(name)
