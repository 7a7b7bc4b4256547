from __future__ import annotations

import logging
import sys
from pathlib import Path

from offerflow_io.utils.log import attach_handlers
from offerflow_io.utils.paths import default_base

APP_LOGGER_NAME = "offerflow"


def get_logger(log_dir: Path | None = None) -> logging.Logger:
    """Return the application logger writing to <base>/work/logs/app.log and stdout."""

    target = Path(log_dir) if log_dir is not None else default_base() / "work" / "logs"
    return attach_handlers(logging.getLogger(APP_LOGGER_NAME), target / "app.log", stream=sys.stdout)
