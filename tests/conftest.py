from __future__ import annotations

import os
import sys
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Callable

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Keep log files out of the user's home directory.
os.environ.setdefault("OFFERFLOW_HOME", tempfile.mkdtemp(prefix="offerflow-tests-"))
os.environ.pop("OFFERFLOW_SETTINGS", None)

FIXED_NOW = datetime(2024, 5, 10, 9, 30, 0)


@pytest.fixture(autouse=True, scope="session")
def _app_logger() -> None:
    """Bind the application console handler before any CliRunner swaps stdout."""

    from offerflow.core.logger import get_logger

    get_logger()


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def char_measure() -> Callable[[str], float]:
    """One millimetre per character, so wrapping is predictable."""

    return lambda text: float(len(text))
