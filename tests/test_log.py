"""Unit tests for shared logging setup."""

from __future__ import annotations

import io
import logging
from pathlib import Path

from offerflow_io.utils.log import attach_handlers


def test_handlers_attached_once(tmp_path: Path) -> None:
    logger = logging.getLogger("offerflow_tests.attach_once")
    log_path = tmp_path / "logs" / "once.log"

    attach_handlers(logger, log_path, stream=io.StringIO())
    attach_handlers(logger, log_path, stream=io.StringIO())

    assert len(logger.handlers) == 2
    assert not logger.propagate


def test_records_reach_file_and_stream(tmp_path: Path) -> None:
    logger = logging.getLogger("offerflow_tests.file_and_stream")
    log_path = tmp_path / "logs" / "both.log"
    stream = io.StringIO()

    attach_handlers(logger, log_path, stream=stream)
    logger.info("letters ready")
    for handler in logger.handlers:
        handler.flush()

    assert "[INFO] offerflow_tests.file_and_stream - letters ready" in stream.getvalue()
    assert "letters ready" in log_path.read_text(encoding="utf-8")
