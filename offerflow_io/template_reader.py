"""Template text input helpers."""

# Module responsibilities:
# - Load free-form template text from a file or a pasted stream.
# - Reject word-processor binaries; their text must be pasted instead.

from __future__ import annotations

from pathlib import Path
from typing import TextIO

from .utils.log import get_logger

logger = get_logger("template_reader")

WORD_PROCESSOR_SUFFIXES = {".doc", ".docx"}


class TemplateFormatError(ValueError):
    """Raised when a template file cannot be read as plain text."""


def read_template(path: Path) -> str:
    """Read template text from ``path``.

    Raises:
        FileNotFoundError: When the file does not exist.
        TemplateFormatError: For word-processor files or undecodable bytes.
    """

    if not path.exists():
        raise FileNotFoundError(f"Template not found: {path}")
    if path.suffix.lower() in WORD_PROCESSOR_SUFFIXES:
        raise TemplateFormatError(
            f"{path.name} is a word-processor document; copy its content and paste it "
            "on standard input instead (use '-' as the template path)"
        )
    try:
        text = path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as exc:
        raise TemplateFormatError(f"Template is not UTF-8 text: {path}") from exc
    logger.info("Template loaded", extra={"path": str(path), "chars": len(text)})
    return text


def read_pasted_template(stream: TextIO) -> str:
    """Read template text pasted on a stream such as stdin."""

    text = stream.read()
    logger.info("Template pasted", extra={"chars": len(text)})
    return text
