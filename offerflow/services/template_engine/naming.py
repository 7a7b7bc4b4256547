"""Output names and header references derived from a record."""

from __future__ import annotations

import re
from typing import Iterable

from offerflow_io.schema import Record

NAME_COLUMNS = ("name", "Name")
REFERENCE_COLUMNS = ("Ref_number", "ref_number")

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def _first_value(record: Record, columns: Iterable[str]) -> str:
    for column in columns:
        value = record.get(column)
        if value:
            return value
    return ""


def display_name(record: Record, index: int) -> str:
    return _first_value(record, NAME_COLUMNS) or f"Student_{index}"


def reference_token(record: Record, index: int) -> str:
    return _first_value(record, REFERENCE_COLUMNS) or f"REF{index:03d}"


def header_reference(record: Record) -> str:
    """Reference printed in the document header; ``N/A`` when the record has none."""

    return _first_value(record, REFERENCE_COLUMNS) or "N/A"


def sanitize_name(name: str) -> str:
    return _WHITESPACE.sub("_", _UNSAFE_CHARS.sub("", name))


def derive_filename(record: Record, index: int, extension: str = "pdf") -> str:
    """Build ``<name>_<reference>.<extension>`` for the record at 1-based ``index``.

    Two records may yield the same name; nothing disambiguates them.
    """

    return f"{sanitize_name(display_name(record, index))}_{reference_token(record, index)}.{extension}"
