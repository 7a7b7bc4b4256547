"""Delimited text table input helpers."""

# Module responsibilities:
# - Parse comma separated recipient tables into ordered columns and records.
# - Load tables from disk and expose a pandas preview for the table review step.
# - Emit structured logs for traceability.

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from .schema import TableData
from .utils.log import get_logger

logger = get_logger("table_reader")

DELIMITER = ","
SUPPORTED_SUFFIXES = {".csv", ".txt"}
_LINE_BREAK = re.compile(r"\r?\n")


def _split_fields(line: str) -> List[str]:
    # Naive split: quoted fields containing the delimiter are not supported.
    return [field.strip().replace('"', "") for field in line.split(DELIMITER)]


def parse_table(text: str) -> TableData:
    """Parse delimited text into a column list and one record per data line.

    The first non-empty line is the header. Short rows are padded with empty
    strings and extra fields are dropped; malformed rows never raise.
    """

    lines = [line for line in _LINE_BREAK.split(text) if line]
    if not lines:
        return TableData.build([], [])

    headers = _split_fields(lines[0])
    rows: List[Dict[str, str]] = []
    for line in lines[1:]:
        fields = _split_fields(line)
        row: Dict[str, str] = {}
        for idx, header in enumerate(headers):
            row[header] = fields[idx] if idx < len(fields) else ""
        rows.append(row)
    return TableData.build(headers, rows)


def read_table(path: Path) -> TableData:
    """Load a recipient table from a delimited text file.

    Args:
        path: Path to a ``.csv`` or ``.txt`` file.

    Returns:
        Parsed table data.

    Raises:
        FileNotFoundError: When the file does not exist.
        ValueError: When the suffix points at an unsupported (binary) format.
    """

    if not path.exists():
        raise FileNotFoundError(f"Source table not found: {path}")
    if path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise ValueError(
            f"Only delimited text tables are supported ({', '.join(sorted(SUPPORTED_SUFFIXES))}); got {path.name}"
        )

    logger.info("Reading table", extra={"path": str(path)})
    table = parse_table(path.read_text(encoding="utf-8-sig"))
    logger.info(
        "Table loaded",
        extra={"rows": len(table.records), "columns": list(table.columns)},
    )
    return table


def preview_frame(table: TableData, limit: Optional[int] = 5) -> pd.DataFrame:
    """Return the first ``limit`` records as a DataFrame (all rows when ``None``)."""

    if limit is not None and limit < 0:
        raise ValueError("limit must be non-negative")
    records = table.records if limit is None else table.records[:limit]
    return pd.DataFrame([dict(record) for record in records], columns=table.unique_columns)
