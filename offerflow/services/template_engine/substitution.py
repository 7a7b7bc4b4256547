"""Per-record placeholder substitution."""

from __future__ import annotations

from typing import Mapping

from offerflow_io.schema import Record

from .placeholders import RESERVED_TOKENS


def fallback_for(placeholder: str) -> str:
    """Visible marker used when a mapped column has no value, e.g. ``[{{name}}]``."""

    return f"[{placeholder}]"


def substitute_fields(template: str, record: Record, mapping: Mapping[str, str]) -> str:
    """Replace every occurrence of each mapped placeholder with the record's value."""

    text = template
    for placeholder, column in mapping.items():
        value = record.get(column) or fallback_for(placeholder)
        text = text.replace(placeholder, value)
    return text


def resolve_reserved(text: str, date_text: str) -> str:
    """Replace ``{{date}}`` and ``{{today}}`` with ``date_text``."""

    for token in RESERVED_TOKENS:
        text = text.replace(token, date_text)
    return text


def personalize(template: str, record: Record, mapping: Mapping[str, str], *, date_text: str) -> str:
    """Render ``template`` for one record: user mappings first, reserved tokens last."""

    return resolve_reserved(substitute_fields(template, record, mapping), date_text)
