"""Template engine: placeholder extraction, substitution, layout and naming."""

from .layout import apply_footers, first_page_capacity, layout_document, paginate, wrap_line, wrap_text
from .naming import derive_filename, header_reference, sanitize_name
from .placeholders import (
    RESERVED_TOKENS,
    extract_placeholders,
    mappable_placeholders,
    placeholder_name,
)
from .renderer import RenderedRecord, render_record
from .substitution import fallback_for, personalize, resolve_reserved, substitute_fields

__all__ = [
    "RESERVED_TOKENS",
    "RenderedRecord",
    "apply_footers",
    "derive_filename",
    "extract_placeholders",
    "fallback_for",
    "first_page_capacity",
    "header_reference",
    "layout_document",
    "mappable_placeholders",
    "paginate",
    "personalize",
    "placeholder_name",
    "render_record",
    "resolve_reserved",
    "sanitize_name",
    "substitute_fields",
    "wrap_line",
    "wrap_text",
]
