"""`offerflow_io` top-level package exports the IO helpers for tables, templates and PDFs."""

# Module responsibilities:
# - Re-export high-level interfaces for table/template input, mapping and PDF output so consumers have a stable API surface.
# - Provide package version for packaging.

from __future__ import annotations

from .mapping import (
    FixedMapping,
    FixedMappingStrategy,
    HeaderAutoMappingStrategy,
    MappingError,
    unmapped_placeholders,
)
from .pdf_io import PdfInfo, PdfProcessingError, extract_text, read_info, write_document
from .schema import Document, FieldMapping, PageGeometry, Record, TableData, Typography
from .table_reader import parse_table, preview_frame, read_table
from .template_reader import TemplateFormatError, read_pasted_template, read_template

__all__ = [
    "parse_table",
    "read_table",
    "preview_frame",
    "read_template",
    "read_pasted_template",
    "TemplateFormatError",
    "FixedMapping",
    "FixedMappingStrategy",
    "HeaderAutoMappingStrategy",
    "MappingError",
    "unmapped_placeholders",
    "PdfInfo",
    "PdfProcessingError",
    "read_info",
    "extract_text",
    "write_document",
    "Document",
    "FieldMapping",
    "PageGeometry",
    "Record",
    "TableData",
    "Typography",
]

__version__ = "0.1.0"
