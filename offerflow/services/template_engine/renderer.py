"""Render one record into a named, laid-out document."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Optional

from offerflow.config import RenderSettings
from offerflow_io.schema import Document, HeaderBlock, Record

from .layout import Measure, layout_document
from .naming import derive_filename, display_name, header_reference
from .substitution import personalize


@dataclass(frozen=True)
class RenderedRecord:
    filename: str
    text: str
    document: Document


def render_record(
    template: str,
    record: Record,
    mapping: Mapping[str, str],
    *,
    index: int,
    settings: RenderSettings,
    now: datetime,
    measure: Optional[Measure] = None,
) -> RenderedRecord:
    """Substitute, lay out and name the document for the record at 1-based ``index``.

    Output depends only on the arguments; ``now`` supplies both the date used
    for reserved tokens and the footer timestamp.
    """

    date_text = now.strftime(settings.date_format)
    text = personalize(template, record, mapping, date_text=date_text)
    document = layout_document(
        text,
        header=HeaderBlock(reference=header_reference(record), date=date_text),
        generated_on=now.strftime(settings.timestamp_format),
        geometry=settings.geometry(),
        typography=settings.typography(),
        measure=measure,
        title=display_name(record, index),
    )
    filename = derive_filename(record, index, settings.output_extension)
    return RenderedRecord(filename=filename, text=text, document=document)
