"""PDF output and read-back utilities."""

# Module responsibilities:
# - Draw laid-out documents onto fixed-size pages with reportlab.
# - Measure text with the same font metrics used for drawing, and flag characters the font lacks.
# - Surface page count/metadata/text of generated PDFs with PyPDF2.

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from .schema import Document, Page
from .utils.log import get_logger

logger = get_logger("pdf_io")


class PdfProcessingError(RuntimeError):
    """Raised when PDF operations fail."""


@dataclass(frozen=True)
class PdfInfo:
    """Metadata summary for a PDF file."""

    path: Path
    page_count: int
    metadata: Dict[str, str]
    encrypted: bool


def text_width(text: str, font_name: str, font_size: float) -> float:
    """Return the rendered width of ``text`` in millimetres."""

    return stringWidth(text, font_name, font_size) / mm


# Encoding of the standard PDF fonts reportlab draws with.
STANDARD_FONT_ENCODING = "cp1252"


def undrawable_characters(text: str) -> str:
    """Characters of ``text`` the standard fonts cannot encode, in first-seen order."""

    missing: Dict[str, None] = {}
    for char in text:
        try:
            char.encode(STANDARD_FONT_ENCODING)
        except UnicodeEncodeError:
            missing[char] = None
    return "".join(missing)


def _document_text(document: Document) -> str:
    parts: List[str] = []
    for page in document.pages:
        if page.header is not None:
            parts.extend(page.header.lines)
        parts.extend(page.text_lines())
    return "\n".join(parts)


def _draw_page(pdf: canvas.Canvas, page: Page, document: Document) -> None:
    geometry = document.geometry
    fonts = document.typography

    # Layout coordinates grow downwards from the top edge; reportlab's grow upwards.
    def y_of(top: float) -> float:
        return (geometry.height - top) * mm

    if page.header is not None:
        pdf.setFont(fonts.font_name, fonts.header_size)
        for idx, text in enumerate(page.header.lines):
            top = geometry.header_top + idx * geometry.header_spacing
            pdf.drawString(geometry.margin * mm, y_of(top), text)
        pdf.line(geometry.margin * mm, y_of(geometry.rule_y), geometry.right_edge * mm, y_of(geometry.rule_y))

    pdf.setFont(fonts.font_name, fonts.body_size)
    for line in page.lines:
        if line.text:
            pdf.drawString(geometry.margin * mm, y_of(line.y), line.text)

    if page.footer is not None:
        pdf.setFont(fonts.font_name, fonts.footer_size)
        pdf.drawString(geometry.margin * mm, y_of(geometry.footer_y), page.footer.left)
        pdf.drawRightString(geometry.right_edge * mm, y_of(geometry.footer_y), page.footer.right)


def write_document(document: Document, out_path: Path) -> Path:
    """Write ``document`` to ``out_path`` as a PDF, one canvas page per layout page."""

    if not document.pages:
        raise PdfProcessingError("Document has no pages")

    missing = undrawable_characters(_document_text(document))
    if missing:
        logger.warning(
            "Text contains characters the font cannot draw",
            extra={"output": str(out_path), "characters": missing},
        )

    out_path.parent.mkdir(parents=True, exist_ok=True)
    geometry = document.geometry
    pdf = canvas.Canvas(str(out_path), pagesize=(geometry.width * mm, geometry.height * mm))
    if document.title:
        pdf.setTitle(document.title)
    for page in document.pages:
        _draw_page(pdf, page, document)
        pdf.showPage()
    try:
        pdf.save()
    except OSError as exc:
        raise PdfProcessingError(f"Failed to write PDF {out_path}: {exc}") from exc

    logger.info(
        "PDF written",
        extra={"output": str(out_path), "pages": document.page_count},
    )
    return out_path


def _resolve_pdf_reader(path: Path) -> PdfReader:
    if not path.exists():
        raise FileNotFoundError(f"PDF file not found: {path}")
    try:
        reader = PdfReader(path)
    except PdfReadError as exc:
        raise PdfProcessingError(f"Failed to open PDF: {exc}") from exc
    if reader.is_encrypted:
        raise PdfProcessingError("Encrypted PDFs are not supported")
    return reader


def read_info(path: Path) -> PdfInfo:
    """Read metadata and page count for a PDF file."""

    reader = _resolve_pdf_reader(path)
    metadata = {k.lstrip("/"): str(v) for k, v in (reader.metadata or {}).items()}
    page_count = len(reader.pages)

    logger.info(
        "PDF info read",
        extra={"path": str(path), "page_count": page_count},
    )
    return PdfInfo(
        path=path,
        page_count=page_count,
        metadata=metadata,
        encrypted=False,
    )


def extract_text(path: Path) -> List[str]:
    """Extract the text of each page of the PDF."""

    reader = _resolve_pdf_reader(path)
    pages: List[str] = []
    for page in reader.pages:
        pages.append(page.extract_text() or "")
    return pages
