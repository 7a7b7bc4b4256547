"""Word wrapping and pagination of rendered text onto fixed-size pages."""

# Module responsibilities:
# - Wrap logical lines greedily to the content width, breaking only words wider than a line.
# - Place wrapped lines top-down, opening a new page when the bottom margin is reached.
# - Stamp every page with a footer once the final page count is known.

from __future__ import annotations

from dataclasses import replace
from typing import Callable, List, Optional, Sequence, Tuple

from offerflow_io.pdf_io import text_width
from offerflow_io.schema import Document, Footer, HeaderBlock, Page, PageGeometry, PlacedLine, Typography

Measure = Callable[[str], float]


def body_measure(typography: Typography) -> Measure:
    """Width function (millimetres) for body text in the given typography."""

    def _measure(text: str) -> float:
        return text_width(text, typography.font_name, typography.body_size)

    return _measure


def _split_word(word: str, max_width: float, measure: Measure) -> List[str]:
    """Break a word wider than ``max_width`` into character runs that each fit."""

    pieces: List[str] = []
    current = ""
    for char in word:
        if current and measure(current + char) > max_width:
            pieces.append(current)
            current = char
        else:
            current += char
    pieces.append(current)
    return pieces


def wrap_line(line: str, max_width: float, measure: Measure) -> List[str]:
    """Greedy wrap of one logical line.

    Words are appended while the line stays within ``max_width``. A word that
    is wider than ``max_width`` on its own is broken into character runs, so
    no wrapped line is wider than the content area. An empty line stays a
    single empty line.
    """

    wrapped: List[str] = []
    current: Optional[str] = None
    for word in line.split(" "):
        if measure(word) > max_width:
            pieces = _split_word(word, max_width, measure)
            if current is not None:
                wrapped.append(current)
            wrapped.extend(pieces[:-1])
            current = pieces[-1]
            continue
        if current is None:
            current = word
            continue
        candidate = f"{current} {word}"
        if measure(candidate) <= max_width:
            current = candidate
        else:
            wrapped.append(current)
            current = word
    wrapped.append(current)
    return wrapped


def wrap_text(text: str, max_width: float, measure: Measure) -> List[str]:
    lines: List[str] = []
    for logical in text.replace("\r\n", "\n").split("\n"):
        lines.extend(wrap_line(logical, max_width, measure))
    return lines


def first_page_capacity(geometry: PageGeometry) -> int:
    """Number of content lines page 1 holds below the header block."""

    return int((geometry.bottom_limit - geometry.content_top) // geometry.line_height)


def paginate(
    lines: Sequence[str],
    geometry: PageGeometry,
    header: Optional[HeaderBlock] = None,
) -> List[Page]:
    """Place ``lines`` on pages; the header block only goes on page 1."""

    pages: List[Page] = []
    placed: List[PlacedLine] = []
    y = geometry.content_top
    for text in lines:
        if y + geometry.line_height > geometry.bottom_limit:
            pages.append(Page(number=len(pages) + 1, lines=tuple(placed), header=header if not pages else None))
            placed = []
            y = geometry.margin
        placed.append(PlacedLine(text=text, y=y))
        y += geometry.line_height
    pages.append(Page(number=len(pages) + 1, lines=tuple(placed), header=header if not pages else None))
    return pages


def apply_footers(pages: Sequence[Page], generated_on: str) -> Tuple[Page, ...]:
    """Second pass over committed pages: ``Generated on`` left, ``Page X of N`` right."""

    total = len(pages)
    return tuple(
        replace(page, footer=Footer(left=f"Generated on: {generated_on}", right=f"Page {page.number} of {total}"))
        for page in pages
    )


def layout_document(
    text: str,
    *,
    header: HeaderBlock,
    generated_on: str,
    geometry: PageGeometry,
    typography: Typography,
    measure: Optional[Measure] = None,
    title: str = "",
) -> Document:
    """Lay ``text`` out as a paginated document with header and footers."""

    lines = wrap_text(text, geometry.max_line_width, measure or body_measure(typography))
    pages = apply_footers(paginate(lines, geometry, header), generated_on)
    return Document(pages=pages, geometry=geometry, typography=typography, title=title)
