"""Shared schemas for tabular records and laid-out PDF documents."""

# Module responsibilities:
# - Provide typed containers for records, column sets and field mappings.
# - Define the page/document structures produced by layout and consumed by PDF output.
# - Define the YAML payload shape used by fixed mapping files.

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple, TypedDict

Record = Mapping[str, str]
FieldMapping = Dict[str, str]


class MappingFileConfig(TypedDict):
    """Schema for fixed field mapping YAML payloads."""

    fields: Dict[str, str]


@dataclass(frozen=True)
class TableData:
    """Parsed table: ordered header columns plus one read-only record per row."""

    columns: Tuple[str, ...]
    records: Tuple[Record, ...]

    @classmethod
    def build(cls, columns: List[str], rows: List[Dict[str, str]]) -> "TableData":
        return cls(
            columns=tuple(columns),
            records=tuple(MappingProxyType(dict(row)) for row in rows),
        )

    @property
    def unique_columns(self) -> List[str]:
        """Columns with duplicates collapsed, first occurrence order."""

        return list(dict.fromkeys(self.columns))

    def __len__(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class PageGeometry:
    """Fixed page dimensions in millimetres, measured from the top-left corner."""

    width: float = 210.0
    height: float = 297.0
    margin: float = 20.0
    line_height: float = 6.0
    content_top: float = 50.0
    max_line_width: float = 170.0
    header_top: float = 20.0
    header_spacing: float = 10.0
    rule_y: float = 35.0
    footer_offset: float = 10.0

    @property
    def bottom_limit(self) -> float:
        return self.height - self.margin

    @property
    def footer_y(self) -> float:
        return self.height - self.footer_offset

    @property
    def right_edge(self) -> float:
        return self.width - self.margin


@dataclass(frozen=True)
class Typography:
    """Font family and sizes (points) for each text block."""

    font_name: str = "Helvetica"
    header_size: float = 12.0
    body_size: float = 11.0
    footer_size: float = 8.0


@dataclass(frozen=True)
class PlacedLine:
    text: str
    y: float


@dataclass(frozen=True)
class HeaderBlock:
    """Reference/date lines drawn once at the top of the first page."""

    reference: str
    date: str

    @property
    def lines(self) -> Tuple[str, str]:
        return (f"Reference: {self.reference}", f"Date: {self.date}")


@dataclass(frozen=True)
class Footer:
    left: str
    right: str


@dataclass(frozen=True)
class Page:
    number: int
    lines: Tuple[PlacedLine, ...]
    header: Optional[HeaderBlock] = None
    footer: Optional[Footer] = None

    def text_lines(self) -> List[str]:
        return [line.text for line in self.lines]


@dataclass(frozen=True)
class Document:
    """A laid-out document: pages plus the geometry and fonts they were laid out with."""

    pages: Tuple[Page, ...]
    geometry: PageGeometry
    typography: Typography
    title: str = ""

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def content_lines(self) -> List[str]:
        """All body lines in page order, headers and footers excluded."""

        return [text for page in self.pages for text in page.text_lines()]
