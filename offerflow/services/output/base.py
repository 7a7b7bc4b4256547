from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from offerflow_io.pdf_io import write_document
from offerflow_io.schema import Document
from offerflow_io.utils.paths import prepare_output_dir


class IDocumentSink(ABC):
    """Interface for destinations that persist generated documents."""

    @abstractmethod
    def write(self, document: Document, filename: str) -> Path:
        """Persist ``document`` under ``filename`` and return where it landed."""


class DirectorySink(IDocumentSink):
    """Writes each document as a PDF file into one directory.

    A repeated filename overwrites the earlier file.
    """

    def __init__(self, out_dir: Path | None = None) -> None:
        self.out_dir = prepare_output_dir(out_dir)

    def write(self, document: Document, filename: str) -> Path:
        return write_document(document, self.out_dir / filename)
