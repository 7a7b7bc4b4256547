"""Output destinations for generated documents."""

from .archive import bundle_archive
from .base import DirectorySink, IDocumentSink

__all__ = ["DirectorySink", "IDocumentSink", "bundle_archive"]
