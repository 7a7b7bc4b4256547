from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Mapping, Sequence

from offerflow.config import RenderSettings
from offerflow.services.output import IDocumentSink
from offerflow.services.template_engine import mappable_placeholders, render_record
from offerflow.services.template_engine.layout import Measure
from offerflow.services.template_engine.naming import display_name
from offerflow_io.mapping import unmapped_placeholders
from offerflow_io.schema import Record

from .errors import IncompleteMappingError, MissingTemplateError, RenderError
from .logger import get_logger


Clock = Callable[[], datetime]


@dataclass(frozen=True)
class GenerationRequest:
    """Frozen inputs of one generation run."""

    template: str
    records: tuple[Record, ...]
    mapping: Mapping[str, str]

    @classmethod
    def build(cls, template: str, records: Sequence[Record], mapping: Mapping[str, str]) -> "GenerationRequest":
        return cls(template=template, records=tuple(records), mapping=MappingProxyType(dict(mapping)))


@dataclass(frozen=True)
class GenerationProgress:
    total: int
    completed: int
    failed: int
    current: str

    @property
    def processed(self) -> int:
        return self.completed + self.failed


ProgressCB = Callable[[GenerationProgress], None]


@dataclass(frozen=True)
class RecordFailure:
    index: int
    name: str
    error: str


@dataclass
class BulkResult:
    total: int
    written: list[Path] = field(default_factory=list)
    failures: list[RecordFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class Pipeline:
    """Coordinates Substitute -> Layout -> Output for one or many records."""

    def __init__(
        self,
        sink: IDocumentSink,
        settings: RenderSettings | None = None,
        clock: Clock | None = None,
        logger=None,
        measure: Measure | None = None,
    ) -> None:
        self.sink = sink
        self.settings = settings or RenderSettings()
        self.clock = clock or datetime.now
        self.logger = logger or get_logger()
        self.measure = measure

    def _check_inputs(self, template: str, mapping: Mapping[str, str]) -> None:
        if not template:
            raise MissingTemplateError("No template content found; load a template first")
        missing = unmapped_placeholders(mappable_placeholders(template), mapping)
        if missing:
            raise IncompleteMappingError(missing)

    def _render_and_write(self, template: str, record: Record, mapping: Mapping[str, str], index: int) -> Path:
        rendered = render_record(
            template,
            record,
            mapping,
            index=index,
            settings=self.settings,
            now=self.clock(),
            measure=self.measure,
        )
        return self.sink.write(rendered.document, rendered.filename)

    def generate_one(self, template: str, record: Record, mapping: Mapping[str, str], index: int = 1) -> Path:
        """Generate the document of a single record; any failure is raised as RenderError."""

        self._check_inputs(template, mapping)
        try:
            path = self._render_and_write(template, record, mapping, index)
        except Exception as e:  # noqa: BLE001
            raise RenderError(f"Failed to generate document for {display_name(record, index)}: {e}") from e
        self.logger.info("Generated %s", path.name)
        return path

    def generate_bulk(
        self,
        template: str,
        records: Sequence[Record],
        mapping: Mapping[str, str],
        progress_cb: ProgressCB | None = None,
    ) -> BulkResult:
        """Generate one document per record, skipping (and logging) records that fail."""

        self._check_inputs(template, mapping)
        frozen = MappingProxyType(dict(mapping))
        result = BulkResult(total=len(records))
        self.logger.info("Bulk generation started: %d records", result.total)

        for index, record in enumerate(records, start=1):
            name = display_name(record, index)
            try:
                result.written.append(self._render_and_write(template, record, frozen, index))
            except Exception as e:  # noqa: BLE001
                self.logger.error("Failed to generate document for %s (record %d): %s", name, index, e, exc_info=True)
                result.failures.append(RecordFailure(index=index, name=name, error=str(e)))
            if progress_cb:
                progress_cb(
                    GenerationProgress(
                        total=result.total,
                        completed=len(result.written),
                        failed=len(result.failures),
                        current=name,
                    )
                )

        self.logger.info(
            "Bulk generation finished: %d written, %d failed", len(result.written), len(result.failures)
        )
        return result

    def run(self, request: GenerationRequest, progress_cb: ProgressCB | None = None) -> BulkResult:
        return self.generate_bulk(request.template, request.records, request.mapping, progress_cb)
