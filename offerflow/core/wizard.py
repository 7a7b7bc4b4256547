"""Four-step generation wizard as an immutable state machine.

Each transition returns a new ``WizardState``; nothing is mutated in place.
Stages advance forward only: loading a table moves UPLOAD_TABLE to
SELECT_TEMPLATE, loading a template moves SELECT_TEMPLATE to MAP_FIELDS, and
``begin_generation`` moves a fully mapped state to GENERATE, after which the
mapping is frozen.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import IntEnum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from offerflow.services.template_engine import mappable_placeholders
from offerflow_io.mapping import BaseMappingStrategy, HeaderAutoMappingStrategy, unmapped_placeholders
from offerflow_io.schema import TableData

from .errors import WizardError
from .pipeline import GenerationRequest


class Stage(IntEnum):
    UPLOAD_TABLE = 1
    SELECT_TEMPLATE = 2
    MAP_FIELDS = 3
    GENERATE = 4

    @property
    def label(self) -> str:
        return {
            Stage.UPLOAD_TABLE: "Upload Table",
            Stage.SELECT_TEMPLATE: "Select Template",
            Stage.MAP_FIELDS: "Map Fields",
            Stage.GENERATE: "Generate PDFs",
        }[self]


@dataclass(frozen=True)
class WizardState:
    stage: Stage = Stage.UPLOAD_TABLE
    table: Optional[TableData] = None
    template: str = ""
    placeholders: Tuple[str, ...] = ()
    mapping: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def load_table(self, table: TableData) -> "WizardState":
        if self.stage is Stage.GENERATE:
            raise WizardError("Generation already started; start a new wizard to load another table")
        stage = Stage.SELECT_TEMPLATE if self.stage is Stage.UPLOAD_TABLE else self.stage
        # Column set changed, so assignments to vanished columns are dropped.
        known = set(table.columns)
        kept = {token: column for token, column in self.mapping.items() if column in known}
        return replace(self, stage=stage, table=table, mapping=MappingProxyType(kept))

    def load_template(self, text: str) -> "WizardState":
        if self.table is None:
            raise WizardError("Load a table before selecting a template")
        if self.stage is Stage.GENERATE:
            raise WizardError("Generation already started; start a new wizard to change the template")
        placeholders = tuple(mappable_placeholders(text))
        kept = {token: column for token, column in self.mapping.items() if token in placeholders}
        stage = Stage.MAP_FIELDS if self.stage is Stage.SELECT_TEMPLATE else self.stage
        return replace(
            self,
            stage=stage,
            template=text,
            placeholders=placeholders,
            mapping=MappingProxyType(kept),
        )

    def _require_mapping_stage(self) -> TableData:
        if self.stage is Stage.GENERATE:
            raise WizardError("Mapping is frozen once generation has started")
        if self.stage is not Stage.MAP_FIELDS or self.table is None:
            raise WizardError("Load a table and a template before mapping fields")
        return self.table

    def assign(self, placeholder: str, column: str) -> "WizardState":
        table = self._require_mapping_stage()
        if placeholder not in self.placeholders:
            raise WizardError(f"Unknown placeholder: {placeholder}")
        if column not in table.columns:
            raise WizardError(f"Unknown column: {column}")
        return replace(self, mapping=MappingProxyType({**self.mapping, placeholder: column}))

    def clear(self, placeholder: str) -> "WizardState":
        self._require_mapping_stage()
        updated = {token: column for token, column in self.mapping.items() if token != placeholder}
        return replace(self, mapping=MappingProxyType(updated))

    def with_mapping(self, mapping: Mapping[str, str]) -> "WizardState":
        state = self
        for placeholder, column in mapping.items():
            state = state.assign(placeholder, column)
        return state

    def auto_map(self, strategy: Optional[BaseMappingStrategy] = None) -> "WizardState":
        """Replace the mapping with the strategy's suggestion (header matching by default)."""

        table = self._require_mapping_stage()
        suggested = (strategy or HeaderAutoMappingStrategy()).map(list(self.placeholders), list(table.columns))
        return replace(self, mapping=MappingProxyType(dict(suggested)))

    @property
    def unmapped(self) -> list[str]:
        return unmapped_placeholders(self.placeholders, self.mapping)

    @property
    def is_ready(self) -> bool:
        return self.stage is Stage.MAP_FIELDS and bool(self.template) and not self.unmapped

    def begin_generation(self) -> tuple["WizardState", GenerationRequest]:
        table = self._require_mapping_stage()
        if not self.template:
            raise WizardError("Template is empty")
        if self.unmapped:
            raise WizardError(f"Mapping required for: {', '.join(self.unmapped)}")
        request = GenerationRequest.build(self.template, table.records, self.mapping)
        return replace(self, stage=Stage.GENERATE), request
