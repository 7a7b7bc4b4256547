"""Mapping strategies from template placeholders to table columns."""

# Module responsibilities:
# - Define abstract mapping strategies producing placeholder -> column maps.
# - Provide header-based automatic mapping by case-insensitive name match.
# - Provide a FixedMapping implementation backed by YAML configuration.

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Sequence

import yaml

from .schema import FieldMapping, MappingFileConfig
from .utils.log import get_logger

logger = get_logger("mapping")


class MappingError(RuntimeError):
    """Raised when mapping configuration is invalid or cannot be applied."""


def _bare_name(placeholder: str) -> str:
    return placeholder.replace("{", "").replace("}", "")


def unmapped_placeholders(placeholders: Iterable[str], mapping: Mapping[str, str]) -> List[str]:
    """Return placeholders with no (or an empty) column assignment."""

    return [token for token in placeholders if not mapping.get(token)]


class BaseMappingStrategy(ABC):
    """Abstract base class for mapping strategies."""

    @abstractmethod
    def map(self, placeholders: Sequence[str], columns: Sequence[str]) -> FieldMapping:
        """Compute a field mapping for the given placeholders and column set."""


class HeaderAutoMappingStrategy(BaseMappingStrategy):
    """Map each placeholder to the first column whose name matches case-insensitively.

    Braces are removed from the placeholder before comparing; inner whitespace
    is kept, so ``{{ name }}`` does not match a ``name`` column. Placeholders
    without a match stay unmapped.
    """

    def map(self, placeholders: Sequence[str], columns: Sequence[str]) -> FieldMapping:
        lowered = [(column.lower(), column) for column in columns]
        result: FieldMapping = {}
        for token in placeholders:
            clean = _bare_name(token).lower()
            match = next((column for key, column in lowered if key == clean), None)
            if match is not None:
                result[token] = match
        logger.info(
            "Auto-mapped placeholders",
            extra={"mapped": len(result), "placeholders": len(placeholders)},
        )
        return result


@dataclass(frozen=True)
class FixedMappingStrategy(BaseMappingStrategy):
    """Concrete mapping strategy using explicit configuration."""

    config: MappingFileConfig

    def map(self, placeholders: Sequence[str], columns: Sequence[str]) -> FieldMapping:
        """Validate the configured mapping against the column set.

        Args:
            placeholders: Placeholders found in the template.
            columns: Column names of the loaded table.

        Returns:
            Field map of ``placeholder -> column`` restricted to ``placeholders``;
            entries for placeholders the template does not use are dropped.
        """

        known = set(columns)
        missing = sorted({column for column in self.fields.values() if column not in known})
        if missing:
            raise MappingError(f"Mapping references unknown columns: {', '.join(missing)}")
        unused = [token for token in self.fields if token not in placeholders]
        if unused:
            logger.warning(
                "Mapping entries not present in template",
                extra={"placeholders": unused},
            )
        return {token: column for token, column in self.fields.items() if token in placeholders}

    @property
    def fields(self) -> Dict[str, str]:
        return self.config["fields"]


@dataclass(frozen=True)
class FixedMapping(FixedMappingStrategy):
    """Helper dataclass bundling YAML loading and saving for fixed mappings."""

    @classmethod
    def from_yaml(cls, path: Path) -> "FixedMapping":
        """Load mapping configuration from YAML file."""

        if not path.exists():
            raise MappingError(f"Mapping file not found: {path}")
        try:
            with path.open("r", encoding="utf-8") as fh:
                payload = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise MappingError(f"Invalid mapping YAML: {exc}") from exc
        if not isinstance(payload, dict):
            raise MappingError("Invalid mapping YAML structure (expected mapping)")
        fields = payload.get("fields")
        if not isinstance(fields, dict):
            raise MappingError("Mapping YAML missing required key: fields")
        config: MappingFileConfig = {
            "fields": {str(k): str(v) for k, v in fields.items() if v not in (None, "")},
        }
        return cls(config=config)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "FixedMapping":
        return cls(config={"fields": dict(mapping)})

    def to_yaml(self, path: Path) -> Path:
        """Write the mapping to ``path`` in the format accepted by ``from_yaml``."""

        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as fh:
            yaml.safe_dump({"fields": dict(self.fields)}, fh, allow_unicode=True, sort_keys=False)
        logger.info("Mapping saved", extra={"path": str(path), "entries": len(self.fields)})
        return path
