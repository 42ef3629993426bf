"""Read-only access to externally maintained prototype tables.

Tables are keyed by category (e.g. ``transport-belt``) and then by prototype
name. They are populated by an earlier build stage; this package only reads
them, and a missing entry is always fatal.
"""

import copy
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .errors import MissingExternalRecordError

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"
VANILLA_TABLES = _DATA_DIR / "vanilla_tables.yaml"


class PrototypeTables:
    """Category -> name -> record lookups."""

    def __init__(self, tables: Mapping[str, Mapping[str, Mapping[str, Any]]] | None = None):
        self._tables: dict[str, dict[str, dict[str, Any]]] = {}
        for category, records in (tables or {}).items():
            if not isinstance(records, Mapping):
                raise ValueError(f"Table category {category!r} must be a mapping of records")
            self._tables[category] = {}
            for name, record in records.items():
                if not isinstance(record, Mapping):
                    raise ValueError(f"Record {category}/{name} must be a mapping of fields")
                self._tables[category][name] = dict(record)

    @classmethod
    def from_yaml(cls, path: Path | str) -> "PrototypeTables":
        """Load tables from YAML.

        Raises:
            ValueError: If the file is not valid YAML or not shaped
                ``{category: {name: {field: value}}}``.
        """
        with open(path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ValueError(f"Invalid YAML in prototype tables {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"Prototype tables in {path} must be a mapping")
        return cls(data)

    @classmethod
    def vanilla(cls) -> "PrototypeTables":
        """Tables for the base game and Space Age belts bundled with the package."""
        return cls.from_yaml(VANILLA_TABLES)

    def merged(self, other: "PrototypeTables") -> "PrototypeTables":
        """Return new tables with ``other``'s records layered over these."""
        data = copy.deepcopy(self._tables)
        for category, records in other._tables.items():
            data.setdefault(category, {}).update(copy.deepcopy(records))
        return PrototypeTables(data)

    def has(self, category: str, name: str) -> bool:
        return name in self._tables.get(category, {})

    def get(self, category: str, name: str) -> dict[str, Any]:
        """Look up a record.

        Raises:
            MissingExternalRecordError: If the category or name is absent.
        """
        try:
            return self._tables[category][name]
        except KeyError:
            raise MissingExternalRecordError(category, name) from None

    def field(self, category: str, name: str, field: str) -> Any:
        """Look up one field of a record; a missing field is as fatal as a missing record."""
        record = self.get(category, name)
        if field not in record:
            raise MissingExternalRecordError(category, f"{name}.{field}")
        return record[field]

    def belt_speed(self, belt_name: str) -> float:
        return float(self.field("transport-belt", belt_name, "speed"))

    def to_dict(self) -> dict[str, dict[str, dict[str, Any]]]:
        return copy.deepcopy(self._tables)
