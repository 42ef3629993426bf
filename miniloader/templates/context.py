"""Explicit inputs threaded through predicates, builders and processors."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .modes import ModeFlags
from .tables import PrototypeTables


class StartupSettings(Mapping[str, Any]):
    """Immutable startup settings (name -> value).

    Values are opaque; predicates compare them against literals.
    """

    def __init__(self, values: Mapping[str, Any] | None = None):
        self._values = MappingProxyType(dict(values or {}))

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"StartupSettings({dict(self._values)!r})"

    def value(self, name: str) -> Any:
        """Setting value, or None if the setting does not exist."""
        return self._values.get(name)

    def is_true(self, name: str) -> bool:
        """True only when the setting exists and is exactly ``True``."""
        return self._values.get(name) is True


@dataclass(frozen=True)
class TemplateContext:
    """Everything a template needs, constructed once per build."""

    flags: ModeFlags
    settings: StartupSettings = field(default_factory=StartupSettings)
    tables: PrototypeTables = field(default_factory=PrototypeTables)
