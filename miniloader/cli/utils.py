"""Shared CLI helpers: exit codes, dual-mode output, context building.

Every command writes through :class:`Output`, so ``miniloader --json <cmd>``
emits a single JSON document with ``status``, ``errors``, ``warnings`` and
``exit_code`` keys, while the default mode prints Rich-formatted text.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, PrivateAttr
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import MiniloaderConfig, get_config, parse_setting_assignment
from ..templates import PrototypeTables, StartupSettings, TemplateContext, compute_mode_flags


class ExitCode:
    """Standardized exit codes for CLI commands.

        0 = Success
        1 = Validation error (template or configuration error)
        3 = File not found
        4 = Unknown variant
    """

    SUCCESS = 0
    VALIDATION_ERROR = 1
    FILE_NOT_FOUND = 3
    UNKNOWN_VARIANT = 4


class Output(BaseModel):
    """Collects command output for either the terminal or ``--json``.

    Human mode prints through the Rich console as messages arrive. JSON mode
    buffers everything and prints one document from :meth:`finish`.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    console: Console
    json_mode: bool = False

    _data: dict[str, Any] = PrivateAttr()
    _exit_code: int = PrivateAttr(default=ExitCode.SUCCESS)

    def model_post_init(self, __context: Any) -> None:
        self._data = {"status": "success", "warnings": [], "errors": []}

    def success(self, message: str, **data: Any) -> None:
        if self.json_mode:
            self._data.update(data)
        else:
            self.console.print(f"[green]✓[/green] {escape(message)}")

    def _issue(self, bucket: str, marker: str, message: str, **details: str | None) -> None:
        if self.json_mode:
            entry = {"message": message}
            entry.update({k: v for k, v in details.items() if v})
            self._data[bucket].append(entry)
            return
        self.console.print(f"{marker} {escape(message)}")
        if details.get("suggestion"):
            self.console.print(f"  [dim]→ {escape(details['suggestion'])}[/dim]")

    def warning(
        self,
        message: str,
        *,
        location: str | None = None,
        category: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        self._issue(
            "warnings",
            "[yellow]⚠[/yellow]",
            message,
            location=location,
            category=category,
            suggestion=suggestion,
        )

    def error(
        self,
        message: str,
        *,
        location: str | None = None,
        category: str | None = None,
        suggestion: str | None = None,
        exit_code: int = ExitCode.VALIDATION_ERROR,
    ) -> None:
        """Report an error; the command exits with ``exit_code``."""
        self._exit_code = exit_code
        self._data["status"] = "error"
        self._issue(
            "errors",
            "[red]✗[/red]",
            message,
            location=location,
            category=category,
            suggestion=suggestion,
        )

    def table(
        self,
        title: str,
        columns: list[str],
        rows: list[list[str]],
        *,
        data_key: str,
    ) -> None:
        """Rich table in human mode; list of row dicts under ``data_key`` in JSON mode."""
        if self.json_mode:
            self._data[data_key] = [dict(zip(columns, row)) for row in rows]
            return
        table = Table(title=title, show_header=True, header_style="bold")
        for col in columns:
            table.add_column(col)
        for row in rows:
            table.add_row(*(escape(cell) for cell in row))
        self.console.print(table)

    def set_data(self, key: str, value: Any) -> None:
        self._data[key] = value

    def finish(self) -> int:
        """Print the JSON document (JSON mode) and return the exit code."""
        if self.json_mode:
            self._data["exit_code"] = self._exit_code
            print(json.dumps(self._data, indent=2, default=str))
        return self._exit_code


def _issue_dict(issue) -> dict[str, Any]:
    return {
        "location": issue.location,
        "category": issue.category,
        "message": issue.message,
        "suggestion": issue.suggestion,
        "value": issue.value,
    }


def format_validation_for_json(result) -> dict[str, Any]:
    """Convert ValidationResult to JSON-serializable dict."""
    return {
        "valid": result.valid,
        "error_count": len(result.errors),
        "warning_count": len(result.warnings),
        "errors": [_issue_dict(e) for e in result.errors],
        "warnings": [_issue_dict(w) for w in result.warnings],
    }


def build_context(
    mods: list[str] | None = None,
    settings: list[str] | None = None,
    tables: Path | None = None,
    config: MiniloaderConfig | None = None,
) -> TemplateContext:
    """Build the template context from config, overridden by command-line options.

    ``mods`` replaces the configured add-on list when given; ``settings``
    (``name=value``) are layered over the configured settings; ``tables`` is
    layered over the configured tables.

    Raises:
        ValueError: On a malformed ``name=value`` setting.
        FileNotFoundError: If the tables file does not exist.
    """
    config = config or get_config()

    active = list(mods) if mods else list(config.mods.active)
    values = dict(config.settings)
    for assignment in settings or []:
        name, value = parse_setting_assignment(assignment)
        values[name] = value

    prototype_tables = config.load_tables()
    if tables is not None:
        if not tables.exists():
            raise FileNotFoundError(f"Tables file not found: {tables}")
        prototype_tables = prototype_tables.merged(PrototypeTables.from_yaml(tables))

    return TemplateContext(
        flags=compute_mode_flags(active),
        settings=StartupSettings(values),
        tables=prototype_tables,
    )
