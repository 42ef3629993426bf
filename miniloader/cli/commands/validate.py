"""Validate command for the loader registry."""

from pathlib import Path

import typer

from ...templates import build_registry, validate_registry
from ..app import app, console, get_json_mode
from ..utils import ExitCode, Output, format_validation_for_json
from .resolve import MODS_HELP, SETTING_HELP, TABLES_HELP, _context_or_exit


@app.command("validate")
def validate_command(
    mods: list[str] | None = typer.Option(None, "--mod", "-m", help=MODS_HELP),
    settings: list[str] | None = typer.Option(None, "--setting", "-s", help=SETTING_HELP),
    tables: Path | None = typer.Option(None, "--tables", "-t", help=TABLES_HELP),
    strict: bool = typer.Option(
        False, "--strict", help="Treat warnings as errors (exit code 1 if any warnings)"
    ),
):
    """Check the upgrade graph and dry-run every active loader.

    EXIT CODES:
        0 = Success (valid)
        1 = Validation error (invalid)
        3 = File not found
    """
    out = Output(console=console, json_mode=get_json_mode())
    context = _context_or_exit(out, mods, settings, tables)
    registry = build_registry(context)
    result = validate_registry(registry)

    if out.json_mode:
        out.set_data("validation", format_validation_for_json(result))

    for issue in result.errors:
        out.error(
            f"{issue.location}: {issue.message}",
            location=issue.location,
            category=issue.category,
            suggestion=issue.suggestion,
        )
    for issue in result.warnings:
        out.warning(
            f"{issue.location}: {issue.message}",
            location=issue.location,
            category=issue.category,
            suggestion=issue.suggestion,
        )

    if result.valid and strict and result.warnings:
        out.error(
            f"{len(result.warnings)} warning(s) treated as errors (--strict)",
            exit_code=ExitCode.VALIDATION_ERROR,
        )
    elif result.valid:
        active = len(registry.all_active_keys())
        out.success(
            f"Registry valid ({active} of {len(registry)} variants active, "
            f"{len(result.warnings)} warning(s))",
            active=active,
        )

    raise typer.Exit(out.finish())
