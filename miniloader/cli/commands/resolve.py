"""Commands that resolve templates: modes, list, show, build."""

from pathlib import Path

import typer
import yaml

from ...core.models import LoaderRecord, records_to_yaml
from ...templates import (
    TemplateContext,
    TemplateError,
    build_all,
    build_record,
    build_registry,
    key_from_name,
    name_from_key,
)
from ..app import app, console, get_json_mode
from ..utils import ExitCode, Output, build_context

MODS_HELP = "Active add-on (repeatable), e.g. --mod space-age"
SETTING_HELP = "Startup setting as name=value (repeatable)"
TABLES_HELP = "YAML prototype tables layered over the bundled vanilla tables"


def _context_or_exit(
    out: Output,
    mods: list[str] | None,
    settings: list[str] | None,
    tables: Path | None,
) -> TemplateContext:
    try:
        return build_context(mods, settings, tables)
    except FileNotFoundError as exc:
        out.error(str(exc), exit_code=ExitCode.FILE_NOT_FOUND)
    except ValueError as exc:
        out.error(str(exc), category="input")
    raise typer.Exit(out.finish())


def _record_row(record: LoaderRecord) -> list[str]:
    return [
        record.key or "(base)",
        record.name,
        record.order,
        f"{record.speed:g}",
        f"{record.speed_config.items_per_second:g}",
        record.upgrade_from or "-",
    ]


@app.command("modes")
def modes_command(
    mods: list[str] | None = typer.Option(None, "--mod", "-m", help=MODS_HELP),
):
    """Show the game mode flags for a set of active add-ons."""
    out = Output(console=console, json_mode=get_json_mode())
    context = _context_or_exit(out, mods, None, None)

    rows = [
        [mode, "on" if value else "off"]
        for mode, value in context.flags.items()
    ]
    if out.json_mode:
        out.set_data("modes", dict(context.flags))
    else:
        out.table("Game Modes", ["Mode", "Enabled"], rows, data_key="modes")
    out.set_data("max_loader", context.flags.max_loader)
    raise typer.Exit(out.finish())


@app.command("list")
def list_command(
    mods: list[str] | None = typer.Option(None, "--mod", "-m", help=MODS_HELP),
    settings: list[str] | None = typer.Option(None, "--setting", "-s", help=SETTING_HELP),
    tables: Path | None = typer.Option(None, "--tables", "-t", help=TABLES_HELP),
):
    """List the loader variants active under the given configuration."""
    out = Output(console=console, json_mode=get_json_mode())
    context = _context_or_exit(out, mods, settings, tables)
    registry = build_registry(context)

    try:
        records = build_all(registry)
    except TemplateError as exc:
        out.error(f"Template resolution failed: {exc}")
        raise typer.Exit(out.finish())

    out.table(
        "Active Loaders",
        ["Key", "Name", "Order", "Belt speed", "Items/s", "Upgrades from"],
        [_record_row(record) for record in records],
        data_key="loaders",
    )
    out.success(f"{len(records)} of {len(registry)} variants active", count=len(records))
    raise typer.Exit(out.finish())


@app.command("show")
def show_command(
    variant: str = typer.Argument(
        ..., help="Variant key or entity name ('base' or 'miniloader' for the baseline tier)"
    ),
    mods: list[str] | None = typer.Option(None, "--mod", "-m", help=MODS_HELP),
    settings: list[str] | None = typer.Option(None, "--setting", "-s", help=SETTING_HELP),
    tables: Path | None = typer.Option(None, "--tables", "-t", help=TABLES_HELP),
    scope: str | None = typer.Option(
        None, "--scope", help="Belt name prefix override (defaults to '<key>-')"
    ),
):
    """Show one fully resolved loader record."""
    out = Output(console=console, json_mode=get_json_mode())
    context = _context_or_exit(out, mods, settings, tables)
    registry = build_registry(context)

    key = "" if variant == "base" else variant
    if key not in registry:
        resolved = key_from_name(variant)
        if resolved is not None:
            key = resolved
    if key not in registry:
        out.error(
            f"Unknown loader variant: {variant}",
            suggestion=f"Known variants: {', '.join(k or 'base' for k in registry)}",
            exit_code=ExitCode.UNKNOWN_VARIANT,
        )
        raise typer.Exit(out.finish())

    try:
        record = build_record(registry, key, scope)
    except TemplateError as exc:
        out.error(f"Template resolution failed for {name_from_key(key)}: {exc}")
        raise typer.Exit(out.finish())

    if record is None:
        out.error(
            f"{name_from_key(key)} is not active under this configuration",
            suggestion="check --mod and --setting values",
            exit_code=ExitCode.VALIDATION_ERROR,
        )
        raise typer.Exit(out.finish())

    data = record.model_dump(mode="json", exclude_none=True)
    if out.json_mode:
        out.set_data("loader", data)
    else:
        console.print(
            yaml.dump({record.name: data}, default_flow_style=False, sort_keys=False),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
    raise typer.Exit(out.finish())


@app.command("build")
def build_command(
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write records to this YAML file (stdout if omitted)"
    ),
    mods: list[str] | None = typer.Option(None, "--mod", "-m", help=MODS_HELP),
    settings: list[str] | None = typer.Option(None, "--setting", "-s", help=SETTING_HELP),
    tables: Path | None = typer.Option(None, "--tables", "-t", help=TABLES_HELP),
):
    """Resolve every active loader and write the records as YAML."""
    out = Output(console=console, json_mode=get_json_mode())
    context = _context_or_exit(out, mods, settings, tables)

    try:
        records = build_all(build_registry(context))
    except TemplateError as exc:
        out.error(f"Template resolution failed: {exc}")
        raise typer.Exit(out.finish())

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        records_to_yaml(records, output)
        out.success(f"Wrote {len(records)} loaders to {output}", output=str(output))
    elif out.json_mode:
        out.set_data(
            "loaders",
            [record.model_dump(mode="json", exclude_none=True) for record in records],
        )
    else:
        data = {
            record.name: record.model_dump(mode="json", exclude_none=True)
            for record in records
        }
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))

    out.set_data("count", len(records))
    raise typer.Exit(out.finish())
