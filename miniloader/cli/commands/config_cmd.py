"""Config command for viewing and managing miniloader configuration."""

import typer

from ..app import app, console
from ...config import (
    CONFIG_FILE,
    get_config,
    parse_setting_value,
    reset_config,
)


VALID_KEYS = {
    "mods.active",
    "defaults.tables_path",
    "defaults.log_level",
}


@app.command("config")
def config_command(
    action: str = typer.Argument(
        ...,
        help="Action: show, set, reset",
    ),
    key: str | None = typer.Argument(
        None,
        help="Config key (e.g. mods.active, settings.logist)",
    ),
    value: str | None = typer.Argument(
        None,
        help="Value to set",
    ),
):
    """View or modify miniloader configuration.

    Examples:
        miniloader config show
        miniloader config set mods.active space-age,matts-logistics
        miniloader config set settings.miniloader-enable-chute true
        miniloader config reset
    """
    if action == "show":
        _show_config()
    elif action == "set":
        if not key or value is None:
            console.print("[red]Usage:[/red] miniloader config set <key> <value>")
            console.print()
            console.print("Available keys:")
            for k in sorted(VALID_KEYS):
                console.print(f"  {k}")
            console.print("  settings.<name>")
            raise typer.Exit(1)
        _set_config(key, value)
    elif action == "reset":
        _reset_config()
    else:
        console.print(f"[red]Unknown action:[/red] {action}")
        console.print("Valid actions: show, set, reset")
        raise typer.Exit(1)


def _show_config():
    """Display current resolved configuration."""
    config = get_config()

    console.print()
    console.print("[bold]Miniloader Configuration[/bold]")
    console.print("─" * 40)

    console.print()
    console.print("[bold cyan]Mods[/bold cyan] (active add-ons)")
    if config.mods.active:
        for name in config.mods.active:
            console.print(f"  {name}")
    else:
        console.print("  [dim](base game only)[/dim]")

    console.print()
    console.print("[bold cyan]Settings[/bold cyan] (startup settings)")
    if config.settings:
        for name, setting in sorted(config.settings.items()):
            console.print(f"  {name} = {setting!r}")
    else:
        console.print("  [dim](none)[/dim]")

    console.print()
    console.print("[bold cyan]Defaults[/bold cyan]")
    tables = config.defaults.tables_path or "[dim](bundled vanilla tables)[/dim]"
    console.print(f"  tables_path = {tables}")
    console.print(f"  log_level   = {config.defaults.log_level}")

    console.print()
    if CONFIG_FILE.exists():
        console.print(f"Config file: {CONFIG_FILE}")
    else:
        console.print(f"Config file: [dim]not created yet[/dim] ({CONFIG_FILE})")
    console.print()


def _set_config(key: str, value: str):
    """Set a config value and save."""
    is_setting_key = key.startswith("settings.")
    if key not in VALID_KEYS and not is_setting_key:
        console.print(f"[red]Unknown key:[/red] {key}")
        console.print()
        console.print("Available keys:")
        for k in sorted(VALID_KEYS):
            console.print(f"  {k}")
        console.print("  settings.<name>")
        raise typer.Exit(1)

    # Load current config (or defaults if no file)
    config = get_config()

    if is_setting_key:
        name = key.split(".", 1)[1]
        if not name:
            console.print(f"[red]Invalid setting key:[/red] {key}")
            raise typer.Exit(1)
        config.settings[name] = parse_setting_value(value)
    elif key == "mods.active":
        config.mods.active = [item.strip() for item in value.split(",") if item.strip()]
    else:
        field_name = key.split(".", 1)[1]
        if field_name == "log_level":
            value = value.upper()
            if value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
                console.print(f"[red]Invalid log level:[/red] {value}")
                raise typer.Exit(1)
        setattr(config.defaults, field_name, value)

    config.save()
    reset_config()  # Clear cached singleton so next get_config() reloads

    console.print(f"[green]✓[/green] Set {key} = {value}")
    console.print(f"  Saved to {CONFIG_FILE}")


def _reset_config():
    """Reset config to defaults."""
    if CONFIG_FILE.exists():
        CONFIG_FILE.unlink()
        reset_config()
        console.print("[green]✓[/green] Config reset to defaults")
        console.print(f"  Removed {CONFIG_FILE}")
    else:
        console.print("Config already at defaults (no config file exists)")
