"""Core CLI app definition and global state."""

import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

app = typer.Typer(
    name="miniloader",
    help="Resolve miniloader templates against the active game modes.",
    no_args_is_help=True,
)

console = Console()

# Global state for JSON mode (set by callback)
_json_mode = False


def get_json_mode() -> bool:
    """Get current JSON mode state."""
    return _json_mode


def setup_logging(verbose: bool = False, debug: bool = False, default: str = "WARNING"):
    """Configure logging for the CLI."""
    level = getattr(logging, default.upper(), logging.WARNING)
    if verbose:
        level = logging.INFO
    if debug:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=False)],
        force=True,
    )
    logging.getLogger("miniloader").setLevel(level)


def _version_callback(value: bool) -> None:
    if value:
        from .. import __version__

        print(f"miniloader {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output machine-readable JSON instead of human-friendly text",
            is_eager=True,
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log progress information"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Log every resolved record"),
    ] = False,
):
    """Miniloader: declarative loader templates for every supported game mode.

    Use --json for machine-readable output suitable for scripting.
    """
    global _json_mode
    _json_mode = json_output

    from ..config import get_config

    setup_logging(verbose=verbose, debug=debug, default=get_config().defaults.log_level)


# Import commands to register them with the app
from .commands import (  # noqa: E402, F401
    resolve,
    validate,
    config_cmd,
)
