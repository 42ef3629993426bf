"""CLI commands for Miniloader."""

from . import (
    resolve,
    validate,
    config_cmd,
)

__all__ = [
    "resolve",
    "validate",
    "config_cmd",
]
