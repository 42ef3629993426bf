"""Configuration management for Miniloader.

The configuration supplies the three external inputs of a template build:
- mods: which add-ons are active
- settings: startup setting values read by predicates and templates
- defaults: where to load prototype tables from, log level

Config resolution order (highest priority first):
1. Programmatic (MiniloaderConfig constructed in code)
2. Environment variables (MINILOADER_ACTIVE_MODS, MINILOADER_TABLES_PATH, ...)
3. Config file (~/.config/miniloader/config.json, managed by `miniloader config`)
4. Hardcoded defaults
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv

from .templates import (
    PrototypeTables,
    StartupSettings,
    TemplateContext,
    compute_mode_flags,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Config file location
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "miniloader"
CONFIG_FILE = CONFIG_DIR / "config.json"


# =============================================================================
# Setting value parsing
# =============================================================================


def parse_setting_value(raw: str) -> Any:
    """Parse a startup setting given on the command line or in the environment.

    Examples:
        "true" → True
        "false" → False
        "12" → 12
        "0.5" → 0.5
        "bob-express-inserter" → "bob-express-inserter"
    """
    text = raw.strip()
    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return text


def parse_setting_assignment(assignment: str) -> tuple[str, Any]:
    """Parse ``name=value`` into (name, parsed value).

    Raises:
        ValueError: If there is no '=' or the name is empty.
    """
    name, sep, value = assignment.partition("=")
    name = name.strip()
    if not sep or not name:
        raise ValueError(
            f"Invalid setting: {assignment!r}. Expected format: 'name=value'"
        )
    return name, parse_setting_value(value)


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


# =============================================================================
# Config dataclasses
# =============================================================================


@dataclass
class ModsConfig:
    """Active add-on names (as the host reports them, e.g. "space-age")."""

    active: list[str] = field(default_factory=list)


@dataclass
class DefaultsConfig:
    """Non-input settings."""

    tables_path: str = ""  # empty = bundled vanilla tables
    log_level: str = "WARNING"


@dataclass
class MiniloaderConfig:
    """Top-level miniloader configuration.

    Examples:
        # Package use: no files needed
        config = MiniloaderConfig(mods=ModsConfig(active=["space-age"]))
        context = config.template_context()

        # CLI use: loads from ~/.config/miniloader/config.json
        config = MiniloaderConfig.load()
    """

    mods: ModsConfig = field(default_factory=ModsConfig)
    settings: dict[str, Any] = field(default_factory=dict)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)

    @classmethod
    def load(cls) -> "MiniloaderConfig":
        """Load config from file + env vars.

        Priority: env var values > config.json values > defaults.
        """
        _ensure_dotenv()
        config = cls()

        # Layer 1: Load from config file if it exists
        if CONFIG_FILE.exists():
            try:
                with open(CONFIG_FILE) as f:
                    data = json.load(f)
                _apply_dict(config, data)
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Failed to load config from %s: %s", CONFIG_FILE, exc)

        # Layer 2: Env var overrides
        if (val := os.environ.get("MINILOADER_ACTIVE_MODS")) is not None:
            config.mods.active = _split_list(val)
        if val := os.environ.get("MINILOADER_TABLES_PATH"):
            config.defaults.tables_path = val
        if val := os.environ.get("MINILOADER_LOG_LEVEL"):
            config.defaults.log_level = val.upper()
        if val := os.environ.get("MINILOADER_SETTINGS"):
            for assignment in _split_list(val):
                try:
                    name, value = parse_setting_assignment(assignment)
                except ValueError as exc:
                    logger.warning("Invalid MINILOADER_SETTINGS entry ignored: %s", exc)
                    continue
                config.settings[name] = value

        return config

    def save(self) -> None:
        """Save config to ~/.config/miniloader/config.json."""
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for display."""
        return {
            "mods": asdict(self.mods),
            "settings": dict(self.settings),
            "defaults": asdict(self.defaults),
        }

    # ── Template inputs ──

    def load_tables(self) -> PrototypeTables:
        """Bundled vanilla tables, overlaid with the configured tables file if any."""
        tables = PrototypeTables.vanilla()
        if self.defaults.tables_path:
            tables = tables.merged(PrototypeTables.from_yaml(self.defaults.tables_path))
        return tables

    def template_context(self) -> TemplateContext:
        return TemplateContext(
            flags=compute_mode_flags(self.mods.active),
            settings=StartupSettings(self.settings),
            tables=self.load_tables(),
        )


# =============================================================================
# Config dict application
# =============================================================================


def _apply_dict(config: MiniloaderConfig, data: dict) -> None:
    """Apply a dict of values onto a MiniloaderConfig."""
    if "mods" in data and isinstance(data["mods"], dict):
        active = data["mods"].get("active")
        if isinstance(active, list):
            config.mods.active = [str(name) for name in active]
    if "settings" in data and isinstance(data["settings"], dict):
        config.settings.update(data["settings"])
    if "defaults" in data and isinstance(data["defaults"], dict):
        for k, v in data["defaults"].items():
            if hasattr(config.defaults, k):
                setattr(config.defaults, k, v)


# =============================================================================
# .env loading
# =============================================================================

_dotenv_loaded = False


def _ensure_dotenv() -> None:
    """Load .env file into os.environ if not already loaded."""
    global _dotenv_loaded
    if not _dotenv_loaded:
        _dotenv_loaded = True
        dotenv_path = find_dotenv(usecwd=True)
        if dotenv_path:
            load_dotenv(dotenv_path=dotenv_path, override=False)


# =============================================================================
# Global config singleton
# =============================================================================

_config: MiniloaderConfig | None = None


def get_config() -> MiniloaderConfig:
    """Get the global MiniloaderConfig instance.

    First call loads from file + env vars. Subsequent calls return cached instance.
    Use configure() to replace the global config programmatically.
    """
    global _config
    if _config is None:
        _config = MiniloaderConfig.load()
    return _config


def configure(config: MiniloaderConfig) -> None:
    """Set the global MiniloaderConfig programmatically."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global config (forces reload on next get_config())."""
    global _config
    _config = None
