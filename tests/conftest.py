"""Shared fixtures: isolated config and prototype tables for add-on belts."""

import pytest

from miniloader import config as config_module
from miniloader.cli.commands import config_cmd
from miniloader.templates import (
    PrototypeTables,
    StartupSettings,
    TemplateContext,
    compute_mode_flags,
)


def _animation(name: str) -> dict:
    return {"animation_set": {"filename": f"__mod__/graphics/{name}.png"}}


MOD_TABLES = {
    "transport-belt": {
        # Matt's logistics
        "ultra-fast-transport-belt": {"speed": 0.1875},
        "extreme-fast-transport-belt": {"speed": 0.375},
        "ultra-express-transport-belt": {"speed": 0.5625},
        "extreme-express-transport-belt": {"speed": 0.75},
        "ultimate-transport-belt": {"speed": 0.9375},
        # Krastorio 2
        "kr-advanced-transport-belt": {"speed": 0.125},
        "kr-superior-transport-belt": {"speed": 0.1875},
        # Bob's logistics
        "bob-basic-transport-belt": {"speed": 0.015625},
        "bob-turbo-transport-belt": {"speed": 0.125},
        "bob-ultimate-transport-belt": {"speed": 0.15625},
        # Advanced Furnace 2
        "transport-belt-pro": {"speed": 0.15625},
        "transport-belt-pro2": {"speed": 0.21875},
        # Space Exploration
        "se-space-transport-belt": {"speed": 0.09375},
        "se-deep-space-transport-belt-black": {"speed": 0.1875},
    },
    "underground-belt": {
        "underground-belt-pro": {"belt_animation_set": _animation("pro")},
        "underground-belt-pro2": {"belt_animation_set": _animation("pro2")},
        "se-deep-space-underground-belt-black": {
            "belt_animation_set": _animation("deep-space-black")
        },
    },
}


def make_context(mods=(), settings=None, tables=None) -> TemplateContext:
    """Context over vanilla tables plus every add-on belt used by the catalogue."""
    if tables is None:
        tables = PrototypeTables.vanilla().merged(PrototypeTables(MOD_TABLES))
    return TemplateContext(
        flags=compute_mode_flags(mods),
        settings=StartupSettings(settings or {}),
        tables=tables,
    )


@pytest.fixture
def mod_tables() -> PrototypeTables:
    return PrototypeTables.vanilla().merged(PrototypeTables(MOD_TABLES))


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config file at a temp dir and clear MINILOADER_* env vars."""
    config_dir = tmp_path / "config"
    config_file = config_dir / "config.json"
    monkeypatch.setattr(config_module, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_file)
    monkeypatch.setattr(config_cmd, "CONFIG_FILE", config_file)
    monkeypatch.setattr(config_module, "_dotenv_loaded", True)
    for name in (
        "MINILOADER_ACTIVE_MODS",
        "MINILOADER_TABLES_PATH",
        "MINILOADER_LOG_LEVEL",
        "MINILOADER_SETTINGS",
    ):
        monkeypatch.delenv(name, raising=False)
    config_module.reset_config()
    yield config_file
    config_module.reset_config()


@pytest.fixture
def context_for():
    """Factory fixture: ``context_for(mods, settings)`` -> TemplateContext."""
    return make_context
