"""Loader record models and YAML I/O.

A LoaderRecord is the fully realised definition of one loader variant: every
eager attribute copied from its draft, every deferred field evaluated and all
post-processors applied. Presentation payloads (tint, graphics-set names,
order strings) are carried through unchanged.
"""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field


# =============================================================================
# Payload Models
# =============================================================================


class Ingredient(BaseModel):
    """One recipe ingredient."""

    type: Literal["item", "fluid"] = "item"
    name: str
    amount: float


class SpeedConfig(BaseModel):
    """Inserter timing used to reach the loader's target throughput."""

    items_per_second: float
    rotation_speed: float
    inserter_pairs: int = 1
    stack_size_bonus: int = 0


class ResearchTrigger(BaseModel):
    """Trigger that unlocks the research instead of science packs."""

    type: str = "craft-item"
    item: str
    count: int


class Tint(BaseModel):
    """RGBA color, components in 0..1."""

    r: float
    g: float
    b: float
    a: float = 1.0

    @classmethod
    def from_hex(cls, value: str) -> "Tint":
        """Parse ``rrggbb`` or ``rrggbbaa`` (a leading ``#`` is allowed)."""
        text = value.lstrip("#")
        if len(text) not in (6, 8):
            raise ValueError(f"Invalid hex color: {value!r}")
        channels = [int(text[i : i + 2], 16) / 255 for i in range(0, len(text), 2)]
        if len(channels) == 3:
            channels.append(1.0)
        r, g, b, a = channels
        return cls(r=r, g=g, b=b, a=a)

    @classmethod
    def from_bytes(cls, r: int, g: int, b: int, a: int = 255) -> "Tint":
        return cls(r=r / 255, g=g / 255, b=b / 255, a=a / 255)


class EnergySource(BaseModel):
    """Energy source with consumption and drain amounts."""

    source: dict[str, Any]
    consumption: float = 0
    drain: float = 0


# =============================================================================
# Record
# =============================================================================


class LoaderRecord(BaseModel):
    """A resolved loader definition, ready to register with the host."""

    key: str = Field(description="Variant key ('' for the baseline tier)")
    name: str = Field(description="Canonical entity name derived from the key")
    order: str
    subgroup: str = "belt"
    stack_size: int = 50
    tint: Tint
    speed: float = Field(description="Belt speed copied from the matching belt")
    speed_config: SpeedConfig

    ingredients: list[Ingredient]
    prerequisites: list[str]

    upgrade_from: str | None = None
    bulk: bool = False
    nerf_mode: bool = False
    corpse_gfx: str | None = None
    belt_gfx: str | None = None
    entity_gfx: str | None = None
    explosion_gfx: str | None = None
    research_trigger: ResearchTrigger | None = None
    energy_source: EnergySource | None = None
    belt_animation_set: dict[str, Any] | None = None

    # Rarely used per-family attributes (e.g. se_allow_in_space)
    extras: dict[str, Any] = Field(default_factory=dict)


def records_to_yaml(records: list[LoaderRecord], path: Path | str) -> None:
    """Save realised records to a YAML file keyed by entity name."""
    data = {
        record.name: record.model_dump(mode="json", exclude_none=True)
        for record in records
    }
    with open(path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def records_from_yaml(path: Path | str) -> list[LoaderRecord]:
    """Load records previously written by :func:`records_to_yaml`."""
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    return [LoaderRecord.model_validate(value) for value in data.values()]
