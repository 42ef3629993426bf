"""Loader drafts: the output of a variant builder before realisation."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..core.models import (
    EnergySource,
    Ingredient,
    LoaderRecord,
    ResearchTrigger,
    SpeedConfig,
    Tint,
)
from .deferred import Deferred

Processor = Callable[[LoaderRecord], None]


@dataclass
class LoaderDraft:
    """Eager attributes plus deferred fields for one loader variant.

    Eager attributes are evaluated when the builder runs. ``ingredients``,
    ``prerequisites`` and ``energy_source`` are deferred and only realised
    after the external prototype tables are complete. ``processors`` run
    on the realised record.
    """

    order: str
    tint: Tint
    speed: float
    speed_config: SpeedConfig
    ingredients: Deferred[list[Ingredient]]
    prerequisites: Deferred[list[str]]

    subgroup: str = "belt"
    stack_size: int = 50
    upgrade_from: str | None = None  # variant key, not entity name
    bulk: bool = False
    nerf_mode: bool = False
    corpse_gfx: str | None = None
    belt_gfx: str | None = None
    entity_gfx: str | None = None
    explosion_gfx: str | None = None
    research_trigger: ResearchTrigger | None = None
    energy_source: Deferred[EnergySource] | None = None
    processors: list[Processor] = field(default_factory=list)
    extras: dict[str, Any] = field(default_factory=dict)
