"""Two-phase realisation of loader drafts into records.

Phase 1 (eager): the registry resolves a draft. Builders read belt speeds
from the prototype tables here.

Phase 2 (deferred): ingredients, prerequisites and the energy source are
realised, then mode-level processors and finally the variant's own
processors run on the record.

Usage:
    registry = build_registry(context)
    records = build_all(registry)
"""

import logging

from ..core.models import LoaderRecord
from .deferred import realize
from .draft import LoaderDraft
from .naming import name_from_key
from .processors import apply_processors, mode_processors_for
from .registry import VariantRegistry

logger = logging.getLogger(__name__)


def realize_draft(
    key: str,
    draft: LoaderDraft,
    registry: VariantRegistry,
) -> LoaderRecord:
    """Evaluate a draft's deferred fields and run its processors.

    Upgrade predecessors that are not active under the current configuration
    are dropped, so the record never points at a loader that does not exist.
    """
    upgrade_from = None
    if draft.upgrade_from is not None:
        if draft.upgrade_from in registry and registry.is_active(draft.upgrade_from):
            upgrade_from = name_from_key(draft.upgrade_from)
        else:
            logger.debug(
                "Dropping upgrade_from %r for %r: predecessor is not active",
                draft.upgrade_from,
                key,
            )

    record = LoaderRecord(
        key=key,
        name=name_from_key(key),
        order=draft.order,
        subgroup=draft.subgroup,
        stack_size=draft.stack_size,
        tint=draft.tint,
        speed=draft.speed,
        speed_config=draft.speed_config,
        upgrade_from=upgrade_from,
        bulk=draft.bulk,
        nerf_mode=draft.nerf_mode,
        corpse_gfx=draft.corpse_gfx,
        belt_gfx=draft.belt_gfx,
        entity_gfx=draft.entity_gfx,
        explosion_gfx=draft.explosion_gfx,
        research_trigger=draft.research_trigger,
        # deferred fields
        ingredients=realize(draft.ingredients),
        prerequisites=realize(draft.prerequisites),
        energy_source=realize(draft.energy_source) if draft.energy_source else None,
        extras=dict(draft.extras),
    )

    apply_processors(record, mode_processors_for(registry.context.flags.active_modes()))
    apply_processors(record, draft.processors)

    logger.debug("Realised %s (order=%s)", record.name, record.order)
    return record


def build_record(
    registry: VariantRegistry, key: str, scope: str | None = None
) -> LoaderRecord | None:
    """Resolve and realise one variant; None if it is inactive."""
    draft = registry.resolve(key, scope)
    if draft is None:
        return None
    return realize_draft(key, draft, registry)


def build_all(registry: VariantRegistry) -> list[LoaderRecord]:
    """Realise every active variant in declaration order.

    All drafts are resolved before any deferred field is evaluated.
    """
    drafts = [(key, registry.resolve(key)) for key in registry.all_active_keys()]
    records = [realize_draft(key, draft, registry) for key, draft in drafts if draft]
    logger.info("Built %d loader records", len(records))
    return records
