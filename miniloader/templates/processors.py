"""Prototype post-processors.

Mode-level processors run on every record built while their mode is active,
before the variant's own processors. Processors mutate the record in place
and must be idempotent.
"""

import copy
from collections.abc import Callable

from ..core.models import LoaderRecord
from .draft import Processor
from .tables import PrototypeTables


def deny_in_space(record: LoaderRecord) -> None:
    record.extras["se_allow_in_space"] = False


def allow_in_space(record: LoaderRecord) -> None:
    record.extras["se_allow_in_space"] = True


# mode identifier -> processor, applied before per-variant processors
MODE_PROCESSORS: dict[str, Processor] = {
    "space_exploration": deny_in_space,
}


def copy_belt_animation(tables: PrototypeTables, underground_belt: str) -> Processor:
    """Processor that reuses an underground belt's animation set for the loader belt.

    The lookup happens when the processor runs, so a missing underground belt
    raises MissingExternalRecordError at realisation time.
    """

    def _select(record: LoaderRecord) -> None:
        animation_set = tables.field("underground-belt", underground_belt, "belt_animation_set")
        record.belt_animation_set = copy.deepcopy(animation_set)

    _select.__name__ = f"copy_belt_animation[{underground_belt}]"
    return _select


def mode_processors_for(active_modes: list[str]) -> list[Processor]:
    return [MODE_PROCESSORS[mode] for mode in active_modes if mode in MODE_PROCESSORS]


def apply_processors(record: LoaderRecord, processors: list[Callable[[LoaderRecord], None]]) -> None:
    for processor in processors:
        processor(record)
