"""Game mode flags derived from the set of active add-ons.

Every known add-on maps to one canonical mode identifier. The flags are
computed once per build and never change afterwards.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

logger = logging.getLogger(__name__)


# add-on name -> canonical mode identifier
SUPPORTED_MODS: dict[str, str] = {
    "base": "base",
    "space-age": "space_age",
    "TurboBelt": "turbo_belt",  # Turbo Belt by Stargateur
    "matts-logistics": "matt",
    "Krastorio2": "krastorio",
    "boblogistics": "bob",
    "Load-Furn-2-SpaceAgeFix": "adv_furnace_2",
    "space-exploration": "space_exploration",
}

# The host always loads the base game.
IMPLICIT_ADDONS: frozenset[str] = frozenset({"base"})

BASE_MODE = "base"
SPACE_AGE_MODE = "space_age"


class ModeFlags(Mapping[str, bool]):
    """Immutable mapping of mode identifier -> enabled.

    Iteration follows the order of the known-mode table the flags were
    computed from.
    """

    def __init__(self, flags: Mapping[str, bool]):
        if BASE_MODE not in flags:
            raise ValueError("mode flags must contain a 'base' entry")
        self._flags = MappingProxyType(dict(flags))

    def __getitem__(self, mode: str) -> bool:
        return self._flags[mode]

    def __iter__(self) -> Iterator[str]:
        return iter(self._flags)

    def __len__(self) -> int:
        return len(self._flags)

    def __repr__(self) -> str:
        return f"ModeFlags({dict(self._flags)!r})"

    def __hash__(self) -> int:
        return hash(tuple(self._flags.items()))

    def enabled(self, mode: str) -> bool:
        """True if ``mode`` is known and active."""
        return self._flags.get(mode, False)

    def active_modes(self) -> list[str]:
        return [mode for mode, value in self._flags.items() if value]

    @property
    def space_age(self) -> bool:
        return self.enabled(SPACE_AGE_MODE)

    @property
    def max_loader(self) -> str:
        """Highest loader tier available in the base / Space Age game."""
        return "turbo" if self.space_age else "express"


def compute_mode_flags(
    active_addons: Iterable[str],
    known_mode_table: Mapping[str, str] = SUPPORTED_MODS,
    implicit_addons: Iterable[str] = IMPLICIT_ADDONS,
) -> ModeFlags:
    """Compute one flag per known mode from the active add-on names.

    Unknown add-ons are ignored.

    Examples:
        >>> compute_mode_flags({"space-age"})["space_age"]
        True
        >>> compute_mode_flags(set())["matt"]
        False
    """
    active = set(active_addons) | set(implicit_addons)

    unknown = active.difference(known_mode_table)
    if unknown:
        logger.debug("Ignoring unknown add-ons: %s", ", ".join(sorted(unknown)))

    flags = {mode: False for mode in known_mode_table.values()}
    for addon, mode in known_mode_table.items():
        if addon in active:
            flags[mode] = True
    return ModeFlags(flags)
