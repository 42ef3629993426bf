"""Mode-gated fragment selection.

A fragment map holds one candidate value per mode identifier, e.g.::

    {
        "base": [...],             # fallback
        "bob": [...],              # Bob's logistics active
        "matt_space_age": [...],   # Matt's logistics together with Space Age
    }

Selection policy:
1. Only modes whose flag is active are candidates; ``base`` is never a candidate.
2. With Space Age active, ``<mode>_space_age`` beats the plain ``<mode>`` key
   and the plain ``space_age`` key.
3. At most one mode may match; several matching modes is an authoring error.
4. No match falls back to ``base``; a missing ``base`` is fatal.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

from .errors import AmbiguousFragmentError, MissingBaseFragmentError
from .modes import BASE_MODE, SPACE_AGE_MODE, ModeFlags

T = TypeVar("T")

SPACE_AGE_COMBO_SUFFIX = "_space_age"

SelectionReason = Literal["combo", "mode", "base"]


@dataclass(frozen=True)
class FragmentDecision(Generic[T]):
    """Which key of a fragment map won, and why."""

    key: str
    reason: SelectionReason
    value: T


def _match_for_mode(
    fragments: Mapping[str, T], mode: str, combo_active: bool, combo_suffix: str
) -> tuple[str, SelectionReason] | None:
    if combo_active:
        combo_key = mode + combo_suffix
        if combo_key in fragments:
            return combo_key, "combo"
    if mode in fragments:
        return mode, "mode"
    return None


def choose_fragment(
    fragments: Mapping[str, T],
    flags: ModeFlags,
    combo_suffix: str = SPACE_AGE_COMBO_SUFFIX,
) -> FragmentDecision[T]:
    """Pick the applicable fragment and report the winning key.

    Raises:
        AmbiguousFragmentError: If more than one active mode has a fragment.
        MissingBaseFragmentError: If nothing matched and there is no ``base``.
    """
    combo_active = flags.space_age
    matches: list[tuple[str, SelectionReason]] = []

    for mode in flags:
        if mode == BASE_MODE or not flags[mode]:
            continue
        match = _match_for_mode(fragments, mode, combo_active, combo_suffix)
        if match is not None:
            matches.append(match)

    # a combo match for another mode outranks the plain Space Age key
    if any(reason == "combo" for _, reason in matches):
        matches = [
            (key, reason)
            for key, reason in matches
            if not (key == SPACE_AGE_MODE and reason == "mode")
        ]

    if len(matches) > 1:
        raise AmbiguousFragmentError([key for key, _ in matches])
    if matches:
        key, reason = matches[0]
        return FragmentDecision(key=key, reason=reason, value=fragments[key])

    if BASE_MODE not in fragments:
        raise MissingBaseFragmentError(list(fragments))
    return FragmentDecision(key=BASE_MODE, reason="base", value=fragments[BASE_MODE])


def select_fragment(
    fragments: Mapping[str, T],
    flags: ModeFlags,
    combo_suffix: str = SPACE_AGE_COMBO_SUFFIX,
) -> T:
    """Return the single fragment that applies under ``flags``.

    Works for any fragment type: ingredient lists, prerequisite lists,
    predecessor keys.
    """
    return choose_fragment(fragments, flags, combo_suffix).value
