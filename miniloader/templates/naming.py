"""Canonical entity names derived from variant keys."""

BASE_NAME = "miniloader"
SEPARATOR = "-"


def name_from_key(key: str) -> str:
    """Entity name for a variant key.

    Examples:
        >>> name_from_key("")
        'miniloader'
        >>> name_from_key("fast")
        'fast-miniloader'
    """
    if not key:
        return BASE_NAME
    return f"{key}{SEPARATOR}{BASE_NAME}"


def scope_from_key(key: str) -> str:
    """Dash prefix used to name the belt prototypes matching a tier.

    ``"fast"`` -> ``"fast-"`` so that ``scope + "transport-belt"`` is
    ``fast-transport-belt``; the baseline key gives ``""``.
    """
    if not key:
        return ""
    return f"{key}{SEPARATOR}"


def key_from_name(name: str) -> str | None:
    """Inverse of :func:`name_from_key`; None if ``name`` does not follow the convention."""
    if name == BASE_NAME:
        return ""
    suffix = f"{SEPARATOR}{BASE_NAME}"
    if name.endswith(suffix) and len(name) > len(suffix):
        return name[: -len(suffix)]
    return None
