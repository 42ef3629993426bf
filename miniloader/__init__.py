"""Miniloader: declarative loader templates resolved against active game modes.

Usage:
    from miniloader import build_registry, build_all, compute_mode_flags
    from miniloader.templates import PrototypeTables, StartupSettings, TemplateContext

    context = TemplateContext(
        flags=compute_mode_flags({"space-age"}),
        settings=StartupSettings(),
        tables=PrototypeTables.vanilla(),
    )
    records = build_all(build_registry(context))
"""

__version__ = "0.4.0"

from .templates import (
    AmbiguousFragmentError,
    MissingBaseFragmentError,
    MissingExternalRecordError,
    ModeFlags,
    PrototypeTables,
    StartupSettings,
    TemplateContext,
    TemplateError,
    VariantRegistry,
    build_all,
    build_record,
    build_registry,
    compute_mode_flags,
    name_from_key,
    select_fragment,
)

__all__ = [
    "__version__",
    "AmbiguousFragmentError",
    "MissingBaseFragmentError",
    "MissingExternalRecordError",
    "ModeFlags",
    "PrototypeTables",
    "StartupSettings",
    "TemplateContext",
    "TemplateError",
    "VariantRegistry",
    "build_all",
    "build_record",
    "build_registry",
    "compute_mode_flags",
    "name_from_key",
    "select_fragment",
]
