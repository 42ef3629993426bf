"""Loader template engine.

Pipeline:
    compute_mode_flags() - Active add-ons -> ModeFlags
    TemplateContext      - Flags + startup settings + prototype tables
    build_registry()     - Loader catalogue bound to a context
    VariantRegistry      - resolve() drafts for active variants
    build_all()          - Realise deferred fields and run processors
    validate_registry()  - Upgrade graph checks and a dry-run build

Usage:
    >>> from miniloader.templates import (
    ...     PrototypeTables, StartupSettings, TemplateContext,
    ...     build_all, build_registry, compute_mode_flags,
    ... )
    >>> context = TemplateContext(
    ...     flags=compute_mode_flags(set()),
    ...     settings=StartupSettings(),
    ...     tables=PrototypeTables.vanilla(),
    ... )
    >>> [r.name for r in build_all(build_registry(context))]
    ['miniloader', 'fast-miniloader', 'express-miniloader']
"""

from .builder import build_all, build_record, realize_draft
from .context import StartupSettings, TemplateContext
from .deferred import Computed, Deferred, Pending, realize
from .draft import LoaderDraft, Processor
from .errors import (
    AmbiguousFragmentError,
    MissingBaseFragmentError,
    MissingExternalRecordError,
    TemplateError,
)
from .loaders import LOADER_SPECS, build_registry
from .modes import SUPPORTED_MODS, ModeFlags, compute_mode_flags
from .naming import BASE_NAME, key_from_name, name_from_key, scope_from_key
from .processors import MODE_PROCESSORS
from .registry import VariantRegistry, VariantSpec
from .selector import FragmentDecision, choose_fragment, select_fragment
from .tables import PrototypeTables
from .validator import validate_registry

__all__ = [
    # Modes
    "SUPPORTED_MODS",
    "ModeFlags",
    "compute_mode_flags",
    # Context
    "StartupSettings",
    "TemplateContext",
    "PrototypeTables",
    # Selection
    "FragmentDecision",
    "choose_fragment",
    "select_fragment",
    # Naming
    "BASE_NAME",
    "name_from_key",
    "scope_from_key",
    "key_from_name",
    # Deferred fields
    "Computed",
    "Pending",
    "Deferred",
    "realize",
    # Registry
    "LOADER_SPECS",
    "LoaderDraft",
    "Processor",
    "MODE_PROCESSORS",
    "VariantRegistry",
    "VariantSpec",
    "build_registry",
    # Building
    "build_all",
    "build_record",
    "realize_draft",
    "validate_registry",
    # Errors
    "TemplateError",
    "AmbiguousFragmentError",
    "MissingBaseFragmentError",
    "MissingExternalRecordError",
]
