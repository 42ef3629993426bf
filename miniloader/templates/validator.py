"""Registry validation.

Static checks over the upgrade graph, followed by a dry-run build of every
active variant under the registry's context:

- dangling_predecessor (ERROR): predecessor key not declared in the registry
- upgrade_cycle (ERROR): the upgrade graph loops
- duplicate_order (WARNING): two active variants share an order key
- build_failure (ERROR): realising an active variant raised a template error
"""

import logging

from ..core.models import ValidationResult
from ..utils import CircularDependencyError, topological_sort
from .builder import realize_draft
from .errors import TemplateError
from .naming import name_from_key
from .registry import VariantRegistry

logger = logging.getLogger(__name__)


def _location(key: str) -> str:
    return name_from_key(key)


def check_upgrade_graph(registry: VariantRegistry, result: ValidationResult) -> None:
    try:
        edges = registry.upgrade_edges()
    except TemplateError as exc:
        result.add_error(
            category="upgrade_reference",
            location="registry",
            message=f"could not resolve upgrade predecessors: {exc}",
        )
        return

    for key, previous in edges.items():
        if previous not in registry:
            result.add_error(
                category="dangling_predecessor",
                location=_location(key),
                message=f"upgrades from unknown variant {previous!r}",
                suggestion="declare the predecessor or point at an existing tier",
                value=previous,
            )

    try:
        topological_sort({key: [previous] for key, previous in edges.items()})
    except CircularDependencyError as exc:
        result.add_error(
            category="upgrade_cycle",
            location=_location(exc.cycle[0]),
            message=str(exc),
        )


def check_active_variants(registry: VariantRegistry, result: ValidationResult) -> None:
    seen_orders: dict[str, str] = {}
    for key in registry.all_active_keys():
        try:
            draft = registry.resolve(key)
            if draft is None:
                continue
            realize_draft(key, draft, registry)
        except TemplateError as exc:
            result.add_error(
                category="build_failure",
                location=_location(key),
                message=str(exc),
            )
            continue

        if draft.order in seen_orders:
            result.add_warning(
                category="duplicate_order",
                location=_location(key),
                message=f"order {draft.order!r} already used by {_location(seen_orders[draft.order])}",
                value=draft.order,
            )
        else:
            seen_orders[draft.order] = key


def validate_registry(registry: VariantRegistry) -> ValidationResult:
    """Run every registry check and collect the issues."""
    result = ValidationResult()
    check_upgrade_graph(registry, result)
    check_active_variants(registry, result)
    logger.info(
        "Validated %d variants: %d error(s), %d warning(s)",
        len(registry),
        len(result.errors),
        len(result.warnings),
    )
    return result
