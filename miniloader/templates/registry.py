"""Variant registry: ordered, keyed loader variant specifications.

Each VariantSpec pairs a predicate with a builder. The registry is bound to a
single TemplateContext and never changes after construction. Declaration
order is meaningful: base tiers first, then the per-add-on families.

Upgrade predecessors are declared as data on the VariantSpec (a literal key or a
mode-keyed fragment map) so the upgrade graph can be inspected and validated
without running any builder.
"""

import logging
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass

from .context import TemplateContext
from .draft import LoaderDraft
from .naming import scope_from_key
from .predicates import Predicate
from .selector import select_fragment

logger = logging.getLogger(__name__)

# (context, scope, resolved predecessor key) -> draft
Builder = Callable[[TemplateContext, str, str | None], LoaderDraft]

PredecessorRef = str | Mapping[str, str] | None


@dataclass(frozen=True)
class VariantSpec:
    """One loader variant: when it exists and how to build it."""

    key: str
    predicate: Predicate
    builder: Builder
    previous: PredecessorRef = None


class VariantRegistry:
    """Ordered mapping of variant key -> VariantSpec, bound to one context."""

    def __init__(self, specs: Sequence[VariantSpec], context: TemplateContext):
        self._specs: dict[str, VariantSpec] = {}
        for spec in specs:
            if spec.key in self._specs:
                raise ValueError(f"Duplicate variant key: {spec.key!r}")
            self._specs[spec.key] = spec
        self.context = context

    # ── Mapping-ish protocol ──

    def __contains__(self, key: object) -> bool:
        return key in self._specs

    def __iter__(self) -> Iterator[str]:
        return iter(self._specs)

    def __len__(self) -> int:
        return len(self._specs)

    def keys(self) -> list[str]:
        return list(self._specs)

    def spec(self, key: str) -> VariantSpec:
        try:
            return self._specs[key]
        except KeyError:
            raise KeyError(f"Unknown loader variant: {key!r}") from None

    # ── Resolution ──

    def is_active(self, key: str) -> bool:
        return self.spec(key).predicate(self.context)

    def all_active_keys(self) -> list[str]:
        """Keys whose predicate holds, in declaration order."""
        return [key for key, spec in self._specs.items() if spec.predicate(self.context)]

    def predecessor(self, key: str) -> str | None:
        """Resolved upgrade predecessor key of ``key`` under the current flags."""
        previous = self.spec(key).previous
        if previous is None or isinstance(previous, str):
            return previous
        return select_fragment(previous, self.context.flags)

    def resolve(self, key: str, scope: str | None = None) -> LoaderDraft | None:
        """Build the draft for ``key``, or None if the variant is inactive.

        The predicate is checked before the builder runs, so inactive
        variants never touch the prototype tables.
        """
        spec = self.spec(key)
        if not spec.predicate(self.context):
            logger.debug("Variant %r inactive, skipping", key)
            return None

        if scope is None:
            scope = scope_from_key(key)
        previous = self.predecessor(key)
        draft = spec.builder(self.context, scope, previous)
        draft.upgrade_from = previous
        return draft

    # ── Upgrade graph ──

    def upgrade_edges(self) -> dict[str, str]:
        """Variant key -> predecessor key, for every variant that declares one."""
        edges: dict[str, str] = {}
        for key in self._specs:
            previous = self.predecessor(key)
            if previous is not None:
                edges[key] = previous
        return edges

    def upgrade_chain(self, key: str) -> list[str]:
        """Keys from the lowest tier up to and including ``key``.

        Stops at the first key that is not declared in the registry.

        Raises:
            ValueError: If the chain loops back on itself.
        """
        chain = [key]
        seen = {key}
        current = self.predecessor(key)
        while current is not None:
            if current in seen:
                raise ValueError(f"Upgrade chain of {key!r} loops at {current!r}")
            chain.append(current)
            seen.add(current)
            if current not in self._specs:
                break
            current = self.predecessor(current)
        chain.reverse()
        return chain
