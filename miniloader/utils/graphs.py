"""Graph helpers for dependency ordering.

Dependencies are given as ``{node: [nodes it depends on]}``. Nodes that only
appear as dependencies are treated as leaves.
"""

from collections.abc import Iterable, Mapping


class CircularDependencyError(Exception):
    """Raised when a dependency graph contains a cycle."""

    def __init__(self, cycle: list[str]):
        self.cycle = cycle
        super().__init__(f"Circular dependency: {' -> '.join(cycle)}")


def _all_nodes(dependencies: Mapping[str, Iterable[str]]) -> list[str]:
    nodes: list[str] = []
    seen: set[str] = set()
    for node, deps in dependencies.items():
        for name in (node, *deps):
            if name not in seen:
                seen.add(name)
                nodes.append(name)
    return nodes


def find_cycle(dependencies: Mapping[str, Iterable[str]]) -> list[str] | None:
    """Return one cycle as a node path (first node repeated at the end), or None."""
    WHITE, GRAY, BLACK = 0, 1, 2
    color = {node: WHITE for node in _all_nodes(dependencies)}
    stack: list[str] = []

    def visit(node: str) -> list[str] | None:
        color[node] = GRAY
        stack.append(node)
        for dep in dependencies.get(node, ()):
            if color[dep] == GRAY:
                return stack[stack.index(dep) :] + [dep]
            if color[dep] == WHITE:
                cycle = visit(dep)
                if cycle:
                    return cycle
        stack.pop()
        color[node] = BLACK
        return None

    for node in list(color):
        if color[node] == WHITE:
            cycle = visit(node)
            if cycle:
                return cycle
    return None


def topological_sort(dependencies: Mapping[str, Iterable[str]]) -> list[str]:
    """Order nodes so every node comes after its dependencies.

    Ties keep first-seen order, so the result is deterministic.

    Raises:
        CircularDependencyError: If the graph has a cycle.
    """
    cycle = find_cycle(dependencies)
    if cycle:
        raise CircularDependencyError(cycle)

    ordered: list[str] = []
    placed: set[str] = set()

    def place(node: str) -> None:
        if node in placed:
            return
        for dep in dependencies.get(node, ()):
            place(dep)
        placed.add(node)
        ordered.append(node)

    for node in _all_nodes(dependencies):
        place(node)
    return ordered
