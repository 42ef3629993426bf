"""Pure utility functions for Miniloader.

This module contains pure functions with ZERO dependencies on miniloader models
or other miniloader modules. They can be imported from anywhere without
circular import risk.

Modules:
- graphs: Topological sort and cycle detection
"""

from .graphs import topological_sort, find_cycle, CircularDependencyError

__all__ = [
    # Graphs
    "topological_sort",
    "find_cycle",
    "CircularDependencyError",
]
