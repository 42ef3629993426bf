"""Tests for dependency graph helpers."""

import pytest

from miniloader.utils import CircularDependencyError, find_cycle, topological_sort


def test_topological_sort_puts_dependencies_first():
    order = topological_sort({"c": ["b"], "b": ["a"]})
    assert order.index("a") < order.index("b") < order.index("c")


def test_topological_sort_is_deterministic():
    deps = {"x": ["a"], "y": ["a"], "z": []}
    assert topological_sort(deps) == topological_sort(dict(deps))
    assert topological_sort(deps) == ["a", "x", "y", "z"]


def test_find_cycle_none_for_acyclic():
    assert find_cycle({"a": ["b"], "b": []}) is None


def test_find_cycle_reports_path():
    cycle = find_cycle({"a": ["b"], "b": ["c"], "c": ["a"]})
    assert cycle[0] == cycle[-1]
    assert set(cycle) == {"a", "b", "c"}


def test_self_loop():
    assert find_cycle({"a": ["a"]}) == ["a", "a"]


def test_topological_sort_raises_on_cycle():
    with pytest.raises(CircularDependencyError) as exc_info:
        topological_sort({"a": ["b"], "b": ["a"]})
    assert "Circular dependency" in str(exc_info.value)
    assert exc_info.value.cycle[0] == exc_info.value.cycle[-1]
