import pytest

from shortest_path import FORBIDDEN, ZERO, PathCost, dijkstra
from wang_errors import InvariantViolation


def test_forbidden_saturates_addition():
    assert (FORBIDDEN + PathCost.finite(3)).forbidden
    assert (PathCost.finite(3) + FORBIDDEN).forbidden
    assert PathCost.finite(1.5) + PathCost.finite(2) == PathCost.finite(3.5)
    assert ZERO + ZERO == ZERO


def test_finite_costs_sort_below_forbidden():
    assert PathCost.finite(1e12) < FORBIDDEN
    assert ZERO < PathCost.finite(0.1)
    assert str(FORBIDDEN) == "forbidden"


def test_negative_cost_is_rejected():
    with pytest.raises(ValueError):
        PathCost.finite(-1)


def _undirected(*edges):
    adjacency = {}
    for a, b, value in edges:
        weight = FORBIDDEN if value is None else PathCost.finite(value)
        adjacency.setdefault(a, []).append((b, weight))
        adjacency.setdefault(b, []).append((a, weight))
    return adjacency


def test_cheapest_route_is_found():
    adjacency = _undirected(
        ("a", "b", 1), ("b", "c", 1), ("a", "c", 5), ("c", "d", 1),
    )

    route, cost = dijkstra(adjacency, "a", "d")

    assert route == ["a", "b", "c", "d"]
    assert cost == PathCost.finite(3)


def test_forbidden_edges_are_never_used():
    adjacency = _undirected(("a", "b", None), ("a", "c", 10), ("c", "b", 10))

    route, cost = dijkstra(adjacency, "a", "b")

    assert route == ["a", "c", "b"]
    assert cost == PathCost.finite(20)


def test_ties_break_by_discovery_order():
    adjacency = _undirected(("s", "x", 0), ("s", "y", 0), ("x", "t", 0), ("y", "t", 0))

    route, _ = dijkstra(adjacency, "s", "t")

    assert route == ["s", "x", "t"]


def test_source_equal_to_target():
    route, cost = dijkstra(_undirected(("a", "b", 1)), "a", "a")

    assert route == ["a"]
    assert cost == ZERO


@pytest.mark.parametrize(
    "edges,target",
    [
        ((("a", "b", None),), "b"),
        ((("a", "b", 1), ("c", "d", 1)), "d"),
        ((("a", "b", 1),), "missing"),
    ],
)
def test_unreachable_target_raises(edges, target):
    with pytest.raises(InvariantViolation):
        dijkstra(_undirected(*edges), "a", target)
