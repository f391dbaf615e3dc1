"""Dijkstra shortest path over a sparse weighted graph.

Edge weights are :class:`PathCost` values rather than floats so that a
forbidden edge stays forbidden however many finite weights are added to
it, and a route that crosses one never compares below a finite route.
"""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass
from typing import Dict, Hashable, List, Mapping, Sequence, Tuple

from wang_errors import InvariantViolation


@dataclass(frozen=True, order=True)
class PathCost:
    """Non-negative cost with an explicit forbidden variant.

    Ordering compares ``forbidden`` first, so every finite cost sorts
    below every forbidden one.
    """

    forbidden: bool = False
    value: float = 0.0

    @classmethod
    def finite(cls, value: float) -> "PathCost":
        if value < 0:
            raise ValueError(f"Path costs must be non-negative, got {value}")
        return cls(False, float(value))

    def __add__(self, other: "PathCost") -> "PathCost":
        if self.forbidden or other.forbidden:
            return FORBIDDEN
        return PathCost(False, self.value + other.value)

    def __str__(self) -> str:
        return "forbidden" if self.forbidden else f"{self.value:.3f}"


ZERO = PathCost(False, 0.0)
FORBIDDEN = PathCost(True, 0.0)

Adjacency = Mapping[Hashable, Sequence[Tuple[Hashable, PathCost]]]


def dijkstra(adjacency: Adjacency, source: Hashable, target: Hashable) -> Tuple[List[Hashable], PathCost]:
    """Return the cheapest finite route from ``source`` to ``target`` and its cost.

    Ties are broken by discovery order. Forbidden edges are never relaxed;
    if the target cannot be reached through finite edges an
    InvariantViolation is raised instead of returning a partial route.
    """
    if source not in adjacency or target not in adjacency:
        raise InvariantViolation(f"Route endpoints {source} -> {target} are not in the graph")

    best: Dict[Hashable, PathCost] = {source: ZERO}
    previous: Dict[Hashable, Hashable] = {}
    settled = set()
    counter = itertools.count()
    open_heap: List[Tuple[PathCost, int, Hashable]] = [(ZERO, next(counter), source)]

    while open_heap:
        cost, _, node = heapq.heappop(open_heap)
        if node in settled:
            continue
        settled.add(node)
        if node == target:
            return _reconstruct(previous, source, target), cost

        for neighbor, weight in adjacency[node]:
            if weight.forbidden or neighbor in settled:
                continue
            candidate = cost + weight
            if neighbor not in best or candidate < best[neighbor]:
                best[neighbor] = candidate
                previous[neighbor] = node
                heapq.heappush(open_heap, (candidate, next(counter), neighbor))

    raise InvariantViolation(f"No finite route between {source} and {target}")


def _reconstruct(previous: Mapping[Hashable, Hashable], source: Hashable, target: Hashable) -> List[Hashable]:
    route = [target]
    while route[-1] != source:
        route.append(previous[route[-1]])
    route.reverse()
    return route
