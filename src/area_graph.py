"""Weighted pixel graph of one area and the minimum-cost cut through it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Tuple

import numpy as np

from adjacency_grid import AdjacencyGrid
from area_geometry import AreaGeometry, Pixel
from shortest_path import FORBIDDEN, ZERO, PathCost, dijkstra
from wang_errors import InvariantViolation

logger = logging.getLogger(__name__)


def color_difference(edge_tile: np.ndarray, sample_tile: np.ndarray) -> np.ndarray:
    """Per-pixel ``| |edge| - |sample| |`` where ``|c|`` is the RGB vector norm."""
    edge_norm = np.linalg.norm(edge_tile[..., :3].astype(np.float64), axis=-1)
    sample_norm = np.linalg.norm(sample_tile[..., :3].astype(np.float64), axis=-1)
    return np.abs(edge_norm - sample_norm)


def on_diagonal(x: int, y: int, resolution: int) -> bool:
    return x == y or x + y == resolution - 1


def along_border(a: Pixel, b: Pixel, resolution: int) -> bool:
    """True when the step a -> b runs along the outer tile border."""
    border = (0, resolution - 1)
    if a[0] == b[0] and a[0] in border:
        return True
    return a[1] == b[1] and a[1] in border


@dataclass
class CutPath:
    """Pixels of the cheapest cut, sorted along the area's sweep axis."""

    geometry: AreaGeometry
    route: List[Pixel]
    cost: PathCost
    pixels: List[Pixel] = field(init=False)
    members: FrozenSet[Pixel] = field(init=False)

    def __post_init__(self):
        self.members = frozenset(self.route)
        self.pixels = sorted(self.members, key=self.geometry.sort_key)

    def __contains__(self, pixel: Pixel) -> bool:
        return pixel in self.members

    def __iter__(self):
        return iter(self.pixels)

    def __len__(self) -> int:
        return len(self.pixels)

    @property
    def endpoints(self) -> Tuple[Pixel, Pixel]:
        return self.route[0], self.route[-1]


class AreaGraph:
    """Graph over the nodes of one area, weighted by two candidate tiles.

    Rebuilt for every (area, tile) pair since the weights depend on the
    pixel content of the edge and sample tiles.
    """

    def __init__(self, grid: AdjacencyGrid, geometry: AreaGeometry,
                 edge_tile: np.ndarray, sample_tile: np.ndarray):
        resolution = grid.resolution
        expected = (resolution, resolution)
        if edge_tile.shape[:2] != expected or sample_tile.shape[:2] != expected:
            raise InvariantViolation(
                f"{geometry.name} area expects {resolution}x{resolution} tiles, got "
                f"{edge_tile.shape[:2]} and {sample_tile.shape[:2]}"
            )
        self.grid = grid
        self.geometry = geometry
        self.resolution = resolution
        self.adjacency: Dict[int, List[Tuple[int, PathCost]]] = {}
        self.edge_count = 0
        self._zero_cost = frozenset(geometry.zero_cost_pixels(resolution))
        self._difference = color_difference(edge_tile, sample_tile)
        self._build()

    def _build(self) -> None:
        grid = self.grid
        for t, d in self.geometry.walk(self.resolution):
            x, y = self.geometry.to_xy(t, d, self.resolution)
            node = grid.index(x, y)
            self.adjacency.setdefault(node, [])
            for direction in self.geometry.growth(t, d, self.resolution):
                neighbor = grid.neighbor(node, direction)
                if neighbor is None:
                    continue
                weight = self.weight((x, y), grid.coordinates(neighbor))
                self.adjacency[node].append((neighbor, weight))
                self.adjacency.setdefault(neighbor, []).append((node, weight))
                self.edge_count += 1

    def weight(self, a: Pixel, b: Pixel) -> PathCost:
        """Cost of cutting between the node ``a`` and its neighbor ``b``."""
        if a in self._zero_cost:
            return ZERO
        if along_border(a, b, self.resolution):
            return FORBIDDEN
        if on_diagonal(b[0], b[1], self.resolution):
            return FORBIDDEN
        difference = self._difference
        return PathCost.finite(difference[a[1], a[0]] + difference[b[1], b[0]])

    def __len__(self) -> int:
        return len(self.adjacency)

    def cut(self) -> CutPath:
        """Cheapest route between the area's two corners."""
        corner_a, corner_b = self.geometry.corners(self.resolution)
        source = self.grid.index(*corner_a)
        target = self.grid.index(*corner_b)
        route, cost = dijkstra(self.adjacency, source, target)
        path = CutPath(self.geometry, [self.grid.coordinates(node) for node in route], cost)
        logger.debug(
            "%s cut: %d pixels, cost %s (%d nodes, %d edges)",
            self.geometry.name, len(path), cost, len(self), self.edge_count,
        )
        return path
