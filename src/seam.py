"""Turn a cut path into an edge/sample partition and blend the seam.

For one area of one tile the steps are:

1. build the weighted :class:`~area_graph.AreaGraph` from the edge and
   sample tiles,
2. find the cheapest cut between the area's corners,
3. classify every pixel to the edge-tile or sample-tile side of the cut,
4. write the area's pixels into the output tile, replacing the pixels
   exactly on the cut with the mean of their neighbors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from adjacency_grid import AdjacencyGrid
from area_geometry import AreaGeometry, Axis, Pixel, area_index_map
from area_graph import AreaGraph, CutPath
from wang_errors import InvariantViolation


@dataclass
class EdgeSide:
    """Pixels that take their color from the edge tile for one area."""

    geometry: AreaGeometry
    mask: np.ndarray  # bool, indexed [y, x]
    boundaries: List[int]  # boundary on the primary axis, one per sweep line

    def __contains__(self, pixel: Pixel) -> bool:
        x, y = pixel
        return bool(self.mask[y, x])


class SeamClassifier:
    """Partition the tile along a cut path."""

    def __init__(self, geometry: AreaGeometry, resolution: int):
        self.geometry = geometry
        self.resolution = resolution

    def boundaries(self, path: CutPath) -> List[int]:
        """Boundary coordinate of every sweep line, in sweep order."""
        lines: List[List[int]] = [[] for _ in range(self.resolution)]
        for pixel in path:
            sweep, primary = self.geometry.split(*pixel)
            lines[sweep].append(primary)

        result = []
        for sweep, primaries in enumerate(lines):
            if not primaries:
                raise InvariantViolation(
                    f"{self.geometry.name} cut has no boundary on sweep line {sweep}"
                )
            result.append(self.geometry.boundary_pick(primaries))
        return result

    def classify(self, path: CutPath) -> EdgeSide:
        resolution = self.resolution
        boundaries = self.boundaries(path)
        mask = np.zeros((resolution, resolution), dtype=bool)
        primary = np.arange(resolution)
        for sweep, boundary in enumerate(boundaries):
            side = self.geometry.edge_side(primary, boundary)
            if self.geometry.sweep_axis is Axis.X:
                mask[:, sweep] = side
            else:
                mask[sweep, :] = side

        # Corners always come from the edge tile.
        for x, y in self.geometry.forced_edge_pixels(resolution):
            mask[y, x] = True
        return EdgeSide(self.geometry, mask, boundaries)


class SeamBlender:
    """Write one area of the output tile."""

    def __init__(self, grid: AdjacencyGrid, geometry: AreaGeometry):
        self.grid = grid
        self.geometry = geometry
        self.area_mask = area_index_map(grid.resolution) == geometry.area

    def merge(self, edge_side: EdgeSide, path: CutPath, edge_tile: np.ndarray,
              sample_tile: np.ndarray, output: np.ndarray) -> None:
        edge_rgb = edge_tile[..., :3]
        sample_rgb = sample_tile[..., :3]
        chosen = np.where(edge_side.mask[..., np.newaxis], edge_rgb, sample_rgb)
        output[self.area_mask] = chosen[self.area_mask]

        for x, y in path:
            if not self.area_mask[y, x]:
                continue
            node = self.grid.index(x, y)
            colors = [chosen[ny, nx] for nx, ny in
                      (self.grid.coordinates(n) for n in self.grid.blend_neighborhood(node))]
            total = np.sum(np.asarray(colors, dtype=np.int64), axis=0)
            output[y, x] = total // len(colors)


@dataclass
class AreaResult:
    """Intermediate products of one area cut, kept for inspection."""

    graph: AreaGraph
    path: CutPath
    edge_side: EdgeSide


class AreaCut:
    """Build, cut, classify and merge one area of a tile."""

    def __init__(self, grid: AdjacencyGrid, geometry: AreaGeometry):
        self.grid = grid
        self.geometry = geometry
        self.classifier = SeamClassifier(geometry, grid.resolution)
        self.blender = SeamBlender(grid, geometry)

    def build(self, edge_tile: np.ndarray, sample_tile: np.ndarray) -> AreaGraph:
        return AreaGraph(self.grid, self.geometry, edge_tile, sample_tile)

    def execute(self, edge_tile: np.ndarray, sample_tile: np.ndarray,
                output: Optional[np.ndarray] = None) -> AreaResult:
        graph = self.build(edge_tile, sample_tile)
        path = graph.cut()
        edge_side = self.classifier.classify(path)
        if output is not None:
            self.blender.merge(edge_side, path, edge_tile, sample_tile, output)
        return AreaResult(graph, path, edge_side)
