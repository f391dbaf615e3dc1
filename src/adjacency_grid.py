"""Index-addressed pixel grid shared by every area of every tile.

Nodes are the integers ``y * resolution + x``. The four direct neighbor
links of each node are computed once from coordinate arithmetic and kept
in a read-only table, so a single grid can be read concurrently by all
tile workers without locking.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator, List, Optional, Tuple

import numpy as np

NO_NEIGHBOR = -1


class Direction(Enum):
    """Direct neighbor directions in image coordinates (y grows downward)."""

    LEFT = (-1, 0)
    RIGHT = (1, 0)
    TOP = (0, -1)
    BOTTOM = (0, 1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_OPPOSITES = {
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.TOP: Direction.BOTTOM,
    Direction.BOTTOM: Direction.TOP,
}

# Column order of the neighbor table.
_DIRECTION_COLUMNS = {direction: column for column, direction in enumerate(Direction)}

# Diagonal neighbors reached by following two direct links.
_COMPOSED_LINKS = (
    (Direction.RIGHT, Direction.TOP),
    (Direction.RIGHT, Direction.BOTTOM),
    (Direction.LEFT, Direction.TOP),
    (Direction.LEFT, Direction.BOTTOM),
)


class AdjacencyGrid:
    """Immutable r x r grid of pixel nodes with 4-directional neighbor links."""

    def __init__(self, resolution: int):
        if resolution < 2:
            raise ValueError(f"Grid resolution must be at least 2, got {resolution}")
        self.resolution = resolution
        self._links = self._build_links(resolution)

    @staticmethod
    def _build_links(resolution: int) -> np.ndarray:
        ys, xs = np.divmod(np.arange(resolution * resolution), resolution)
        links = np.full((resolution * resolution, len(Direction)), NO_NEIGHBOR, dtype=np.int64)
        for direction, column in _DIRECTION_COLUMNS.items():
            nx = xs + direction.dx
            ny = ys + direction.dy
            inside = (nx >= 0) & (nx < resolution) & (ny >= 0) & (ny < resolution)
            links[inside, column] = ny[inside] * resolution + nx[inside]
        links.setflags(write=False)
        return links

    def __len__(self) -> int:
        return self.resolution * self.resolution

    def __iter__(self) -> Iterator[int]:
        return iter(range(len(self)))

    def index(self, x: int, y: int) -> int:
        if not (0 <= x < self.resolution and 0 <= y < self.resolution):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.resolution}x{self.resolution} grid")
        return y * self.resolution + x

    def coordinates(self, node: int) -> Tuple[int, int]:
        y, x = divmod(node, self.resolution)
        return x, y

    def neighbor(self, node: int, direction: Direction) -> Optional[int]:
        """Return the direct neighbor of ``node`` or None at the tile border."""
        linked = int(self._links[node, _DIRECTION_COLUMNS[direction]])
        return None if linked == NO_NEIGHBOR else linked

    def neighbors(self, node: int) -> List[int]:
        """Direct neighbors of ``node`` in Direction order."""
        return [int(n) for n in self._links[node] if n != NO_NEIGHBOR]

    def blend_neighborhood(self, node: int) -> List[int]:
        """Nodes whose colors are averaged when ``node`` lies on a seam.

        The four direct neighbors plus the diagonals obtained by composing
        a horizontal link with a vertical one, without duplicates.
        """
        seen = []
        for linked in self.neighbors(node):
            if linked not in seen:
                seen.append(linked)
        for horizontal, vertical in _COMPOSED_LINKS:
            if self.neighbor(node, horizontal) is None:
                continue
            step = self.neighbor(node, vertical)
            if step is None:
                continue
            diagonal = self.neighbor(step, horizontal)
            if diagonal is not None and diagonal not in seen:
                seen.append(diagonal)
        return seen
