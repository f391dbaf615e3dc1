"""The four triangular areas of a square tile and their cut parameters.

A tile is split by its two diagonals into a Top, Right, Bottom and Left
triangle. Every area runs the same seam algorithm; what differs is the
data held by its :class:`AreaGeometry`:

* the two corners the cut runs between (also the zero-cost exits),
* which image axis the classification sweeps and which is primary,
* the outward growth direction used while building the graph,
* how a sweep line's boundary is picked and which side takes the
  edge-tile color.

Positions inside an area are also expressed as ``(t, d)``: ``t`` is the
coordinate along the area's outer side and ``d`` the depth measured from
that side toward the tile centre.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from enum import Enum, IntEnum
from functools import lru_cache
from typing import Callable, Dict, Iterator, List, Tuple

import numpy as np

from adjacency_grid import Direction

Pixel = Tuple[int, int]


class Area(IntEnum):
    TOP = 0
    RIGHT = 1
    BOTTOM = 2
    LEFT = 3

    def rotated_clockwise(self) -> "Area":
        return Area((self + 1) % 4)


class Axis(Enum):
    X = "x"
    Y = "y"


def area_index(x: int, y: int, resolution: int) -> Area:
    """Classify a pixel into the triangle it belongs to.

    Diagonal pixels are assigned so that every pixel belongs to exactly
    one area: the upper-left half of the main diagonal to Left, the
    lower-right half to Right, the upper-right half of the anti-diagonal
    to Top and the lower-left half to Bottom.
    """
    half = resolution // 2
    if x < half:
        if y < half:
            return Area.TOP if x > y else Area.LEFT
        return Area.BOTTOM if x >= (resolution - 1) - y else Area.LEFT
    if y < half:
        return Area.TOP if (resolution - 1) - x >= y else Area.RIGHT
    return Area.RIGHT if x >= y else Area.BOTTOM


@lru_cache(maxsize=None)
def area_index_map(resolution: int) -> np.ndarray:
    """Read-only (r, r) array of Area values indexed ``[y, x]``."""
    areas = np.empty((resolution, resolution), dtype=np.int8)
    for y in range(resolution):
        for x in range(resolution):
            areas[y, x] = area_index(x, y, resolution)
    areas.setflags(write=False)
    return areas


def rotate_clockwise(x: int, y: int, resolution: int) -> Pixel:
    """Rotate a pixel position a quarter turn clockwise about the tile centre."""
    return (resolution - 1) - y, x


@dataclass(frozen=True)
class AreaGeometry:
    """Parameters of one triangular area."""

    area: Area
    # Axis swept by the classification; the other axis is primary.
    sweep_axis: Axis
    # Direction pointing from the tile centre toward the area's outer side.
    outward: Direction
    # Picks the boundary among the primary coordinates on one sweep line.
    boundary_pick: Callable[..., int]
    # edge_side(primary, boundary) is True for pixels taking the edge-tile color.
    edge_side: Callable[[int, int], bool]

    @property
    def name(self) -> str:
        return self.area.name.capitalize()

    @property
    def primary_axis(self) -> Axis:
        return Axis.Y if self.sweep_axis is Axis.X else Axis.X

    @property
    def along(self) -> Direction:
        """Direction of increasing ``t``."""
        return Direction.RIGHT if self.sweep_axis is Axis.X else Direction.BOTTOM

    def _outer_at_zero(self) -> bool:
        return self.outward in (Direction.TOP, Direction.LEFT)

    def to_xy(self, t: int, d: int, resolution: int) -> Pixel:
        primary = d if self._outer_at_zero() else (resolution - 1) - d
        if self.sweep_axis is Axis.X:
            return t, primary
        return primary, t

    def to_td(self, x: int, y: int, resolution: int) -> Tuple[int, int]:
        t, primary = self.split(x, y)
        d = primary if self._outer_at_zero() else (resolution - 1) - primary
        return t, d

    def split(self, x: int, y: int) -> Tuple[int, int]:
        """Return ``(sweep, primary)`` coordinates of a pixel."""
        if self.sweep_axis is Axis.X:
            return x, y
        return y, x

    def sort_key(self, pixel: Pixel) -> Tuple[int, int]:
        return self.split(*pixel)

    def corners(self, resolution: int) -> Tuple[Pixel, Pixel]:
        """Fixed endpoints (A, B) of every cut in this area."""
        return self.to_xy(0, 0, resolution), self.to_xy(resolution - 1, 0, resolution)

    def zero_cost_pixels(self, resolution: int) -> Tuple[Pixel, Pixel]:
        return self.corners(resolution)

    def near_corner_pixels(self, resolution: int) -> Tuple[Pixel, Pixel]:
        return self.to_xy(1, 1, resolution), self.to_xy(resolution - 2, 1, resolution)

    def forced_edge_pixels(self, resolution: int) -> Tuple[Pixel, ...]:
        """Pixels always taken from the edge tile to suppress corner artifacts."""
        return self.zero_cost_pixels(resolution) + self.near_corner_pixels(resolution)

    def span(self, d: int, resolution: int) -> range:
        """Range of ``t`` walked at depth ``d``."""
        return range(max(0, d - 1), min(resolution - 1, resolution - d) + 1)

    def walk(self, resolution: int) -> Iterator[Tuple[int, int]]:
        """Yield ``(t, d)`` over the graph region, outer side first.

        The region widens by one pixel per row toward the outer side, like
        an expanding diamond, and reaches one pixel past each diagonal.
        """
        for d in range(resolution // 2):
            for t in self.span(d, resolution):
                yield t, d

    def growth(self, t: int, d: int, resolution: int) -> List[Direction]:
        """Directions in which edges are added from the node at ``(t, d)``."""
        half = resolution // 2
        directions = []
        if t < half:
            directions.append(self.along)
        elif t > half:
            directions.append(self.along.opposite)
        if d > 0:
            directions.append(self.outward)
        return directions

    def contains(self, x: int, y: int, resolution: int) -> bool:
        """True when the pixel belongs to this area (see :func:`area_index`)."""
        return area_index(x, y, resolution) is self.area

    def pixels(self, resolution: int) -> List[Pixel]:
        """Pixels of this area in row-major order."""
        ys, xs = np.nonzero(area_index_map(resolution) == self.area)
        return [(int(x), int(y)) for x, y in zip(xs, ys)]


TOP = AreaGeometry(Area.TOP, Axis.X, Direction.TOP, max, operator.le)
RIGHT = AreaGeometry(Area.RIGHT, Axis.Y, Direction.RIGHT, max, operator.gt)
BOTTOM = AreaGeometry(Area.BOTTOM, Axis.X, Direction.BOTTOM, min, operator.ge)
LEFT = AreaGeometry(Area.LEFT, Axis.Y, Direction.LEFT, max, operator.le)

GEOMETRIES: Dict[Area, AreaGeometry] = {
    Area.TOP: TOP,
    Area.RIGHT: RIGHT,
    Area.BOTTOM: BOTTOM,
    Area.LEFT: LEFT,
}

# Order in which the areas of a tile are cut and merged.
AREA_ORDER = (TOP, RIGHT, BOTTOM, LEFT)
