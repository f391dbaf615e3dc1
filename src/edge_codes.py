"""Edge-code tables for the supported tile sets and a compatible layout.

Each tile carries one canonical edge color per side, listed as
``(top, right, bottom, left)``. Two tiles may touch when the shared side
has the same color on both of them.
"""

from __future__ import annotations

import random
from enum import IntEnum
from typing import Dict, List, Optional, Sequence, Tuple

from area_geometry import Area
from wang_errors import ConfigurationError, InvariantViolation


class EdgeColor(IntEnum):
    YELLOW = 0
    GREEN = 1
    BLUE = 2
    RED = 3

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return PREVIEW_COLORS[self]


PREVIEW_COLORS = {
    EdgeColor.YELLOW: (196, 163, 0),
    EdgeColor.GREEN: (0, 127, 14),
    EdgeColor.BLUE: (0, 74, 127),
    EdgeColor.RED: (120, 0, 0),
}

EdgeCodes = Tuple[EdgeColor, EdgeColor, EdgeColor, EdgeColor]

Y, G, B, R = EdgeColor.YELLOW, EdgeColor.GREEN, EdgeColor.BLUE, EdgeColor.RED

EDGE_CODE_TABLES: Dict[int, Tuple[EdgeCodes, ...]] = {
    4: (
        (Y, G, B, R),
        (Y, R, B, G),
        (B, G, Y, R),
        (B, G, B, G),
    ),
    8: (
        (Y, G, B, R),
        (B, R, B, R),
        (Y, G, Y, G),
        (B, R, Y, G),
        (Y, R, B, G),
        (B, G, B, G),
        (Y, R, Y, R),
        (B, G, Y, R),
    ),
    16: (
        (Y, R, B, R),
        (Y, G, B, R),
        (Y, G, B, G),
        (Y, R, B, G),
        (B, R, B, R),
        (B, G, B, R),
        (B, G, B, G),
        (B, R, B, G),
        (B, R, Y, R),
        (B, G, Y, R),
        (B, G, Y, G),
        (B, R, Y, G),
        (Y, R, Y, R),
        (Y, G, Y, R),
        (Y, G, Y, G),
        (Y, R, Y, G),
    ),
}

# Grid shape (columns, rows) of the packed sheet for each tile count.
PACKED_LAYOUTS = {4: (2, 2), 8: (4, 2), 16: (4, 4)}

SAMPLE_TEXTURE_COLUMNS = 4
SAMPLE_TEXTURE_ROWS = 6


def edge_codes(number_of_tiles: int) -> Tuple[EdgeCodes, ...]:
    """Return the table for ``number_of_tiles`` tiles."""
    try:
        return EDGE_CODE_TABLES[number_of_tiles]
    except KeyError:
        raise ConfigurationError(f"Number of tiles {number_of_tiles} not supported.") from None


def side_color(codes: EdgeCodes, side: Area) -> EdgeColor:
    return codes[int(side)]


def fits_right_of(left: EdgeCodes, right: EdgeCodes) -> bool:
    return left[Area.RIGHT] == right[Area.LEFT]


def fits_below(upper: EdgeCodes, lower: EdgeCodes) -> bool:
    return upper[Area.BOTTOM] == lower[Area.TOP]


def candidates(table: Sequence[EdgeCodes], top: Optional[EdgeColor] = None,
               left: Optional[EdgeColor] = None) -> List[int]:
    """Indices of tiles whose top and left colors match the given ones."""
    return [
        index for index, codes in enumerate(table)
        if (top is None or codes[Area.TOP] == top)
        and (left is None or codes[Area.LEFT] == left)
    ]


def sample_texture_ordering(number_of_tiles: int, rng: random.Random,
                            columns: int = SAMPLE_TEXTURE_COLUMNS,
                            rows: int = SAMPLE_TEXTURE_ROWS) -> List[List[int]]:
    """Pick a random grid of tile indices where every shared side matches.

    The first cell is a random yellow-top tile; every later cell is drawn
    from the tiles compatible with its upper and left neighbors.
    """
    table = edge_codes(number_of_tiles)
    layout: List[List[int]] = []
    for y in range(rows):
        row: List[int] = []
        for x in range(columns):
            if y == 0 and x == 0:
                top, left = EdgeColor.YELLOW, None
            else:
                top = table[layout[y - 1][x]][Area.BOTTOM] if y > 0 else None
                left = table[row[x - 1]][Area.RIGHT] if x > 0 else None
            options = candidates(table, top=top, left=left)
            if not options:
                raise InvariantViolation(
                    f"No tile with top={top} and left={left} in the {number_of_tiles}-tile set"
                )
            row.append(rng.choice(options))
        layout.append(row)
    return layout
