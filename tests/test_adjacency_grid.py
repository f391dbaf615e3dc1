import numpy as np
import pytest

from adjacency_grid import AdjacencyGrid, Direction


def test_neighbors_stop_at_the_border():
    grid = AdjacencyGrid(16)
    corner = grid.index(0, 0)

    assert grid.neighbor(corner, Direction.LEFT) is None
    assert grid.neighbor(corner, Direction.TOP) is None
    assert grid.coordinates(grid.neighbor(corner, Direction.RIGHT)) == (1, 0)
    assert grid.coordinates(grid.neighbor(corner, Direction.BOTTOM)) == (0, 1)

    far = grid.index(15, 15)
    assert grid.neighbor(far, Direction.RIGHT) is None
    assert grid.neighbor(far, Direction.BOTTOM) is None


def test_index_and_coordinates_agree():
    grid = AdjacencyGrid(32)

    assert grid.index(5, 7) == 7 * 32 + 5
    assert grid.coordinates(grid.index(31, 2)) == (31, 2)
    with pytest.raises(IndexError):
        grid.index(32, 0)


@pytest.mark.parametrize(
    "pixel,expected",
    [
        ((0, 0), {(1, 0), (0, 1), (1, 1)}),
        ((5, 0), {(4, 0), (6, 0), (5, 1), (4, 1), (6, 1)}),
        ((5, 5), {(4, 4), (5, 4), (6, 4), (4, 5), (6, 5), (4, 6), (5, 6), (6, 6)}),
        ((15, 15), {(14, 15), (15, 14), (14, 14)}),
    ],
)
def test_blend_neighborhood_composes_direct_links(pixel, expected):
    grid = AdjacencyGrid(16)

    neighborhood = grid.blend_neighborhood(grid.index(*pixel))

    assert len(neighborhood) == len(set(neighborhood))
    assert {grid.coordinates(node) for node in neighborhood} == expected


def test_links_are_read_only():
    grid = AdjacencyGrid(16)

    with pytest.raises(ValueError):
        grid._links[0, 0] = 3
    assert isinstance(grid._links, np.ndarray)


def test_opposite_directions():
    assert Direction.LEFT.opposite is Direction.RIGHT
    assert Direction.TOP.opposite is Direction.BOTTOM
