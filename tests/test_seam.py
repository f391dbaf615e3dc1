import numpy as np
import pytest

from area_geometry import AREA_ORDER, TOP, area_index_map
from area_graph import AreaGraph, CutPath
from seam import AreaCut, SeamBlender, SeamClassifier
from shortest_path import ZERO
from wang_errors import InvariantViolation

RED = (255, 0, 0)
BLUE = (0, 0, 255)


@pytest.mark.parametrize("geometry", AREA_ORDER)
@pytest.mark.parametrize("resolution", [16, 32])
def test_every_sweep_line_has_a_boundary(geometry, resolution, grid_for, make_tile):
    path = AreaGraph(grid_for(resolution), geometry, make_tile(resolution, 8), make_tile(resolution, 9)).cut()

    boundaries = SeamClassifier(geometry, resolution).boundaries(path)

    assert len(boundaries) == resolution
    for sweep, boundary in enumerate(boundaries):
        on_line = [primary for s, primary in (geometry.split(*p) for p in path) if s == sweep]
        assert boundary in on_line


@pytest.mark.parametrize("geometry", AREA_ORDER)
@pytest.mark.parametrize("resolution", [16, 32])
def test_corners_always_take_the_edge_tile(geometry, resolution, grid_for, make_tile):
    classifier = SeamClassifier(geometry, resolution)
    for seed in range(3):
        edge, sample = make_tile(resolution, seed), make_tile(resolution, seed + 100)
        path = AreaGraph(grid_for(resolution), geometry, edge, sample).cut()

        edge_side = classifier.classify(path)

        for pixel in geometry.forced_edge_pixels(resolution):
            assert pixel in edge_side


def test_classification_is_deterministic(grid_for, make_tile):
    edge, sample = make_tile(16, 11), make_tile(16, 12)
    cut = AreaCut(grid_for(16), TOP)

    first = cut.execute(edge, sample)
    second = cut.execute(edge, sample)

    assert first.path.route == second.path.route
    assert np.array_equal(first.edge_side.mask, second.edge_side.mask)


def test_top_edge_side_lies_above_the_boundary(grid_for, make_tile):
    path = AreaGraph(grid_for(16), TOP, make_tile(16, 1), make_tile(16, 2)).cut()

    edge_side = SeamClassifier(TOP, 16).classify(path)

    for x, boundary in enumerate(edge_side.boundaries):
        column = edge_side.mask[:, x]
        assert column[: boundary + 1].all()
        # only the forced near-corner pixels may sit below the boundary
        below = {(x, int(y)) for y in np.nonzero(column[boundary + 1:])[0] + boundary + 1}
        assert below <= set(TOP.forced_edge_pixels(16))


def test_missing_sweep_line_is_an_invariant_violation():
    path = CutPath(TOP, [(0, 0), (1, 0), (3, 0)], ZERO)

    with pytest.raises(InvariantViolation):
        SeamClassifier(TOP, 4).boundaries(path)


@pytest.mark.parametrize("geometry", AREA_ORDER)
def test_uniform_tiles_cut_for_free(geometry, grid_for, uniform_tile):
    resolution = 16
    edge, sample = uniform_tile(resolution, RED), uniform_tile(resolution, BLUE)
    output = np.zeros((resolution, resolution, 3), dtype=np.uint8)

    result = AreaCut(grid_for(resolution), geometry).execute(edge, sample, output)

    assert result.path.cost == ZERO
    for pixel in geometry.zero_cost_pixels(resolution):
        assert pixel in result.edge_side
    for x, y in geometry.pixels(resolution):
        if (x, y) in result.path:
            continue
        assert tuple(output[y, x]) in (RED, BLUE)


@pytest.mark.parametrize("geometry", AREA_ORDER)
def test_merge_writes_each_area_pixel_once(geometry, grid_for, make_tile):
    resolution = 16
    output = np.full((resolution, resolution, 3), -1, dtype=np.int16)

    AreaCut(grid_for(resolution), geometry).execute(make_tile(resolution, 4), make_tile(resolution, 5), output)

    written = (output != -1).all(axis=-1)
    assert np.array_equal(written, area_index_map(resolution) == geometry.area)


def test_seam_pixels_are_neighborhood_means(grid_for, make_tile):
    resolution = 16
    grid = grid_for(resolution)
    edge, sample = make_tile(resolution, 21), make_tile(resolution, 22)
    output = np.zeros((resolution, resolution, 3), dtype=np.uint8)

    result = AreaCut(grid, TOP).execute(edge, sample, output)

    chosen = np.where(result.edge_side.mask[..., np.newaxis], edge, sample)
    blender = SeamBlender(grid, TOP)
    checked = 0
    for x, y in result.path:
        if not blender.area_mask[y, x]:
            continue
        neighborhood = [grid.coordinates(n) for n in grid.blend_neighborhood(grid.index(x, y))]
        colors = np.array([chosen[ny, nx] for nx, ny in neighborhood], dtype=np.int64)
        assert tuple(output[y, x]) == tuple(colors.sum(axis=0) // len(colors))
        checked += 1
    assert checked > 0

    for x, y in TOP.pixels(resolution):
        if (x, y) not in result.path:
            assert tuple(output[y, x]) == tuple(chosen[y, x])
