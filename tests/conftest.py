import sys
from pathlib import Path
from typing import Callable

import matplotlib
import numpy as np
import pytest

matplotlib.use("Agg")

ROOT_DIR = Path(__file__).resolve().parent.parent
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from adjacency_grid import AdjacencyGrid


@pytest.fixture
def make_tile() -> Callable[..., np.ndarray]:
    def _make_tile(resolution: int, seed: int = 0) -> np.ndarray:
        rng = np.random.default_rng(seed)
        return rng.integers(0, 256, size=(resolution, resolution, 3), dtype=np.uint8)

    return _make_tile


@pytest.fixture
def uniform_tile() -> Callable[..., np.ndarray]:
    def _uniform_tile(resolution: int, color) -> np.ndarray:
        tile = np.empty((resolution, resolution, 3), dtype=np.uint8)
        tile[...] = color
        return tile

    return _uniform_tile


@pytest.fixture
def grid_for() -> Callable[[int], AdjacencyGrid]:
    cache = {}

    def _grid_for(resolution: int) -> AdjacencyGrid:
        if resolution not in cache:
            cache[resolution] = AdjacencyGrid(resolution)
        return cache[resolution]

    return _grid_for


@pytest.fixture
def source_image() -> np.ndarray:
    """A smooth gradient photograph stand-in with some noise."""
    rng = np.random.default_rng(7)
    height, width = 90, 120
    ys, xs = np.indices((height, width))
    image = np.stack([xs * 2, ys * 2, (xs + ys)], axis=-1).astype(np.int64)
    image += rng.integers(0, 30, size=image.shape)
    return np.clip(image, 0, 255).astype(np.uint8)
