"""Synthesise a set of strict Wang tiles from a source photograph.

The method follows "Strict Wang tiles" (http://graphics.ewha.ac.kr/SWangTile/):

1. Crop one random sample tile per output tile and four random edge-color
   tiles (yellow, green, blue, red) from the source image.
2. Roll yellow and blue up and green and red right by half a tile, so each
   edge-color tile is seamless under its own repetition.
3. For every output tile, assemble an edge tile whose four triangles are
   taken from the edge-color tiles named by the tile's edge codes.
4. In each triangle, cut the sample tile against the edge tile along the
   cheapest seam and blend the pixels on the seam.

Tiles are independent, so step 4 runs on a worker pool; the only shared
state is the read-only :class:`~adjacency_grid.AdjacencyGrid`.
"""

from __future__ import annotations

import logging
import random
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Sequence

import numpy as np

from adjacency_grid import AdjacencyGrid
from area_geometry import AREA_ORDER, area_index_map
from edge_codes import EdgeCodes, EdgeColor, edge_codes
from seam import AreaCut
from wang_config import TilingConfig
from wang_errors import PreconditionError, TileGenerationError

logger = logging.getLogger(__name__)

NUMBER_OF_EDGES = len(EdgeColor)


def as_rgb(image: np.ndarray) -> np.ndarray:
    """Return an (h, w, 3) uint8 view of an RGB or RGBA pixel buffer."""
    image = np.asarray(image)
    if image.ndim != 3 or image.shape[2] not in (3, 4):
        raise PreconditionError(f"Expected an RGB or RGBA image, got array of shape {image.shape}")
    return image[..., :3].astype(np.uint8, copy=False)


def check_source_image(image: np.ndarray, tile_resolution: int) -> None:
    """Reject images that cannot provide distinct tile-sized samples."""
    height, width = image.shape[:2]
    if width < tile_resolution:
        raise PreconditionError(
            f"Width of input image ({width} px) is too small for the desired "
            f"tile resolution of {tile_resolution}px."
        )
    if height < tile_resolution:
        raise PreconditionError(
            f"Height of input image ({height} px) is too small for the desired "
            f"tile resolution of {tile_resolution}px."
        )
    if width == tile_resolution or height == tile_resolution:
        raise PreconditionError(
            f"Width or height of input image ({width}x{height}) equals the desired "
            f"tile resolution of {tile_resolution}px. This results in tiles that "
            "will look all the same."
        )


def random_crops(image: np.ndarray, tile_resolution: int, count: int,
                 rng: random.Random) -> List[np.ndarray]:
    """Copy ``count`` square crops from random positions of ``image``."""
    height, width = image.shape[:2]
    crops = []
    for _ in range(count):
        x = rng.randrange(width - tile_resolution + 1)
        y = rng.randrange(height - tile_resolution + 1)
        crops.append(image[y:y + tile_resolution, x:x + tile_resolution].copy())
    return crops


def move_up_halfway(tile: np.ndarray) -> np.ndarray:
    """Shift rows up by half the height, wrapping the top half to the bottom."""
    return np.roll(tile, -(tile.shape[0] // 2), axis=0)


def move_right_halfway(tile: np.ndarray) -> np.ndarray:
    """Shift columns right by half the width, wrapping the right half to the left."""
    return np.roll(tile, tile.shape[1] // 2, axis=1)


def prepare_edge_color_tiles(crops: Sequence[np.ndarray]) -> np.ndarray:
    """Stack the four edge-color crops, shifted, indexed by EdgeColor."""
    if len(crops) != NUMBER_OF_EDGES:
        raise ValueError(f"Expected {NUMBER_OF_EDGES} edge-color crops, got {len(crops)}")
    shifted = {
        EdgeColor.YELLOW: move_up_halfway(crops[EdgeColor.YELLOW]),
        EdgeColor.GREEN: move_right_halfway(crops[EdgeColor.GREEN]),
        EdgeColor.BLUE: move_up_halfway(crops[EdgeColor.BLUE]),
        EdgeColor.RED: move_right_halfway(crops[EdgeColor.RED]),
    }
    return np.stack([shifted[color] for color in EdgeColor])


def synthesize_edge_tile(edge_color_tiles: np.ndarray, codes: EdgeCodes) -> np.ndarray:
    """Assemble one edge tile: each triangle comes from the tile of its side's color."""
    resolution = edge_color_tiles.shape[1]
    areas = area_index_map(resolution)
    color_of_pixel = np.asarray(codes, dtype=np.int64)[areas]
    ys, xs = np.indices((resolution, resolution))
    return edge_color_tiles[color_of_pixel, ys, xs]


def assemble_tile(grid: AdjacencyGrid, area_cuts: Sequence[AreaCut],
                  edge_tile: np.ndarray, sample_tile: np.ndarray) -> np.ndarray:
    """Run the four area cuts of one tile into a fresh output buffer."""
    output = np.zeros((grid.resolution, grid.resolution, 3), dtype=np.uint8)
    for area_cut in area_cuts:
        area_cut.execute(edge_tile, sample_tile, output)
    return output


@dataclass
class TileResult:
    """Outcome of one tile task."""

    index: int
    tile: Optional[np.ndarray] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class StrictWangTileGenerator:
    """Prepare inputs from a source image and generate the tile set."""

    def __init__(self, source_image: np.ndarray, config: TilingConfig,
                 rng: Optional[random.Random] = None):
        self.config = config.validate()
        self.number_of_tiles = config.number_of_tiles
        self.tile_resolution = config.tile_resolution

        image = as_rgb(source_image)
        check_source_image(image, self.tile_resolution)
        self.rng = rng if rng is not None else random.Random(config.seed)
        self.edge_codes = edge_codes(self.number_of_tiles)

        self.sample_tiles = random_crops(image, self.tile_resolution, self.number_of_tiles, self.rng)
        self.edge_color_tiles = prepare_edge_color_tiles(
            random_crops(image, self.tile_resolution, NUMBER_OF_EDGES, self.rng)
        )
        self.edge_tiles = [
            synthesize_edge_tile(self.edge_color_tiles, codes) for codes in self.edge_codes
        ]
        logger.info(
            "Drew %d sample and %d edge-color crops of %dpx from a %dx%d image",
            self.number_of_tiles, NUMBER_OF_EDGES, self.tile_resolution,
            image.shape[1], image.shape[0],
        )

        self.grid = AdjacencyGrid(self.tile_resolution)
        self.area_cuts = [AreaCut(self.grid, geometry) for geometry in AREA_ORDER]
        logger.info("Built %dx%d adjacency grid", self.tile_resolution, self.tile_resolution)

    def generate_tile(self, index: int) -> np.ndarray:
        """Synchronously generate the tile at ``index``."""
        tile = assemble_tile(self.grid, self.area_cuts, self.edge_tiles[index], self.sample_tiles[index])
        logger.info("Finished tile %d/%d", index + 1, self.number_of_tiles)
        return tile

    def submit_all(self, executor: ThreadPoolExecutor) -> List[Future]:
        return [executor.submit(self.generate_tile, index) for index in range(self.number_of_tiles)]

    def iter_results(self) -> Iterator[TileResult]:
        """Yield one TileResult per tile in submission order."""
        with ThreadPoolExecutor(max_workers=self.config.worker_count) as executor:
            futures = self.submit_all(executor)
            for index, future in enumerate(futures):
                try:
                    yield TileResult(index, tile=future.result())
                except Exception as e:
                    logger.error("Tile %d failed: %s", index, e)
                    yield TileResult(index, error=e)

    def generate(self, on_tile: Optional[Callable[[int, np.ndarray], None]] = None) -> List[np.ndarray]:
        """Generate every tile; raise TileGenerationError if any tile failed.

        ``on_tile(index, tile)`` is called in submission order for every
        tile that finished, including when siblings failed.
        """
        tiles: List[np.ndarray] = []
        failures = {}
        for result in self.iter_results():
            if not result.ok:
                failures[result.index] = result.error
                continue
            tiles.append(result.tile)
            if on_tile is not None:
                on_tile(result.index, result.tile)
        if failures:
            raise TileGenerationError(failures)
        return tiles
