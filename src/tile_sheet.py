"""Image files, packed sheets and previews for a generated tile set."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

import matplotlib.patches as patches
import matplotlib.pyplot as plt
import numpy as np
from PIL import Image

from edge_codes import PACKED_LAYOUTS, EdgeCodes
from wang_errors import ConfigurationError

TILE_FORMAT = "png"


def load_source_image(path: Path) -> np.ndarray:
    """Read an image file as an (h, w, 3) uint8 array."""
    with Image.open(path) as image:
        return np.asarray(image.convert("RGB"))


def to_image(pixels: np.ndarray) -> Image.Image:
    return Image.fromarray(np.ascontiguousarray(pixels[..., :3], dtype=np.uint8))


def save_tiles(tiles: Sequence[np.ndarray], folder: Path) -> List[Path]:
    """Save tiles as tile0.png, tile1.png, ... and return their paths."""
    folder.mkdir(parents=True, exist_ok=True)
    paths = []
    for index, tile in enumerate(tiles):
        path = folder / f"tile{index}.{TILE_FORMAT}"
        to_image(tile).save(path)
        paths.append(path)
    return paths


def arrange(tiles: Sequence[np.ndarray], layout: Sequence[Sequence[int]]) -> np.ndarray:
    """Place tiles on a grid; ``layout[row][column]`` is a tile index."""
    rows = [np.concatenate([tiles[index] for index in row], axis=1) for row in layout]
    return np.concatenate(rows, axis=0)


def pack_tiles(tiles: Sequence[np.ndarray]) -> np.ndarray:
    """Lay the tile set out row-major on its packed grid."""
    if len(tiles) not in PACKED_LAYOUTS:
        raise ConfigurationError(f"Cannot pack {len(tiles)} tiles")
    columns, rows = PACKED_LAYOUTS[len(tiles)]
    layout = [[row * columns + column for column in range(columns)] for row in range(rows)]
    return arrange(tiles, layout)


def save_packed(tiles: Sequence[np.ndarray], folder: Path) -> Path:
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / f"tile.{TILE_FORMAT}"
    to_image(pack_tiles(tiles)).save(path)
    return path


def render_preview(tiles: Sequence[np.ndarray], codes: Sequence[EdgeCodes],
                   texture: Optional[np.ndarray] = None,
                   save_path: Optional[Path] = None) -> None:
    """Plot the tiles with their edge colors, next to an optional sample texture."""
    count = len(tiles)
    columns = 4
    rows = (count + columns - 1) // columns
    figure_columns = columns + (2 if texture is not None else 0)

    fig = plt.figure(figsize=(2 * figure_columns, 2 * max(rows, 3)), facecolor='white')
    grid = fig.add_gridspec(max(rows, 3), figure_columns)

    for index, (tile, tile_codes) in enumerate(zip(tiles, codes)):
        ax = fig.add_subplot(grid[index // columns, index % columns])
        ax.imshow(tile, interpolation='nearest')
        size = tile.shape[0]
        # Colored triangles along each side: top, right, bottom, left
        corners = [(-0.5, -0.5), (size - 0.5, -0.5), (size - 0.5, size - 0.5), (-0.5, size - 0.5)]
        centre = ((size - 1) / 2, (size - 1) / 2)
        for side, color in enumerate(tile_codes):
            a, b = corners[side], corners[(side + 1) % 4]
            middle = ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)
            tip = (middle[0] + (centre[0] - middle[0]) * 0.2, middle[1] + (centre[1] - middle[1]) * 0.2)
            marker = [a, b, tip]
            ax.add_patch(patches.Polygon(marker, closed=True, alpha=0.8,
                                         facecolor=np.array(color.rgb) / 255.0))
        ax.set_title(f"tile{index}", fontsize=8)
        ax.axis('off')

    if texture is not None:
        ax = fig.add_subplot(grid[:, columns:])
        ax.imshow(texture, interpolation='nearest')
        ax.set_title("sample texture", fontsize=8)
        ax.axis('off')

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=100, facecolor='white', edgecolor='none')
        plt.close(fig)
    else:
        plt.show()
