#!/usr/bin/env python3
"""Generate a set of strict Wang tiles from a photograph.

Random crops of the input image are cut against each other along
minimum-cost seams so that the resulting tiles can be laid next to each
other, following their edge colors, without visible borders. The tiles
are written as tile0.png, tile1.png, ... and optionally packed into a
single sheet, laid out as a sample texture, or previewed.
"""
from __future__ import annotations

import argparse
import logging
import random
from pathlib import Path
from typing import Sequence

from edge_codes import sample_texture_ordering
from tile_sheet import (
    arrange,
    load_source_image,
    render_preview,
    save_packed,
    save_tiles,
    to_image,
)
from wang_config import (
    DEFAULT_RESOLUTION,
    DEFAULT_TILE_COUNT,
    SUPPORTED_RESOLUTIONS,
    SUPPORTED_TILE_COUNTS,
    TilingConfig,
)
from wang_tile_generator import StrictWangTileGenerator


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("image", type=Path, help="Source photograph")
    parser.add_argument(
        "--tiles",
        type=int,
        default=DEFAULT_TILE_COUNT,
        choices=SUPPORTED_TILE_COUNTS,
        help=f"Number of tiles to generate (default: {DEFAULT_TILE_COUNT})",
    )
    parser.add_argument(
        "--resolution",
        type=int,
        default=DEFAULT_RESOLUTION,
        choices=SUPPORTED_RESOLUTIONS,
        help=f"Width and height of each tile in pixels (default: {DEFAULT_RESOLUTION})",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("tiles"),
        help="Directory for the generated images",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of tiles generated in parallel (default: one per CPU)",
    )
    parser.add_argument(
        "--packed",
        action="store_true",
        help="Also save all tiles packed into a single tile.png",
    )
    parser.add_argument(
        "--sample-texture",
        action="store_true",
        help="Also save a 4x6 texture of randomly ordered, matching tiles",
    )
    parser.add_argument(
        "--preview",
        type=Path,
        default=None,
        help="Save a preview figure of the tiles and their edge colors",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(message)s"
    )
    logging.info("Wang tile generator started.")
    config = TilingConfig(
        number_of_tiles=args.tiles,
        tile_resolution=args.resolution,
        seed=args.seed,
        workers=args.workers,
    )
    try:
        config.validate()
        logging.info(f"Loading source image {args.image}")
        image = load_source_image(args.image)
        rng = random.Random(args.seed)
        generator = StrictWangTileGenerator(image, config, rng=rng)

        logging.info(
            f"Generating {config.number_of_tiles} tiles of {config.tile_resolution}px "
            f"with {config.worker_count} worker(s)."
        )
        tiles = generator.generate()

        paths = save_tiles(tiles, args.output_dir)
        logging.info(f"Saved {len(paths)} tiles to {args.output_dir}")

        if args.packed:
            packed_path = save_packed(tiles, args.output_dir)
            logging.info(f"Saved packed tiles to {packed_path}")

        texture = None
        if args.sample_texture or args.preview:
            layout = sample_texture_ordering(config.number_of_tiles, rng)
            texture = arrange(tiles, layout)
        if args.sample_texture:
            texture_path = args.output_dir / "sample_texture.png"
            to_image(texture).save(texture_path)
            logging.info(f"Saved sample texture to {texture_path}")

        if args.preview:
            logging.info(f"Rendering preview to {args.preview}")
            render_preview(tiles, generator.edge_codes, texture=texture, save_path=args.preview)
    except Exception as e:
        logging.error(f"Error: {e}")
        raise
    finally:
        logging.info("Wang tile generator finished.")


if __name__ == "__main__":
    main()
