"""Configuration for the strict Wang tile generator."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from wang_errors import ConfigurationError

SUPPORTED_TILE_COUNTS = (4, 8, 16)
SUPPORTED_RESOLUTIONS = (16, 32, 64, 128)

DEFAULT_TILE_COUNT = 8
DEFAULT_RESOLUTION = 64


@dataclass(frozen=True)
class TilingConfig:
    """Parameters describing one generation run."""

    number_of_tiles: int = DEFAULT_TILE_COUNT
    tile_resolution: int = DEFAULT_RESOLUTION
    seed: Optional[int] = None
    workers: Optional[int] = None

    def validate(self) -> "TilingConfig":
        """Raise ConfigurationError unless every value is supported."""
        if self.number_of_tiles not in SUPPORTED_TILE_COUNTS:
            raise ConfigurationError(
                f"Number of tiles {self.number_of_tiles} not supported "
                f"(choose one of {SUPPORTED_TILE_COUNTS})"
            )
        if self.tile_resolution not in SUPPORTED_RESOLUTIONS:
            raise ConfigurationError(
                f"Resolution of tile {self.tile_resolution} not supported "
                f"(choose one of {SUPPORTED_RESOLUTIONS})"
            )
        if self.workers is not None and self.workers < 1:
            raise ConfigurationError(f"Worker count must be positive, got {self.workers}")
        return self

    @property
    def worker_count(self) -> int:
        """Number of pool workers, sized to the machine when unset."""
        if self.workers is not None:
            return self.workers
        return os.cpu_count() or 1
