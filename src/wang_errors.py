"""Exceptions raised while synthesising strict Wang tiles."""

from __future__ import annotations

from typing import Dict


class WangTileError(Exception):
    """Base class for every error raised by the tile generator."""


class ConfigurationError(WangTileError, ValueError):
    """Unsupported tile count, resolution or worker count."""


class PreconditionError(WangTileError, ValueError):
    """The source image cannot provide distinct samples at the requested size."""


class InvariantViolation(WangTileError, RuntimeError):
    """Graph construction or seam classification reached an impossible state."""


class TileGenerationError(WangTileError):
    """One or more tiles failed while their siblings completed."""

    def __init__(self, failures: Dict[int, BaseException]):
        self.failures = dict(sorted(failures.items()))
        indices = ", ".join(str(index) for index in self.failures)
        super().__init__(f"{len(self.failures)} tile(s) failed: {indices}")
