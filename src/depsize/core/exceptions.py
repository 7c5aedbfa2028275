"""
Exception hierarchy for depsize.

The derivation engine itself never raises for malformed input; these
errors belong to the collaborators around it (loader, config, store, CLI).
"""

from typing import Any


class DepsizeError(Exception):
    """Base class for all depsize errors."""


class StatsLoadError(DepsizeError):
    """A stats document could not be read or decoded."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load stats from {path}: {reason}")


class ChunkNotFoundError(DepsizeError):
    """The requested chunk is not part of the selected document."""

    def __init__(self, chunk_id: Any):
        self.chunk_id = chunk_id
        super().__init__(f"Chunk not found: {chunk_id}")


class ConfigError(DepsizeError):
    """The configuration file exists but cannot be used."""


class DispatchError(DepsizeError):
    """An action was dispatched while another dispatch was in progress."""
