"""Exceptions raised by the score-vector engine.

Unknown dimension names and duplicate registrations are deliberately not
errors: ``get`` returns the caller's fallback and ``register`` is a no-op.
"""

from __future__ import annotations


class ScoreVectorError(Exception):
    """Base class for score-vector failures."""


class InvalidVectorLength(ScoreVectorError, IndexError):
    """A vector's length does not match any published schema version."""

    def __init__(self, length: int, latest: int) -> None:
        super().__init__(
            f"score vector of length {length} matches no schema version "
            f"(latest version has length {latest})"
        )
        self.length = length
        self.latest = latest


class RegistryCorruption(ScoreVectorError, RuntimeError):
    """The dimension set and the version table disagree. Not recoverable."""
