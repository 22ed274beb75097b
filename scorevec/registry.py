"""Dimension registry and append-only schema version table.

Score vectors carry no names. A vector of length ``L`` is interpreted by the
schema version published at index ``L``, so the version table must only ever
grow by one name per registration. Each published version is an immutable
tuple, which lets readers index into it without taking the lock.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .errors import InvalidVectorLength, RegistryCorruption
from .logging import logger
from .strategies import Merge

COUNT = "COUNT"

Schema = Tuple[str, ...]


@dataclass(frozen=True)
class Dimension:
    """A named measurement with its default and merge rule."""

    name: str
    default_value: float
    merge_strategy: Merge


class ScoreRegistry:
    """Process-wide set of dimensions plus the versions derived from it.

    ``register`` is the only mutator. It updates the dimension dict and
    appends the new snapshot under a single lock; the dimension is stored
    before its snapshot is published.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._dimensions: Dict[str, Dimension] = {}
        self._versions: List[Schema] = [()]
        self.register(COUNT, 1.0, Merge.Sum)

    def __len__(self) -> int:
        return len(self._dimensions)

    def __contains__(self, name: object) -> bool:
        return name in self._dimensions

    def register(
        self, name: str, default_value: float, merge_strategy: Merge | str
    ) -> Dimension:
        """Register a dimension. Idempotent: the first registration wins."""
        if not isinstance(name, str):
            raise TypeError(f"dimension name must be a str, not {type(name).__name__}")
        strategy = Merge.coerce(merge_strategy)
        with self._lock:
            existing = self._dimensions.get(name)
            if existing is not None:
                if (
                    existing.default_value != default_value
                    or existing.merge_strategy is not strategy
                ):
                    logger.warning(
                        "dimension %s already registered as (%s, %s); ignoring (%s, %s)",
                        name,
                        existing.default_value,
                        existing.merge_strategy.name,
                        default_value,
                        strategy.name,
                    )
                return existing
            if len(self._versions) != len(self._dimensions) + 1:
                raise RegistryCorruption(
                    f"{len(self._dimensions)} dimensions but {len(self._versions)} versions"
                )
            # Build everything that can fail before touching either collection.
            dimension = Dimension(name, float(default_value), strategy)
            snapshot = tuple(sorted([*self._dimensions, name]))
            self._dimensions[name] = dimension
            self._versions.append(snapshot)
            logger.debug(
                "registered dimension %s (default=%s, merge=%s); schema version %d",
                name,
                dimension.default_value,
                strategy.name,
                len(self._dimensions),
            )
            return dimension

    def dimension(self, name: str) -> Optional[Dimension]:
        return self._dimensions.get(name)

    def version(self, length: int) -> Schema:
        """The schema that interprets a vector of ``length`` values."""
        versions = self._versions
        if length < 0 or length >= len(versions):
            raise InvalidVectorLength(length, len(versions) - 1)
        return versions[length]

    def latest(self) -> Schema:
        return self._versions[-1]

    def latest_schema(self) -> Schema:
        """Copy of the newest name list."""
        return tuple(self._versions[-1])

    def defaults(self, schema: Schema) -> Tuple[float, ...]:
        return tuple(self._require(name).default_value for name in schema)

    def strategies(self, schema: Schema) -> Tuple[Merge, ...]:
        return tuple(self._require(name).merge_strategy for name in schema)

    def _require(self, name: str) -> Dimension:
        dimension = self._dimensions.get(name)
        if dimension is None:
            raise RegistryCorruption(f"published schema names unregistered dimension {name}")
        return dimension


_default_registry: Optional[ScoreRegistry] = None
_default_lock = threading.Lock()


def default_registry() -> ScoreRegistry:
    """Return the process-wide registry, creating it on first use."""
    global _default_registry
    if _default_registry is None:
        with _default_lock:
            if _default_registry is None:
                _default_registry = ScoreRegistry()
    return _default_registry


def resolve(registry: Optional[ScoreRegistry]) -> ScoreRegistry:
    return registry if registry is not None else default_registry()
