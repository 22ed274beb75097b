"""Positional access to score vectors.

A score vector is a plain tuple of floats. Its length picks the schema version
that names its slots, so every lookup goes through ``registry.version(len)``.
Readers never lock: they only index into versions that are already published.
"""

from __future__ import annotations

from bisect import bisect_left
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .errors import InvalidVectorLength, RegistryCorruption
from .registry import Schema, ScoreRegistry, resolve

ScoreVector = Tuple[float, ...]

MISSING = -1.0


def index_of(schema: Schema, name: str) -> Optional[int]:
    i = bisect_left(schema, name)
    if i < len(schema) and schema[i] == name:
        return i
    return None


def upgrade(scores: Sequence[float], schema: Schema, registry: ScoreRegistry) -> ScoreVector:
    """Convert ``scores`` to the (newer or equal) ``schema``.

    Old versions are subsequences of newer ones in the same order, so a single
    forward pass copies known slots and fills the rest with defaults.
    """
    if len(scores) == len(schema):
        return scores if isinstance(scores, tuple) else tuple(scores)
    if len(scores) > len(schema):
        raise InvalidVectorLength(len(scores), len(schema))
    old = registry.version(len(scores))
    out: List[float] = []
    oi = 0
    for name in schema:
        if oi < len(old) and old[oi] == name:
            out.append(float(scores[oi]))
            oi += 1
        else:
            dimension = registry.dimension(name)
            if dimension is None:
                raise RegistryCorruption(f"schema names unregistered dimension {name}")
            out.append(dimension.default_value)
    if oi != len(old):
        raise RegistryCorruption(
            f"version {len(old)} is not a subsequence of version {len(schema)}"
        )
    return tuple(out)


def empty(registry: Optional[ScoreRegistry] = None) -> ScoreVector:
    """A vector of the latest version with every slot at its default."""
    registry = resolve(registry)
    return registry.defaults(registry.latest())


def get(
    scores: Sequence[float],
    name: str,
    otherwise: float,
    registry: Optional[ScoreRegistry] = None,
) -> float:
    """Value of ``name`` in ``scores``, or ``otherwise`` if its version lacks it."""
    schema = resolve(registry).version(len(scores))
    index = index_of(schema, name)
    if index is None:
        return otherwise
    return scores[index]


def set(
    scores: Sequence[float],
    name: str,
    value: float,
    registry: Optional[ScoreRegistry] = None,
) -> ScoreVector:
    """Upgrade ``scores`` and overwrite ``name``. Unknown names are dropped."""
    registry = resolve(registry)
    schema = registry.latest()
    values = list(upgrade(scores, schema, registry))
    index = index_of(schema, name)
    if index is not None:
        values[index] = float(value)
    return tuple(values)


def update(scores: Sequence[float], registry: Optional[ScoreRegistry] = None) -> ScoreVector:
    """Convert ``scores`` to the latest schema. Up-to-date tuples come back as is."""
    registry = resolve(registry)
    return upgrade(scores, registry.latest(), registry)


def get_each(
    scores: Sequence[float],
    names: Iterable[str],
    registry: Optional[ScoreRegistry] = None,
) -> List[float]:
    """Pick ``names`` out of the upgraded vector, -1 for unknown names.

    The result is a plain list in the caller's order. It has no schema and
    cannot be passed back to get(), set() or update().
    """
    registry = resolve(registry)
    current = update(scores, registry)
    return [get(current, name, MISSING, registry) for name in names]


def as_map(scores: Sequence[float], registry: Optional[ScoreRegistry] = None) -> Dict[str, float]:
    """Name -> value using the vector's own version.

    Unlike get_each() this does not upgrade; call update() first to see
    dimensions registered after the vector was built.
    """
    schema = resolve(registry).version(len(scores))
    return dict(zip(schema, scores))


def latest_schema(registry: Optional[ScoreRegistry] = None) -> Schema:
    return resolve(registry).latest_schema()
