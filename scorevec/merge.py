"""Merge engine: combine two score vectors dimension by dimension."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .registry import COUNT, ScoreRegistry, resolve
from .strategies import combine
from .vectors import ScoreVector, empty, index_of, upgrade, update


def merge(
    left: Sequence[float],
    right: Sequence[float],
    registry: Optional[ScoreRegistry] = None,
) -> ScoreVector:
    """Merge two vectors into a fresh one of the latest version.

    Both operands are upgraded against one snapshot so a registration racing
    with the merge cannot leave them at different lengths. ``Mean`` slots are
    weighted by each side's COUNT, which itself merges by ``Sum``.
    """
    registry = resolve(registry)
    schema = registry.latest()
    left = upgrade(left, schema, registry)
    right = upgrade(right, schema, registry)
    count_index = index_of(schema, COUNT)
    left_count = left[count_index] if count_index is not None else 1.0
    right_count = right[count_index] if count_index is not None else 1.0
    return tuple(
        combine(strategy, l, r, left_count, right_count)
        for strategy, l, r in zip(registry.strategies(schema), left, right)
    )


def merge_all(
    vectors: Iterable[Sequence[float]], registry: Optional[ScoreRegistry] = None
) -> ScoreVector:
    """Left fold of merge(); an empty input gives a fresh empty() vector."""
    registry = resolve(registry)
    merged: Optional[ScoreVector] = None
    for vector in vectors:
        merged = update(vector, registry) if merged is None else merge(merged, vector, registry)
    if merged is None:
        return empty(registry)
    return merged
