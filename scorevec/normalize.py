"""Rescale the vectors of one question against each other."""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

from .registry import ScoreRegistry, resolve
from .vectors import ScoreVector, upgrade


def _scale(value: float, total: float, spread: float) -> float:
    numerator = value - total
    if spread == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / spread


def normalize_group(
    rows: Sequence[Sequence[float]], registry: Optional[ScoreRegistry] = None
) -> List[ScoreVector]:
    """Normalize a group of vectors (usually every candidate of one question).

    For each column, ``total`` is the column sum and ``spread`` is
    ``sqrt(sum((total - value) ** 2))``; each cell becomes
    ``(value - total) / spread``. This is not a z-score: it subtracts the
    sum, not the mean. A zero spread gives NaN or a signed infinity.
    The input rows are left untouched.
    """
    if not rows:
        return []
    registry = resolve(registry)
    schema = registry.latest()
    matrix = [upgrade(row, schema, registry) for row in rows]
    width = len(schema)

    totals = [0.0] * width
    for row in matrix:
        for i in range(width):
            totals[i] += row[i]

    spreads = [0.0] * width
    for row in matrix:
        for i in range(width):
            diff = totals[i] - row[i]
            spreads[i] += diff * diff
    spreads = [math.sqrt(s) for s in spreads]

    return [
        tuple(_scale(row[i], totals[i], spreads[i]) for i in range(width))
        for row in matrix
    ]
