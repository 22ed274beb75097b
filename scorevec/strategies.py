"""Per-dimension merge strategies."""

from __future__ import annotations

import math
from enum import Enum


class Merge(Enum):
    """How two values of the same dimension are combined."""

    Sum = "Sum"
    Mean = "Mean"
    Or = "Or"
    Min = "Min"
    Max = "Max"

    @classmethod
    def coerce(cls, value: "Merge | str") -> "Merge":
        if isinstance(value, cls):
            return value
        try:
            return cls[str(value)]
        except KeyError:
            raise ValueError(f"unknown merge strategy: {value!r}") from None


def combine(
    strategy: Merge,
    left: float,
    right: float,
    left_count: float = 1.0,
    right_count: float = 1.0,
) -> float:
    """Combine one dimension of two vectors.

    ``left_count``/``right_count`` are the COUNT weights and only matter for
    ``Mean``.
    """
    if strategy is Merge.Sum:
        return left + right
    if strategy is Merge.Mean:
        total = left_count + right_count
        weighted = left_count * left + right_count * right
        if total == 0:
            if weighted == 0 or math.isnan(weighted):
                return math.nan
            return math.copysign(math.inf, weighted)
        return weighted / total
    if strategy is Merge.Or:
        return 1.0 if left + right > 0 else 0.0
    if strategy is Merge.Min:
        return min(left, right)
    if strategy is Merge.Max:
        return max(left, right)
    raise ValueError(f"unknown merge strategy: {strategy!r}")
