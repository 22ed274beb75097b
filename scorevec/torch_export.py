"""Export score vectors as a torch feature matrix for model training."""
from __future__ import annotations

from typing import Optional, Sequence

import torch

from .registry import ScoreRegistry, resolve
from .vectors import get_each


def to_tensor(
    rows: Sequence[Sequence[float]],
    names: Optional[Sequence[str]] = None,
    registry: Optional[ScoreRegistry] = None,
) -> torch.Tensor:
    """Stack ``rows`` into a ``[len(rows), len(names)]`` float32 tensor.

    Columns follow ``names`` (latest schema by default); names a row does not
    know come out as -1.
    """
    registry = resolve(registry)
    if names is None:
        names = registry.latest_schema()
    if not rows:
        return torch.empty((0, len(names)), dtype=torch.float32)
    data = [get_each(row, names, registry) for row in rows]
    return torch.tensor(data, dtype=torch.float32)
