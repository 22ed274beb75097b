from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .logging import logger
from .registry import ScoreRegistry, resolve


@dataclass
class ScoreConfig:
    report_path: Path = Path("scores.jsonl")
    dimensions: List[Dict[str, Any]] = field(default_factory=list)


def load_config(path: Optional[Path]) -> ScoreConfig:
    if path is None:
        return ScoreConfig()
    if not path.exists():
        return ScoreConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("ignoring unreadable config %s: %s", path, e)
        return ScoreConfig()
    report_path = Path(data.get("report_path", "scores.jsonl"))
    dimensions = list(data.get("dimensions") or [])
    return ScoreConfig(report_path=report_path, dimensions=dimensions)


def apply_config(config: ScoreConfig, registry: Optional[ScoreRegistry] = None) -> int:
    """Pre-register the configured dimensions; returns how many were given."""
    registry = resolve(registry)
    for entry in config.dimensions:
        registry.register(
            str(entry["name"]),
            float(entry.get("default", 0.0)),
            entry.get("merge", "Mean"),
        )
    return len(config.dimensions)
