"""Versioned score vectors for candidate-answer scoring.

Scoring components register named dimensions at runtime; vectors stay dense
tuples of floats whose length identifies the schema version that names them.
Older vectors remain valid and are upgraded on demand. The torch export lives
in ``scorevec.torch_export`` so importing this package does not require torch.
"""

from .answers import Answer, AnswerScorer, Question
from .config import ScoreConfig, apply_config, load_config
from .errors import InvalidVectorLength, RegistryCorruption, ScoreVectorError
from .merge import merge, merge_all
from .normalize import normalize_group
from .registry import COUNT, Dimension, ScoreRegistry, default_registry
from .report import StatsDump, load_report
from .strategies import Merge
from .vectors import (
    ScoreVector,
    as_map,
    empty,
    get,
    get_each,
    latest_schema,
    set,
    update,
)

__all__ = [
    "Answer",
    "AnswerScorer",
    "Question",
    "ScoreConfig",
    "apply_config",
    "load_config",
    "InvalidVectorLength",
    "RegistryCorruption",
    "ScoreVectorError",
    "merge",
    "merge_all",
    "normalize_group",
    "COUNT",
    "Dimension",
    "ScoreRegistry",
    "default_registry",
    "StatsDump",
    "load_report",
    "Merge",
    "ScoreVector",
    "as_map",
    "empty",
    "get",
    "get_each",
    "latest_schema",
    "set",
    "update",
]
