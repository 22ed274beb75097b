"""Candidate answers, questions, and the producer side of score vectors.

Scorers register their dimension lazily on first use and then write one slot
per candidate answer. A scorer that fails on one answer never stops the rest.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from . import vectors
from .logging import logger
from .normalize import normalize_group
from .registry import ScoreRegistry, resolve
from .strategies import Merge
from .vectors import ScoreVector


@dataclass
class Answer:
    """A candidate answer and its score vector."""

    candidate_text: str
    scores: Optional[ScoreVector] = None
    registry: Optional[ScoreRegistry] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.scores is None:
            self.scores = vectors.empty(self.registry)

    def score(self, name: str, otherwise: float = vectors.MISSING) -> float:
        return vectors.get(self.scores, name, otherwise, self.registry)

    def set_score(self, name: str, value: float) -> None:
        self.scores = vectors.set(self.scores, name, value, self.registry)


@dataclass
class Question:
    """A question with its candidate answers."""

    text: str
    answers: List[Answer] = field(default_factory=list)
    registry: Optional[ScoreRegistry] = field(default=None, repr=False, compare=False)

    def __iter__(self) -> Iterator[Answer]:
        return iter(self.answers)

    def __len__(self) -> int:
        return len(self.answers)

    def add(self, candidate_text: str) -> Answer:
        answer = Answer(candidate_text, registry=self.registry)
        self.answers.append(answer)
        return answer

    def normalize(self) -> None:
        """Replace every answer's scores with the group-normalized vector."""
        normalized = normalize_group([a.scores for a in self.answers], self.registry)
        for answer, scores in zip(self.answers, normalized):
            answer.scores = scores


class AnswerScorer:
    """Base class for a component that owns one score dimension.

    Subclasses set ``name``, ``default_value`` and ``merge_strategy`` and
    implement ``score_answer``.
    """

    name: str = ""
    default_value: float = 0.0
    merge_strategy: Merge = Merge.Mean

    def __init__(self, registry: Optional[ScoreRegistry] = None) -> None:
        if not self.name:
            raise ValueError(f"{type(self).__name__} must define a dimension name")
        self.registry = registry
        self._registered = False

    def score_answer(self, question: Question, answer: Answer) -> float:
        raise NotImplementedError

    def score(self, question: Question) -> int:
        """Score every answer of ``question``; returns how many succeeded."""
        if not self._registered:
            resolve(self.registry).register(self.name, self.default_value, self.merge_strategy)
            self._registered = True
        scored = 0
        for answer in question:
            try:
                value = self.score_answer(question, answer)
                answer.scores = vectors.set(answer.scores, self.name, value, self.registry)
            except Exception:
                logger.exception(
                    "scorer %s failed on candidate %r", self.name, answer.candidate_text
                )
                continue
            scored += 1
        return scored
