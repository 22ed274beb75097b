"""Report sink that appends each question's per-answer scores as JSON lines."""

from __future__ import annotations

import json
import threading
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

from .answers import Question
from .errors import ScoreVectorError
from .logging import logger
from .registry import ScoreRegistry
from .vectors import as_map


class StatsDump:
    """Write one JSON line per question to ``path`` for offline analysis.

    Scores are exported with ``as_map`` using each vector's own version. An
    answer whose vector cannot be read is skipped; an I/O failure marks the
    sink broken and later questions are dropped instead of raising.
    """

    def __init__(self, path: Path, registry: Optional[ScoreRegistry] = None) -> None:
        self.path = Path(path)
        self.registry = registry
        self.run_id = uuid.uuid4().hex
        self.broken = False
        self._lock = threading.Lock()

    def _rows(self, question: Question) -> List[Dict[str, Any]]:
        rows: List[Dict[str, Any]] = []
        for answer in question:
            try:
                scores = as_map(answer.scores, self.registry)
            except ScoreVectorError as e:
                logger.warning("skipping candidate %r: %s", answer.candidate_text, e)
                continue
            rows.append({"candidate_text": answer.candidate_text, "scores": scores})
        return rows

    def question(self, question: Question) -> bool:
        """Record ``question``; returns False when nothing was written.

        Safe to call from several scorer threads: records are written whole,
        one at a time.
        """
        record = {
            "run_id": self.run_id,
            "question": question.text,
            "answers": self._rows(question),
        }
        line = json.dumps(record, ensure_ascii=False) + "\n"
        with self._lock:
            if self.broken:
                return False
            try:
                with self.path.open("a", encoding="utf-8") as f:
                    f.write(line)
            except OSError as e:
                logger.error("score report %s disabled: %s", self.path, e)
                self.broken = True
                return False
        return True


def load_report(path: Path) -> List[Dict[str, Any]]:
    records: List[Dict[str, Any]] = []
    with Path(path).open("r", encoding="utf-8") as f:
        for line in f:
            if line.strip():
                records.append(json.loads(line))
    return records
