import json
import logging
import sys
import threading
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from scorevec import (
    Answer,
    AnswerScorer,
    Merge,
    Question,
    ScoreConfig,
    ScoreRegistry,
    StatsDump,
    apply_config,
    load_config,
    load_report,
)
from scorevec.logging import logger, setup_logging


class LengthScorer(AnswerScorer):
    name = "LENGTH"
    default_value = 0.0
    merge_strategy = Merge.Max

    def score_answer(self, question, answer):
        if answer.candidate_text == "boom":
            raise ValueError("cannot score")
        return float(len(answer.candidate_text))


def test_scorer_registers_lazily_and_isolates_failures():
    registry = ScoreRegistry()
    question = Question("When does water boil?", registry=registry)
    question.add("100C")
    question.add("boom")
    assert "LENGTH" not in registry

    scored = LengthScorer(registry).score(question)

    assert scored == 1
    assert registry.dimension("LENGTH").merge_strategy is Merge.Max
    assert question.answers[0].score("LENGTH") == 4.0
    assert question.answers[1].score("LENGTH", -5.0) == -5.0


def test_question_normalize_replaces_scores():
    registry = ScoreRegistry()
    question = Question("q", registry=registry)
    question.add("a").set_score("COUNT", 1.0)
    question.add("bb")
    LengthScorer(registry).score(question)
    question.normalize()
    assert len(question.answers[0].scores) == len(registry)


def test_stats_dump_writes_own_version(tmp_path):
    registry = ScoreRegistry()
    question = Question("q", registry=registry)
    question.add("first")
    LengthScorer(registry).score(question)
    registry.register("LATE", 9, Merge.Sum)

    sink = StatsDump(tmp_path / "scores.jsonl", registry=registry)
    assert sink.question(question)
    assert sink.question(question)

    records = load_report(tmp_path / "scores.jsonl")
    assert len(records) == 2
    assert records[0]["run_id"] == sink.run_id
    answer = records[0]["answers"][0]
    assert answer["candidate_text"] == "first"
    assert answer["scores"] == {"COUNT": 1.0, "LENGTH": 5.0}


def test_stats_dump_skips_bad_vectors(tmp_path):
    registry = ScoreRegistry()
    question = Question("q", registry=registry)
    question.add("ok")
    question.add("bad").scores = (1.0,) * 12
    sink = StatsDump(tmp_path / "scores.jsonl", registry=registry)
    assert sink.question(question)
    answers = load_report(tmp_path / "scores.jsonl")[0]["answers"]
    assert [a["candidate_text"] for a in answers] == ["ok"]


def test_stats_dump_breaks_on_io_error(tmp_path):
    registry = ScoreRegistry()
    question = Question("q", registry=registry)
    question.add("ok")
    sink = StatsDump(tmp_path / "missing" / "scores.jsonl", registry=registry)
    assert not sink.question(question)
    assert sink.broken
    assert not sink.question(question)


def test_config_registers_dimensions(tmp_path):
    path = tmp_path / "scorevec.json"
    path.write_text(
        json.dumps(
            {
                "report_path": "out.jsonl",
                "dimensions": [
                    {"name": "PASSAGES", "default": 0, "merge": "Sum"},
                    {"name": "RANK"},
                ],
            }
        ),
        encoding="utf-8",
    )
    config = load_config(path)
    assert config.report_path == Path("out.jsonl")

    registry = ScoreRegistry()
    assert apply_config(config, registry) == 2
    assert registry.dimension("PASSAGES").merge_strategy is Merge.Sum
    assert registry.dimension("RANK").merge_strategy is Merge.Mean


def test_config_defaults_when_missing_or_broken(tmp_path):
    assert load_config(None) == ScoreConfig()
    assert load_config(tmp_path / "nope.json") == ScoreConfig()
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    assert load_config(broken) == ScoreConfig()


def test_answer_keeps_a_version_zero_vector():
    registry = ScoreRegistry()
    answer = Answer("old", scores=(), registry=registry)
    assert answer.scores == ()
    assert answer.score("COUNT", -2.0) == -2.0
    assert Answer("new", registry=registry).scores == (1.0,)


def test_stats_dump_is_thread_safe(tmp_path):
    registry = ScoreRegistry()
    question = Question("q", registry=registry)
    question.add("x" * 5000)
    sink = StatsDump(tmp_path / "scores.jsonl", registry=registry)

    def worker():
        for _ in range(20):
            sink.question(question)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    records = load_report(tmp_path / "scores.jsonl")
    assert len(records) == 160
    assert all(r["answers"][0]["candidate_text"] == "x" * 5000 for r in records)


def test_setup_logging_reads_env_level(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    monkeypatch.setenv("SCOREVEC_LOGLEVEL", "debug")
    setup_logging()
    setup_logging(logging.WARNING)
    assert [c["level"] for c in calls] == ["DEBUG", logging.WARNING]
    assert logger.name == "scorevec"
