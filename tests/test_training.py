from __future__ import annotations

import random

import pytest

from table_insights.errors import ColumnNotFoundError, InsufficientDataError
from table_insights.models import TrainingResult, TrainingTask
from table_insights.table import Table
from table_insights.training import SimulatedTrainer, eligible_targets


def _wide_table() -> Table:
    headers = [f"f{i}" for i in range(12)] + ["label", "value"]
    rows = []
    for r in range(6):
        row = {f"f{i}": r * i for i in range(12)}
        row["label"] = "yes" if r % 2 else "no"
        row["value"] = float(r)
        rows.append(row)
    return Table.from_records(headers, rows)


def test_eligible_targets_need_text_and_few_classes() -> None:
    many = Table.from_records(["id", "label"], [{"id": f"id{i}", "label": "a"} for i in range(25)])
    assert eligible_targets(many) == ["label"]
    assert eligible_targets(_wide_table()) == ["label"]


def test_classification_waits_and_draws_scores_in_band() -> None:
    waits: list[float] = []
    trainer = SimulatedTrainer(rng=random.Random(0), delay=2.0, sleep=waits.append)
    result = trainer.train(_wide_table(), "label")

    assert waits == [2.0]
    assert result.task == TrainingTask.CLASSIFICATION
    assert 0.65 <= result.accuracy <= 0.90
    assert result.mse is None and result.r2 is None
    assert result.samples == 6
    assert result.simulated is True

    features = [f.feature for f in result.feature_importance]
    assert len(features) == 10
    assert "label" not in features
    scores = [f.importance for f in result.feature_importance]
    assert scores == sorted(scores, reverse=True)


def test_regression_scores_in_band() -> None:
    trainer = SimulatedTrainer(rng=random.Random(3), delay=0)
    result = trainer.train(_wide_table(), "value", task="regression")
    assert result.task == TrainingTask.REGRESSION
    assert 0.55 <= result.r2 <= 0.90
    assert result.mse >= 0
    assert result.accuracy is None


def test_same_seed_gives_same_result() -> None:
    a = SimulatedTrainer(rng=random.Random(42), delay=0).train(_wide_table(), "label")
    b = SimulatedTrainer(rng=random.Random(42), delay=0).train(_wide_table(), "label")
    assert a == b


def test_injected_result_is_returned() -> None:
    injected = TrainingResult(target="label", task=TrainingTask.CLASSIFICATION, samples=6, accuracy=0.5)
    waits: list[float] = []
    trainer = SimulatedTrainer(delay=1.5, sleep=waits.append, result=injected)
    assert trainer.train(_wide_table(), "label") is injected
    assert waits == [1.5]


def test_invalid_targets_and_tasks() -> None:
    trainer = SimulatedTrainer(delay=0)
    with pytest.raises(ColumnNotFoundError):
        trainer.train(_wide_table(), "missing")
    with pytest.raises(InsufficientDataError):
        trainer.train(_wide_table(), "f3")
    with pytest.raises(InsufficientDataError):
        trainer.train(_wide_table(), "label", task=TrainingTask.REGRESSION)
    with pytest.raises(ValueError):
        trainer.train(_wide_table(), "label", task="clustering")


def test_missing_value_counts_toward_target_classes() -> None:
    labels = [f"c{i}" for i in range(19)]
    full = Table.from_records(["label"], [{"label": v} for v in labels])
    assert eligible_targets(full) == ["label"]
    gappy = Table.from_records(["label"], [{"label": v} for v in labels + [None]])
    assert eligible_targets(gappy) == []
