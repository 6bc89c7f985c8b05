"""Simulated model training.

Nothing is learned here. The panel only mimics the shape of a training run:
inputs go in, a delay passes, and scores drawn from fixed bands come out.
Randomness, delay and even the whole result can be injected so callers and
tests get deterministic behaviour.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Callable, Optional

from .errors import InsufficientDataError
from .models import FeatureImportance, TrainingResult, TrainingTask
from .table import Table, distinct_count, is_missing

logger = logging.getLogger(__name__)

MAX_TARGET_CLASSES = 20
MAX_FEATURES = 10


def eligible_targets(table: Table) -> list[str]:
    """Classification targets: fewer than 20 distinct values, at least one of them text.

    A missing value counts as one more distinct value.
    """
    out = []
    for h in table.headers:
        values = table.column(h)
        distinct = distinct_count(values) + any(is_missing(v) for v in values)
        if any(isinstance(v, str) for v in values) and distinct < MAX_TARGET_CLASSES:
            out.append(h)
    return out


class SimulatedTrainer:
    """Mock trainer returning random scores after a fixed delay.

    rng: random.Random used for every draw (seed it for reproducible output)
    delay: seconds to wait before returning, spent through `sleep`
    result: when given, returned as-is instead of drawing scores
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        delay: float = 2.0,
        sleep: Callable[[float], None] = time.sleep,
        result: Optional[TrainingResult] = None,
    ) -> None:
        self.rng = rng or random.Random()
        self.delay = delay
        self.sleep = sleep
        self.result = result

    def train(self, table: Table, target: str, task: TrainingTask | str = TrainingTask.CLASSIFICATION) -> TrainingResult:
        table.require(target)
        task = TrainingTask(task)
        if task == TrainingTask.CLASSIFICATION and target not in eligible_targets(table):
            raise InsufficientDataError(
                f"'{target}' is not a suitable classification target. "
                f"Target column should hold text and fewer than {MAX_TARGET_CLASSES} unique values."
            )
        logger.info("Simulated %s training on %r (%d rows).", task.value, target, len(table))

        if self.delay > 0:
            self.sleep(self.delay)

        if self.result is not None:
            return self.result

        if task == TrainingTask.CLASSIFICATION:
            result = TrainingResult(
                target=target,
                task=task,
                samples=len(table),
                accuracy=min(0.95, 0.65 + self.rng.random() * 0.25),
            )
        else:
            result = self._regression(table, target)

        result.feature_importance = self._feature_importance(table, target)
        return result

    def _regression(self, table: Table, target: str) -> TrainingResult:
        nums = table.numeric_values(target)
        if not nums:
            raise InsufficientDataError(f"Regression target '{target}' has no numeric values.")
        mean = sum(nums) / len(nums)
        variance = sum((v - mean) ** 2 for v in nums) / len(nums)
        return TrainingResult(
            target=target,
            task=TrainingTask.REGRESSION,
            samples=len(table),
            r2=0.55 + self.rng.random() * 0.35,
            mse=variance * (0.05 + self.rng.random() * 0.40),
        )

    def _feature_importance(self, table: Table, target: str) -> list[FeatureImportance]:
        scored = [
            FeatureImportance(feature=h, importance=self.rng.random())
            for h in table.headers
            if h != target
        ]
        scored.sort(key=lambda f: f.importance, reverse=True)
        return scored[:MAX_FEATURES]
