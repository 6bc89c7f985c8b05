from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field

Value = Union[int, float, str, None]


class ColumnKind(str, Enum):
    """
    Column classification.

    - NUMERIC: every non-null value is a number
    - CATEGORICAL: at least one non-null value is a string
    - EMPTY: no non-null values at all
    """
    NUMERIC = "numeric"
    CATEGORICAL = "categorical"
    EMPTY = "empty"


class FrequencyItem(BaseModel):
    """
    A distinct value and the number of rows holding it.

    name is the display string; value keeps the original typed value.
    """
    name: str
    value: Value
    count: int


class ColumnStats(BaseModel):
    """
    One row of the summary statistics panel.

    Numeric columns fill mean/min/max/median; categorical columns fill unique
    and top (the most frequent values).
    count is the number of non-null values, missing the number of null ones.
    """
    column: str
    kind: ColumnKind
    count: int
    missing: int
    mean: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None
    median: Optional[float] = None
    unique: Optional[int] = None
    top: Optional[list[FrequencyItem]] = None


class MissingValues(BaseModel):
    column: str
    missing: int
    percentage: float


class FiveNumberSummary(BaseModel):
    """
    Box plot statistics for one category of the grouping column.
    """
    category: str
    count: int
    min: float
    q1: float
    median: float
    q3: float
    max: float


class HistogramBin(BaseModel):
    start: float
    end: float
    count: int

    @property
    def label(self) -> str:
        return f"{self.start:.0f}-{self.end:.0f}"


class CorrelationMatrix(BaseModel):
    columns: list[str]
    values: list[list[float]]

    def get(self, a: str, b: str) -> float:
        return self.values[self.columns.index(a)][self.columns.index(b)]


class TrainingTask(str, Enum):
    CLASSIFICATION = "classification"
    REGRESSION = "regression"


class FeatureImportance(BaseModel):
    feature: str
    importance: float


class TrainingResult(BaseModel):
    """
    Output of the simulated training panel.

    Scores are random draws inside fixed bands; no model is fitted.
    Classification fills accuracy, regression fills mse and r2.
    """
    target: str
    task: TrainingTask
    samples: int
    accuracy: Optional[float] = None
    mse: Optional[float] = None
    r2: Optional[float] = None
    feature_importance: list[FeatureImportance] = Field(default_factory=list)
    simulated: bool = True


class PreviewPage(BaseModel):
    page: int
    total_pages: int
    headers: list[str]
    rows: list[list[str]]
