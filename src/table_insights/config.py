from __future__ import annotations

import logging
import os
from enum import Enum
from typing import Mapping, Optional

from pydantic import BaseModel, Field

ENV_PREFIX = "TABLE_INSIGHTS_"


class QuartileMethod(str, Enum):
    """
    How Q1/median/Q3 are picked from a sorted group.

    - LOWER: lower neighbour of the exact rank, index floor((n - 1) * p)
    - NEAREST_INDEX: index floor(n * p), clamped to the last element
    - LINEAR: linear interpolation between neighbours
    """
    LOWER = "lower"
    NEAREST_INDEX = "nearest_index"
    LINEAR = "linear"


class Settings(BaseModel):
    """
    Runtime settings. Every field can be overridden with a
    TABLE_INSIGHTS_<FIELD> environment variable.
    """
    histogram_bins: int = Field(default=20, gt=0)
    top_n: int = Field(default=10, gt=0)
    quartile_method: QuartileMethod = QuartileMethod.LOWER
    training_delay: float = Field(default=2.0, ge=0.0)
    log_level: str = "WARNING"


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        v = int(raw)
        return v if v > 0 else default
    except ValueError:
        return default


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        v = float(raw)
        return v if v >= 0 else default
    except ValueError:
        return default


def _env_quartile_method(env: Mapping[str, str], default: QuartileMethod) -> QuartileMethod:
    raw = env.get(ENV_PREFIX + "QUARTILE_METHOD")
    if raw is None or raw.strip() == "":
        return default
    try:
        return QuartileMethod(raw.strip().lower())
    except ValueError:
        return default


def _env_log_level(env: Mapping[str, str], default: str) -> str:
    raw = env.get(ENV_PREFIX + "LOG_LEVEL")
    if raw is None or raw.strip() == "":
        return default
    level = raw.strip().upper()
    if isinstance(logging.getLevelName(level), int):
        return level
    return default


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment; invalid values fall back to defaults."""
    env = os.environ if env is None else env
    defaults = Settings()
    return Settings(
        histogram_bins=_env_int(env, "HISTOGRAM_BINS", defaults.histogram_bins),
        top_n=_env_int(env, "TOP_N", defaults.top_n),
        quartile_method=_env_quartile_method(env, defaults.quartile_method),
        training_delay=_env_float(env, "TRAINING_DELAY", defaults.training_delay),
        log_level=_env_log_level(env, defaults.log_level),
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
