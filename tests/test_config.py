from __future__ import annotations

from table_insights.config import QuartileMethod, Settings, load_settings


def test_defaults_without_environment() -> None:
    assert load_settings({}) == Settings()
    s = Settings()
    assert s.histogram_bins == 20
    assert s.top_n == 10
    assert s.quartile_method == QuartileMethod.LOWER


def test_environment_overrides() -> None:
    s = load_settings(
        {
            "TABLE_INSIGHTS_HISTOGRAM_BINS": "12",
            "TABLE_INSIGHTS_TOP_N": "5",
            "TABLE_INSIGHTS_QUARTILE_METHOD": "Linear",
            "TABLE_INSIGHTS_TRAINING_DELAY": "0",
            "TABLE_INSIGHTS_LOG_LEVEL": "debug",
        }
    )
    assert (s.histogram_bins, s.top_n) == (12, 5)
    assert s.quartile_method == QuartileMethod.LINEAR
    assert s.training_delay == 0.0
    assert s.log_level == "DEBUG"


def test_invalid_values_fall_back_to_defaults() -> None:
    s = load_settings(
        {
            "TABLE_INSIGHTS_HISTOGRAM_BINS": "-3",
            "TABLE_INSIGHTS_TOP_N": "many",
            "TABLE_INSIGHTS_QUARTILE_METHOD": "median-of-medians",
            "TABLE_INSIGHTS_TRAINING_DELAY": "soon",
            "TABLE_INSIGHTS_LOG_LEVEL": "LOUD",
        }
    )
    assert s == Settings()
