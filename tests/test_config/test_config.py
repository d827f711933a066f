"""
Tests for roi_advisor/config.py.

What we test
------------
- Built-in defaults match config/default.toml.
- Explicit TOML file values override defaults; local.toml merges on top.
- Missing explicit path raises FileNotFoundError.
- ROI_ADVISOR_* environment overrides.
- Validation: log level, activation threshold, plan bucket sizes.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from roi_advisor.config import (
    AppConfig,
    EngineConfig,
    LoggingConfig,
    PlanConfig,
    load_config,
)

_ENV_VARS = ("ROI_ADVISOR_LOG_LEVEL", "ROI_ADVISOR_OUTPUT_DIR", "ROI_ADVISOR_DEBUG")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestLoadConfig:
    def test_default_file(self):
        config = load_config()
        assert config.engine.max_recommendations == 8
        assert config.engine.activation_threshold == pytest.approx(0.1)
        assert config.plan.immediate_cap == 3
        assert config.defaults.company_size == "11-50"
        assert config.debug is False

    def test_matches_builtin_defaults(self):
        assert load_config() == AppConfig()

    def test_explicit_file(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text(
            "[engine]\nmax_recommendations = 5\n\n[defaults]\nindustry = \"retail\"\n",
            encoding="utf-8",
        )
        config = load_config(path)
        assert config.engine.max_recommendations == 5
        assert config.defaults.industry == "retail"
        assert config.engine.min_recommendation_score == 10

    def test_local_overrides_merge(self, tmp_path):
        (tmp_path / "base.toml").write_text(
            "[engine]\nmax_recommendations = 5\nactivation_task_count = 2\n", encoding="utf-8"
        )
        (tmp_path / "local.toml").write_text(
            "[engine]\nmax_recommendations = 12\n", encoding="utf-8"
        )
        config = load_config(tmp_path / "base.toml")
        assert config.engine.max_recommendations == 12
        assert config.engine.activation_task_count == 2

    def test_missing_explicit_path_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_config(tmp_path / "nope.toml")

    def test_env_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ROI_ADVISOR_LOG_LEVEL", "debug")
        monkeypatch.setenv("ROI_ADVISOR_OUTPUT_DIR", str(tmp_path))
        monkeypatch.setenv("ROI_ADVISOR_DEBUG", "true")
        config = load_config()
        assert config.logging.level == "DEBUG"
        assert config.output.output_dir == str(tmp_path)
        assert config.debug is True

    def test_invalid_value_in_file_raises(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("[logging]\nlevel = \"LOUD\"\n", encoding="utf-8")
        with pytest.raises(ValidationError, match="Log level"):
            load_config(path)


class TestSubConfigs:
    def test_log_level_uppercased(self):
        assert LoggingConfig(level="warning").level == "WARNING"

    @pytest.mark.parametrize("threshold", [-0.1, 1.0])
    def test_threshold_range(self, threshold):
        with pytest.raises(ValidationError, match="activation_threshold"):
            EngineConfig(activation_threshold=threshold)

    def test_max_recommendations_positive(self):
        with pytest.raises(ValidationError):
            EngineConfig(max_recommendations=0)

    def test_short_term_min_within_cap(self):
        with pytest.raises(ValidationError, match="short_term_min"):
            PlanConfig(short_term_min=6, short_term_cap=5)

    def test_frozen(self):
        with pytest.raises(ValidationError):
            AppConfig().debug = True  # type: ignore[misc]
