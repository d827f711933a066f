"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      : committed static defaults
  2. ``config/local.toml``        : optional local overrides (gitignored)
  3. ``.env``                     : local env overrides (gitignored)
  4. Environment variables        : ``ROI_ADVISOR_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The analysis pipeline and CLI commands receive an ``AppConfig`` instance;
library functions take plain keyword arguments with the same defaults.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class EngineConfig(BaseModel):
    """Fuzzy scoring and recommendation selection."""

    model_config = ConfigDict(frozen=True)

    activation_threshold: float = 0.1
    min_recommendation_score: float = 10
    max_recommendations: int = 8
    activation_task_count: int = 3

    @field_validator("activation_threshold")
    @classmethod
    def validate_threshold(cls, v: float) -> float:
        if not 0.0 <= v < 1.0:
            raise ValueError(f"activation_threshold must be in [0.0, 1.0), got {v}.")
        return v

    @field_validator("max_recommendations", "activation_task_count")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Count must be at least 1, got {v}.")
        return v


class PlanConfig(BaseModel):
    """Next-steps plan bucket sizes."""

    model_config = ConfigDict(frozen=True)

    immediate_cap: int = 3
    short_term_cap: int = 5
    short_term_min: int = 2
    long_term_cap: int = 4
    critical_path_cap: int = 5

    @model_validator(mode="after")
    def validate_short_term(self) -> "PlanConfig":
        if self.short_term_min > self.short_term_cap:
            raise ValueError(
                f"short_term_min ({self.short_term_min}) cannot exceed "
                f"short_term_cap ({self.short_term_cap})."
            )
        return self


class DefaultsConfig(BaseModel):
    """Industry and company size used when a request leaves them blank."""

    model_config = ConfigDict(frozen=True)

    industry: str = "services"
    company_size: str = "11-50"


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class OutputConfig(BaseModel):
    """Where report files are written."""

    model_config = ConfigDict(frozen=True)

    output_dir: str = "data/outputs"


class AppConfig(BaseModel):
    """Complete application configuration, the single source of truth."""

    model_config = ConfigDict(frozen=True)

    engine: EngineConfig = EngineConfig()
    plan: PlanConfig = PlanConfig()
    defaults: DefaultsConfig = DefaultsConfig()
    logging: LoggingConfig = LoggingConfig()
    output: OutputConfig = OutputConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``; when that default file
            is absent, built-in defaults are used.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If an explicit ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    raw: dict[str, Any] = {}
    if config_path is None:
        config_path = root / "config" / "default.toml"
        if config_path.exists():
            raw = _read_toml(config_path)
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                "Pass an existing TOML file or omit --config to use defaults."
            )
        raw = _read_toml(config_path)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        raw = _deep_merge(raw, _read_toml(local_config_path))

    # 3. Apply ROI_ADVISOR_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _read_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply ROI_ADVISOR_* env vars to the raw config dict.

    Supported overrides:
      ROI_ADVISOR_LOG_LEVEL   → raw["logging"]["level"]
      ROI_ADVISOR_OUTPUT_DIR  → raw["output"]["output_dir"]
      ROI_ADVISOR_DEBUG       → raw["debug"]
    """
    if log_level := os.environ.get("ROI_ADVISOR_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if output_dir := os.environ.get("ROI_ADVISOR_OUTPUT_DIR"):
        raw.setdefault("output", {})["output_dir"] = output_dir

    if debug := os.environ.get("ROI_ADVISOR_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        engine=EngineConfig(**raw.get("engine", {})),
        plan=PlanConfig(**raw.get("plan", {})),
        defaults=DefaultsConfig(**raw.get("defaults", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        output=OutputConfig(**raw.get("output", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
