"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed policy defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``VACATION_PLANNER_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The rule engine and the CLI receive an ``AppConfig`` (or its ``PolicyConfig``
section) — never raw dicts or individual env var lookups scattered through
the codebase.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

logger = logging.getLogger(__name__)

# ── Sub-config models ─────────────────────────────────────────────────────────


class PolicyConfig(BaseModel):
    """HR vacation policy constants used by the rule engine."""

    model_config = ConfigDict(frozen=True)

    min_vacation_days: int = 26
    min_age_for_bonus: int = 30
    bonus_period_years: int = 5
    allowed_start_days: list[int] = [1, 15]

    @field_validator("min_vacation_days", "min_age_for_bonus")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"Policy value must be non-negative, got {v}.")
        return v

    @field_validator("bonus_period_years")
    @classmethod
    def validate_period(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"bonus_period_years must be positive, got {v}.")
        return v

    @field_validator("allowed_start_days")
    @classmethod
    def validate_start_days(cls, v: list[int]) -> list[int]:
        bad = [d for d in v if not 1 <= d <= 31]
        if bad:
            raise ValueError(f"allowed_start_days must be within 1..31, got {bad}.")
        return v


class OutputConfig(BaseModel):
    """Where and how the default output file name is built."""

    model_config = ConfigDict(frozen=True)

    output_dir: str = ""        # empty → current working directory
    file_suffix: str = "vacation"

    @field_validator("file_suffix")
    @classmethod
    def validate_suffix(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("file_suffix must not be empty.")
        return v.strip()


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


class AppConfig(BaseModel):
    """Complete application configuration — the single source of truth.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    ``AppConfig()`` with no arguments gives the built-in policy defaults.
    """

    model_config = ConfigDict(frozen=True)

    policy: PolicyConfig = PolicyConfig()
    output: OutputConfig = OutputConfig()
    logging: LoggingConfig = LoggingConfig()
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
            ``<project_root>/config/default.toml``; when that default file is
            missing the built-in defaults are used instead.

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
        default_path = root / "config" / "default.toml"
        if default_path.exists():
            raw = _read_toml_layers(default_path)
        else:
            logger.debug("No default config at %s; using built-in defaults.", default_path)
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        raw = _read_toml_layers(config_path)

    # 3. Apply VACATION_PLANNER_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _read_toml_layers(config_path: Path) -> dict[str, Any]:
    """Read ``config_path`` and deep-merge a sibling ``local.toml`` if present."""
    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists() and local_config_path != config_path:
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)
    return raw


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
    """Apply VACATION_PLANNER_* env vars to the raw config dict.

    Supported overrides:
      VACATION_PLANNER_LOG_LEVEL  → raw["logging"]["level"]
      VACATION_PLANNER_LOG_FILE   → raw["logging"]["log_file"]
      VACATION_PLANNER_MIN_DAYS   → raw["policy"]["min_vacation_days"]
      VACATION_PLANNER_DEBUG      → raw["debug"]
    """
    if log_level := os.environ.get("VACATION_PLANNER_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if log_file := os.environ.get("VACATION_PLANNER_LOG_FILE"):
        raw.setdefault("logging", {})["log_file"] = log_file

    if min_days := os.environ.get("VACATION_PLANNER_MIN_DAYS"):
        raw.setdefault("policy", {})["min_vacation_days"] = min_days

    if debug := os.environ.get("VACATION_PLANNER_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        policy=PolicyConfig(**raw.get("policy", {})),
        output=OutputConfig(**raw.get("output", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
