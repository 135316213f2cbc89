"""Settings models and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


class AppPaths(BaseModel):
    """Resolved directories for flagdriver runtime files."""

    base_dir: Path = Field(
        default_factory=lambda: Path(os.getenv("FLAGDRIVER_HOME", Path.home() / ".flagdriver"))
    )

    @property
    def logs_dir(self) -> Path:
        return self.base_dir / "logs"

    def ensure(self) -> None:
        for path in (self.base_dir, self.logs_dir):
            path.mkdir(parents=True, exist_ok=True)


class EvaluationSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Reject state values that are not real bools instead of coercing them.
    strict_booleans: bool = False
    # Membership names and lookup keys must name a declared state.
    check_state_names: bool = False


class DriverSettings(BaseModel):
    app_name: str = "flagdriver"
    log_level: LogLevel = "INFO"
    paths: AppPaths = Field(default_factory=AppPaths)
    evaluation: EvaluationSettings = Field(default_factory=EvaluationSettings)


def _maybe_bool(value: str | None) -> bool | None:
    if value is None:
        return None
    lowered = value.lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off"}:
        return False
    return None


def load_settings(env_path: Path | None = None) -> DriverSettings:
    """Load settings from environment variables and defaults."""

    env_file = env_path or Path('.env')
    if env_file.exists():
        load_dotenv(env_file)

    overrides: dict[str, Any] = {}

    if level := os.getenv('FLAGDRIVER_LOG_LEVEL'):
        overrides['log_level'] = level.upper()

    if (strict := _maybe_bool(os.getenv('FLAGDRIVER_STRICT_BOOLEANS'))) is not None:
        overrides.setdefault('evaluation', {})['strict_booleans'] = strict

    if (check := _maybe_bool(os.getenv('FLAGDRIVER_CHECK_STATE_NAMES'))) is not None:
        overrides.setdefault('evaluation', {})['check_state_names'] = check

    settings = DriverSettings(**overrides)
    settings.paths.ensure()
    return settings
