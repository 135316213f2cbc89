"""Config-object entry point."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from flagdriver.config import EvaluationSettings
from flagdriver.core.errors import InvalidDriverConfig
from flagdriver.core.evaluator import DriverResult, evaluate


class DriverOptions(BaseModel):
    """The two recognised options: ``states`` and ``flags``."""

    model_config = ConfigDict(extra="forbid")

    states: dict[str, Any]
    flags: dict[str, Any]


def parse_options(config: DriverOptions | Mapping[str, Any]) -> DriverOptions:
    if isinstance(config, DriverOptions):
        return config
    if not isinstance(config, Mapping):
        raise InvalidDriverConfig(
            f"Driver config must be a mapping with 'states' and 'flags', got {type(config).__name__}"
        )
    try:
        return DriverOptions.model_validate(dict(config))
    except ValidationError as exc:
        raise InvalidDriverConfig(f"Invalid driver config: {exc}") from exc


def driver(
    config: DriverOptions | Mapping[str, Any],
    *,
    settings: EvaluationSettings | None = None,
) -> DriverResult:
    """Evaluate ``{"states": ..., "flags": ...}`` and return the flags."""

    options = parse_options(config)
    return evaluate(options.states, options.flags, settings=settings)
