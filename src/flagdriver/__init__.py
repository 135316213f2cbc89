"""Derive UI flags from a prioritised set of boolean states."""

from __future__ import annotations

from loguru import logger

from flagdriver.core.driver import DriverOptions, driver
from flagdriver.core.errors import (
    FlagDriverError,
    FlagResultError,
    InvalidDriverConfig,
    InvalidFlagResolver,
    InvalidStatesInput,
)
from flagdriver.core.evaluator import DriverResult, FlagDriver, evaluate, evaluate_as
from flagdriver.core.resolvers import Computed, Lookup, Membership, computed, lookup, one_of
from flagdriver.core.state import ActiveSelection, build_state_enum, select_active

logger.disable("flagdriver")

__all__ = [
    "ActiveSelection",
    "Computed",
    "DriverOptions",
    "DriverResult",
    "FlagDriver",
    "FlagDriverError",
    "FlagResultError",
    "InvalidDriverConfig",
    "InvalidFlagResolver",
    "InvalidStatesInput",
    "Lookup",
    "Membership",
    "build_state_enum",
    "computed",
    "driver",
    "evaluate",
    "evaluate_as",
    "lookup",
    "one_of",
    "select_active",
]
