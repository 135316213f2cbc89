"""Evaluate a flags specification against a states snapshot."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from flagdriver.config import EvaluationSettings
from flagdriver.core.errors import FlagResultError
from flagdriver.core.resolvers import FlagsSpec, Resolver, build_resolvers
from flagdriver.core.state import ActiveSelection, StatesInput, select_active
from flagdriver.logging import get_logger

DriverResult = dict[str, Any]
ModelT = TypeVar("ModelT", bound=BaseModel)

logger = get_logger("evaluator")


def _resolve_all(table: Mapping[str, Resolver], selection: ActiveSelection) -> DriverResult:
    return {flag: resolver.resolve(selection) for flag, resolver in table.items()}


def evaluate(
    states: StatesInput,
    flags: FlagsSpec,
    *,
    settings: EvaluationSettings | None = None,
) -> DriverResult:
    """Select the active state and resolve every flag against it.

    Example:
        >>> evaluate(
        ...     {"isNotRecorded": False, "isUploading": True, "isUploaded": False},
        ...     {
        ...         "isDisabled": ["isNotRecorded", "isUploading"],
        ...         "text": {"isUploading": "Demo Uploading...", "isUploaded": "Download Demo"},
        ...     },
        ... )
        {'isDisabled': True, 'text': 'Demo Uploading...'}

    Raises:
        InvalidStatesInput: If ``states`` is malformed.
        InvalidFlagResolver: If a flag value has no recognised shape. No flag
            is resolved in that case.
    """
    settings = settings or EvaluationSettings()
    selection = select_active(states, strict=settings.strict_booleans)
    table = build_resolvers(
        flags, selection.state_enum if settings.check_state_names else None
    )
    logger.debug(
        "Active state {} (index {}) for {} flags", selection.name, selection.index, len(table)
    )
    return _resolve_all(table, selection)


def evaluate_as(
    model: type[ModelT],
    states: StatesInput,
    flags: FlagsSpec,
    *,
    settings: EvaluationSettings | None = None,
) -> ModelT:
    """Evaluate and validate the result into a pydantic model."""

    result = evaluate(states, flags, settings=settings)
    try:
        return model.model_validate(result)
    except ValidationError as exc:
        raise FlagResultError(f"Flags do not fit {model.__name__}: {exc}") from exc


class FlagDriver:
    """A flags specification validated once and evaluated per snapshot.

    Only the resolver table is kept; nothing from a previous call leaks into
    the next one.
    """

    __slots__ = ("_resolvers", "_settings")

    def __init__(self, flags: FlagsSpec, *, settings: EvaluationSettings | None = None) -> None:
        self._settings = settings or EvaluationSettings()
        self._resolvers: Mapping[str, Resolver] = MappingProxyType(build_resolvers(flags))

    @property
    def flag_names(self) -> tuple[str, ...]:
        return tuple(self._resolvers)

    def select(self, states: StatesInput) -> ActiveSelection:
        return select_active(states, strict=self._settings.strict_booleans)

    def __call__(self, states: StatesInput) -> DriverResult:
        selection = self.select(states)
        if self._settings.check_state_names:
            build_resolvers(self._resolvers, selection.state_enum)
        logger.debug("Active state {} (index {})", selection.name, selection.index)
        return _resolve_all(self._resolvers, selection)

    def __repr__(self) -> str:
        return f"FlagDriver(flags={list(self._resolvers)!r})"
