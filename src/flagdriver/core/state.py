"""Active state selection over an ordered snapshot of conditions."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from flagdriver.core.errors import InvalidStatesInput

StatesInput = Mapping[str, Any]


@dataclass(slots=True, frozen=True)
class ActiveSelection:
    """Result of scanning a states snapshot in declaration order."""

    states: Mapping[str, bool]
    state_enum: Mapping[str, int]
    name: str | None = None
    index: int | None = None

    @property
    def is_active(self) -> bool:
        return self.name is not None

    def is_before(self, state: str) -> bool:
        """True when the active state is declared before ``state``."""

        if self.index is None:
            return False
        try:
            return self.index < self.state_enum[state]
        except KeyError:
            raise InvalidStatesInput(f"Unknown state: {state}") from None


def build_state_enum(states: StatesInput) -> Mapping[str, int]:
    return MappingProxyType({name: position for position, name in enumerate(states)})


def select_active(states: StatesInput, *, strict: bool = False) -> ActiveSelection:
    """Pick the first truthy entry of ``states``.

    Insertion order is priority order: when several conditions hold, the one
    declared first wins. No truthy entry yields a selection with ``name`` and
    ``index`` set to ``None``.

    Args:
        states: Ordered mapping of state name to a condition value.
        strict: Reject values that are not ``bool`` instead of coercing them.

    Raises:
        InvalidStatesInput: If ``states`` is not a mapping, a key is not a
            non-empty string, or ``strict`` is set and a value is not a bool.
    """
    if not isinstance(states, Mapping):
        raise InvalidStatesInput(f"states must be a mapping, got {type(states).__name__}")

    snapshot: dict[str, bool] = {}
    active_name: str | None = None
    active_index: int | None = None

    for position, (name, value) in enumerate(states.items()):
        if not isinstance(name, str) or not name:
            raise InvalidStatesInput(f"State names must be non-empty strings, got {name!r}")
        if strict and not isinstance(value, bool):
            raise InvalidStatesInput(
                f"State '{name}' must be a bool in strict mode, got {type(value).__name__}"
            )
        snapshot[name] = bool(value)
        if active_name is None and snapshot[name]:
            active_name = name
            active_index = position

    return ActiveSelection(
        states=MappingProxyType(snapshot),
        state_enum=build_state_enum(snapshot),
        name=active_name,
        index=active_index,
    )
