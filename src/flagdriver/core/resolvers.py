"""Flag resolver variants and shape-based dispatch."""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable, Mapping, Sequence, Set
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from flagdriver.core.errors import InvalidFlagResolver
from flagdriver.core.state import ActiveSelection

ComputeFn = Callable[[Mapping[str, bool], Mapping[str, int], int | None], Any]


@dataclass(slots=True, frozen=True)
class Computed:
    fn: ComputeFn

    def resolve(self, selection: ActiveSelection) -> Any:
        return self.fn(selection.states, selection.state_enum, selection.index)

    def state_names(self) -> tuple[str, ...]:
        return ()


@dataclass(slots=True, frozen=True)
class Membership:
    names: tuple[str, ...]

    def resolve(self, selection: ActiveSelection) -> bool:
        return selection.name is not None and selection.name in self.names

    def state_names(self) -> tuple[str, ...]:
        return self.names


@dataclass(slots=True, frozen=True)
class Lookup:
    values: Mapping[str, Any]

    def resolve(self, selection: ActiveSelection) -> Any:
        if selection.name is None:
            return None
        return self.values.get(selection.name)

    def state_names(self) -> tuple[str, ...]:
        return tuple(self.values)


Resolver = Computed | Membership | Lookup
FlagsSpec = Mapping[str, Any]


def _check_explicit(flag: str | None, resolver: Resolver) -> Resolver:
    if isinstance(resolver, Computed):
        if not callable(resolver.fn):
            raise InvalidFlagResolver(
                flag, resolver, f"computed resolver needs a callable, got {type(resolver.fn).__name__}"
            )
    elif isinstance(resolver, Membership):
        if not isinstance(resolver.names, tuple):
            raise InvalidFlagResolver(
                flag, resolver, f"membership names must be a tuple, got {type(resolver.names).__name__}"
            )
        bad_names = [name for name in resolver.names if not isinstance(name, str)]
        if bad_names:
            raise InvalidFlagResolver(
                flag, resolver, f"membership entries must be state names, got {bad_names!r}"
            )
    else:
        if not isinstance(resolver.values, Mapping):
            raise InvalidFlagResolver(
                flag, resolver, f"lookup values must be a mapping, got {type(resolver.values).__name__}"
            )
        bad_keys = [key for key in resolver.values if not isinstance(key, str)]
        if bad_keys:
            raise InvalidFlagResolver(
                flag, resolver, f"lookup keys must be state names, got {bad_keys!r}"
            )
    return resolver


def computed(fn: ComputeFn) -> Computed:
    return _check_explicit(None, Computed(fn))


def one_of(*names: str) -> Membership:
    if len(names) == 1 and not isinstance(names[0], str) and isinstance(names[0], Iterable):
        names = tuple(names[0])
    return _check_explicit(None, Membership(tuple(names)))


def lookup(values: Mapping[str, Any] | None = None, /, **kwargs: Any) -> Lookup:
    merged = dict(values or {})
    merged.update(kwargs)
    return _check_explicit(None, Lookup(MappingProxyType(merged)))


def as_resolver(flag: str, value: Any) -> Resolver:
    """Interpret a declared flag value by its runtime shape.

    Order matters: explicit resolver objects first, then mappings (Lookup),
    then string collections (Membership), then any other callable (Computed).
    A ``str`` is a sequence too but is never treated as Membership.
    """
    if isinstance(value, (Computed, Membership, Lookup)):
        return _check_explicit(flag, value)
    if isinstance(value, Mapping):
        bad_keys = [key for key in value if not isinstance(key, str)]
        if bad_keys:
            raise InvalidFlagResolver(
                flag, value, f"lookup keys must be state names, got {bad_keys!r}"
            )
        return Lookup(MappingProxyType(dict(value)))
    if isinstance(value, (str, bytes, bytearray)):
        raise InvalidFlagResolver(
            flag, value, f"got a bare {type(value).__name__}; wrap state names in a list"
        )
    if isinstance(value, (Sequence, Set)):
        bad_names = [name for name in value if not isinstance(name, str)]
        if bad_names:
            raise InvalidFlagResolver(
                flag, value, f"membership entries must be state names, got {bad_names!r}"
            )
        return Membership(tuple(value))
    if callable(value):
        return Computed(value)
    raise InvalidFlagResolver(flag, value)


def build_resolvers(
    flags: FlagsSpec, known_states: Collection[str] | None = None
) -> dict[str, Resolver]:
    """Coerce every entry of ``flags`` before any of them is resolved.

    When ``known_states`` is given, Membership names and Lookup keys must all
    be declared states.
    """
    if not isinstance(flags, Mapping):
        raise InvalidFlagResolver(
            "<flags>", flags, f"flags must be a mapping, got {type(flags).__name__}"
        )

    table: dict[str, Resolver] = {}
    for flag, value in flags.items():
        resolver = as_resolver(flag, value)
        if known_states is not None:
            unknown = [name for name in resolver.state_names() if name not in known_states]
            if unknown:
                raise InvalidFlagResolver(flag, value, f"unknown states {unknown!r}")
        table[flag] = resolver
    return table
