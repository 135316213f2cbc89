"""Exceptions raised by the flag driver."""

from __future__ import annotations


class FlagDriverError(Exception):
    """Base class for every error raised by flagdriver."""


class InvalidFlagResolver(FlagDriverError, TypeError):
    def __init__(self, flag: str | None, value: object, reason: str | None = None) -> None:
        self.flag = flag
        self.value = value
        detail = reason or (
            "expected a callable, a sequence of state names or a mapping of state names, "
            f"got {type(value).__name__}"
        )
        if flag is None:
            super().__init__(f"Invalid resolver: {detail}")
        else:
            super().__init__(f"Invalid resolver for flag '{flag}': {detail}")


class InvalidStatesInput(FlagDriverError, ValueError):
    pass


class InvalidDriverConfig(FlagDriverError, ValueError):
    pass


class FlagResultError(FlagDriverError, ValueError):
    pass
