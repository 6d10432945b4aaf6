"""Validated — a value or a non-empty set of validation errors.

INVARIANT: a :class:`Valid` never carries errors and an :class:`Invalid`
always carries at least one.  Errors are de-duplicated while keeping the
order in which they were first reported, so rendering is deterministic.

Usage::

    match spec.parse(tree):
        case Valid(value=settings):
            start(settings)
        case Invalid(errors=errors):
            report(errors)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from confspec.domain.errors import ConfigError
from confspec.domain.exceptions import InvalidConfigurationError

T = TypeVar("T")
U = TypeVar("U")


def _unique(errors: Iterable[ConfigError]) -> tuple[ConfigError, ...]:
    return tuple(dict.fromkeys(errors))


class Validated(Generic[T]):
    """Base of :class:`Valid` and :class:`Invalid`."""

    __slots__ = ()

    @staticmethod
    def valid(value: U) -> Valid[U]:
        return Valid(value)

    @staticmethod
    def invalid(errors: ConfigError | Iterable[ConfigError]) -> Invalid[Any]:
        if isinstance(errors, ConfigError):
            errors = (errors,)
        return Invalid(tuple(errors))

    @staticmethod
    def with_result(value: U, errors: Iterable[ConfigError]) -> Validated[U]:
        """Valid(*value*) when *errors* is empty, Invalid otherwise."""
        collected = _unique(errors)
        if collected:
            return Invalid(collected)
        return Valid(value)

    @property
    def is_valid(self) -> bool:
        return isinstance(self, Valid)

    @property
    def is_invalid(self) -> bool:
        return not self.is_valid


@dataclass(frozen=True, slots=True)
class Valid(Validated[T]):
    value: T

    @property
    def errors(self) -> tuple[ConfigError, ...]:
        return ()

    def map(self, fn: Callable[[T], U]) -> Validated[U]:
        return Valid(fn(self.value))

    def flat_map(self, fn: Callable[[T], Validated[U]]) -> Validated[U]:
        return fn(self.value)

    def map_errors(self, fn: Callable[[ConfigError], ConfigError]) -> Validated[T]:
        return self

    def value_or(self, default: T) -> T:
        return self.value

    def value_or_raise(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Invalid(Validated[T]):
    errors: tuple[ConfigError, ...]

    def __post_init__(self) -> None:
        errors = _unique(self.errors)
        if not errors:
            raise ValueError("Invalid requires at least one error")
        object.__setattr__(self, "errors", errors)

    @property
    def value(self) -> None:
        return None

    def map(self, fn: Callable[[T], U]) -> Validated[U]:
        return Invalid(self.errors)

    def flat_map(self, fn: Callable[[T], Validated[U]]) -> Validated[U]:
        return Invalid(self.errors)

    def map_errors(self, fn: Callable[[ConfigError], ConfigError]) -> Validated[T]:
        return Invalid(tuple(fn(error) for error in self.errors))

    def value_or(self, default: T) -> T:
        return default

    def value_or_raise(self) -> T:
        raise InvalidConfigurationError(self.errors)


def combine(*results: Validated[Any]) -> Validated[tuple[Any, ...]]:
    """Accumulate independent validations.

    Returns Valid with the tuple of all values when every input is valid,
    otherwise Invalid with the errors of every invalid input.
    """
    errors = [error for result in results for error in result.errors]
    if errors:
        return Invalid(tuple(errors))
    return Valid(tuple(result.value for result in results))
