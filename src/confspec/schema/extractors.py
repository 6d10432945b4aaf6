"""Primitive extractors: read one raw tree value as a declared type.

The set is closed.  Each reader returns a :class:`Validated` instead of
raising, and follows HOCON coercion rules so that a value written as
``port = "8080"`` reads as an integer and ``enabled = "yes"`` as a boolean.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum, StrEnum
from typing import TYPE_CHECKING, Any

from confspec.config.tree import ConfigTree
from confspec.domain.errors import BadValue, WrongType
from confspec.domain.exceptions import SpecificationError
from confspec.domain.validated import Valid, Validated

if TYPE_CHECKING:
    from confspec.schema.options import ValidationOptions
    from confspec.schema.specification import Specification


class ValueType(StrEnum):
    """Primitive types a property can be declared with."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DURATION = "duration"
    ENUM = "enum"
    OBJECT = "object"


_TRUE = frozenset({"true", "yes", "on"})
_FALSE = frozenset({"false", "no", "off"})

_DURATION_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([A-Za-z]*)\s*$")

# Unit name -> seconds.
_DURATION_UNITS: dict[str, float] = {}
for _names, _seconds in (
    (("ns", "nano", "nanos", "nanosecond", "nanoseconds"), 1e-9),
    (("us", "micro", "micros", "microsecond", "microseconds"), 1e-6),
    (("", "ms", "milli", "millis", "millisecond", "milliseconds"), 1e-3),
    (("s", "second", "seconds"), 1.0),
    (("m", "minute", "minutes"), 60.0),
    (("h", "hour", "hours"), 3600.0),
    (("d", "day", "days"), 86400.0),
):
    for _name in _names:
        _DURATION_UNITS[_name] = _seconds


def parse_duration(text: str) -> timedelta | None:
    """Parse a HOCON duration (``"10s"``, ``"5 minutes"``, ``"250"``).

    A bare number is milliseconds.  Returns None when *text* is not a duration.
    """
    match = _DURATION_PATTERN.match(text)
    if match is None:
        return None
    amount, unit = match.groups()
    seconds = _DURATION_UNITS.get(unit.lower())
    if seconds is None:
        return None
    return _timedelta(float(amount) * seconds)


def _timedelta(seconds: float) -> timedelta | None:
    """A timedelta of *seconds*, or None when it is not finite or out of range."""
    try:
        if not math.isfinite(seconds):
            return None
        return timedelta(seconds=seconds)
    except (OverflowError, ValueError):
        return None


@dataclass(frozen=True)
class Extractor:
    """Reads raw values of one :class:`ValueType`.

    Attributes:
        value_type: The primitive type to read.
        enum_class: Enum looked up by member name (``ENUM`` only).
        specification: Schema validating the sub-tree (``OBJECT`` only, optional).
    """

    value_type: ValueType
    enum_class: type[Enum] | None = None
    specification: Specification[Any] | None = None

    def __post_init__(self) -> None:
        if self.value_type is ValueType.ENUM and self.enum_class is None:
            raise SpecificationError("An enum extractor needs an enum class")

    @property
    def type_name(self) -> str:
        if self.value_type is ValueType.ENUM and self.enum_class is not None:
            return self.enum_class.__name__
        return self.value_type.value

    def read(
        self,
        raw: Any,
        path: tuple[str, ...],
        options: ValidationOptions,
        *,
        sensitive: bool = False,
    ) -> Validated[Any]:
        reader = _READERS[self.value_type]
        return reader(self, raw, path, options, sensitive)

    def _wrong_type(self, raw: Any, path: tuple[str, ...]) -> Validated[Any]:
        return Validated.invalid(
            WrongType.of(path[-1], self.type_name, ConfigTree.type_name_of(raw), path[:-1])
        )

    def _bad_value(
        self, raw: Any, path: tuple[str, ...], message: str, sensitive: bool
    ) -> Validated[Any]:
        if not sensitive:
            message = f"{message} (got '{raw}')"
        return Validated.invalid(BadValue.of(path[-1], self.type_name, message, path[:-1]))


Reader = Callable[[Extractor, Any, tuple[str, ...], "ValidationOptions", bool], Validated[Any]]


def _read_string(
    ex: Extractor, raw: Any, path: tuple[str, ...], _o: Any, _s: bool
) -> Validated[Any]:
    if isinstance(raw, str):
        return Valid(raw)
    if isinstance(raw, bool):
        return Valid("true" if raw else "false")
    if isinstance(raw, int | float):
        return Valid(str(raw))
    return ex._wrong_type(raw, path)


def _read_integer(
    ex: Extractor, raw: Any, path: tuple[str, ...], _o: Any, _s: bool
) -> Validated[Any]:
    if isinstance(raw, bool):
        return ex._wrong_type(raw, path)
    if isinstance(raw, int):
        return Valid(raw)
    if isinstance(raw, float) and raw.is_integer():
        return Valid(int(raw))
    if isinstance(raw, str):
        try:
            return Valid(int(raw.strip()))
        except ValueError:
            pass
    return ex._wrong_type(raw, path)


def _read_float(
    ex: Extractor, raw: Any, path: tuple[str, ...], _o: Any, sensitive: bool
) -> Validated[Any]:
    if isinstance(raw, bool):
        return ex._wrong_type(raw, path)
    if isinstance(raw, int | float | str):
        try:
            value = float(raw.strip() if isinstance(raw, str) else raw)
        except ValueError:
            return ex._wrong_type(raw, path)
        except OverflowError:
            value = math.inf
        if not math.isfinite(value):
            return ex._bad_value(raw, path, "Value must be a finite number", sensitive)
        return Valid(value)
    return ex._wrong_type(raw, path)


def _read_boolean(
    ex: Extractor, raw: Any, path: tuple[str, ...], _o: Any, _s: bool
) -> Validated[Any]:
    if isinstance(raw, bool):
        return Valid(raw)
    if isinstance(raw, str):
        lowered = raw.strip().lower()
        if lowered in _TRUE:
            return Valid(True)
        if lowered in _FALSE:
            return Valid(False)
    return ex._wrong_type(raw, path)


def _read_duration(
    ex: Extractor, raw: Any, path: tuple[str, ...], _o: Any, sensitive: bool
) -> Validated[Any]:
    if isinstance(raw, timedelta):
        return Valid(raw)
    if isinstance(raw, bool):
        return ex._wrong_type(raw, path)
    if isinstance(raw, int | float | str):
        if isinstance(raw, str):
            parsed = parse_duration(raw)
        else:
            try:
                parsed = _timedelta(raw / 1000)
            except OverflowError:
                parsed = None
        if parsed is None:
            return ex._bad_value(raw, path, "Value is not a valid duration", sensitive)
        return Valid(parsed)
    return ex._wrong_type(raw, path)


def _read_enum(
    ex: Extractor, raw: Any, path: tuple[str, ...], _o: Any, sensitive: bool
) -> Validated[Any]:
    if ex.enum_class is None:
        raise SpecificationError("An enum extractor needs an enum class")
    if isinstance(raw, ex.enum_class):
        return Valid(raw)
    if not isinstance(raw, str):
        return ex._wrong_type(raw, path)
    try:
        return Valid(ex.enum_class[raw])
    except KeyError:
        choices = ", ".join(member.name for member in ex.enum_class)
        return ex._bad_value(raw, path, f"Value must be one of [{choices}]", sensitive)


def _read_object(
    ex: Extractor, raw: Any, path: tuple[str, ...], options: ValidationOptions, _s: bool
) -> Validated[Any]:
    if not isinstance(raw, Mapping | ConfigTree):
        return ex._wrong_type(raw, path)
    subtree = raw if isinstance(raw, ConfigTree) else ConfigTree(raw)
    if ex.specification is None:
        return Valid(subtree)
    return (
        ex.specification.validate_nested(subtree, options)
        .map_errors(lambda error: error.with_containing_path(*path))
        .map(lambda _: subtree)
    )


_READERS: Mapping[ValueType, Reader] = {
    ValueType.STRING: _read_string,
    ValueType.INTEGER: _read_integer,
    ValueType.FLOAT: _read_float,
    ValueType.BOOLEAN: _read_boolean,
    ValueType.DURATION: _read_duration,
    ValueType.ENUM: _read_enum,
    ValueType.OBJECT: _read_object,
}
