"""PropertyDefinition — the immutable description of one configuration key.

A definition knows its key, where it sits in the tree, whether it is
sensitive, its cardinality (required, optional with a default, or a list)
and how to turn the raw value into a typed one.  Combinators never mutate:
``optional()``, ``list()``, ``map()`` and ``map_raw()`` each return a new
definition, so the same base declaration can be derived several ways.

Conversion errors are relative to the tree holding the property: a
converter reporting ``BadValue.of(key, type_name, message)`` ends up with the
property's full path once the containing path is prepended.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from confspec.config.tree import ConfigTree, split_path
from confspec.domain.errors import ConfigError, MissingValue, WrongType
from confspec.domain.exceptions import SpecificationError
from confspec.domain.validated import Valid, Validated, combine
from confspec.schema.extractors import Extractor
from confspec.schema.options import DEFAULT_OPTIONS

if TYPE_CHECKING:
    from confspec.schema.options import ValidationOptions

T = TypeVar("T")

Converter = Callable[[str, str, Any], Validated[Any]]


class Multiplicity(StrEnum):
    SINGLE = "single"
    LIST = "list"


@dataclass(frozen=True)
class Conversion:
    """One ``map`` step: the declared type name and the converter producing it."""

    type_name: str
    convert: Converter


@dataclass(frozen=True)
class PropertyDefinition(Generic[T]):
    """Typed, immutable description of a configuration property.

    Attributes:
        extractor: Reads the raw primitive value.
        key: Key within the containing object; None until bound.
        sensitive: Never surface the raw value in error messages.
        containing_path: Path of the object holding the key.
        multiplicity: Single value or list of values.
        required: Whether absence is a ``MissingValue`` error.
        default: Value used when an optional property is absent.
        conversions: ``map`` steps applied to each extracted value, in order.
    """

    extractor: Extractor
    key: str | None = None
    sensitive: bool = False
    containing_path: tuple[str, ...] = ()
    multiplicity: Multiplicity = Multiplicity.SINGLE
    required: bool = True
    default: Any = None
    conversions: tuple[Conversion, ...] = ()

    # --- Description ---

    @property
    def element_type_name(self) -> str:
        if self.conversions:
            return self.conversions[-1].type_name
        return self.extractor.type_name

    @property
    def type_name(self) -> str:
        if self.multiplicity is Multiplicity.LIST:
            return f"list[{self.element_type_name}]"
        return self.element_type_name

    @property
    def is_bound(self) -> bool:
        return self.key is not None

    @property
    def is_mandatory(self) -> bool:
        return self.required

    @property
    def is_list(self) -> bool:
        return self.multiplicity is Multiplicity.LIST

    @property
    def path(self) -> tuple[str, ...]:
        return (*self.containing_path, *split_path(self._bound_key()))

    @property
    def dotted_path(self) -> str:
        return ".".join(self.path)

    def _bound_key(self) -> str:
        if self.key is None:
            raise SpecificationError(
                f"Property of type {self.type_name} is not bound to a key"
            )
        return self.key

    # --- Combinators ---

    def _require_plain(self, combinator: str) -> None:
        if not self.required:
            raise SpecificationError(f"{combinator}() cannot follow optional()")
        if self.multiplicity is Multiplicity.LIST:
            raise SpecificationError(f"{combinator}() cannot follow list()")

    def optional(self, default: Any = None) -> PropertyDefinition[Any]:
        """Allow the key to be absent, falling back to *default*."""
        if not self.required:
            raise SpecificationError("optional() cannot be applied twice")
        return dataclasses.replace(self, required=False, default=default)

    def list(self) -> PropertyDefinition[Any]:
        """Expect a list whose elements are read like this property."""
        self._require_plain("list")
        return dataclasses.replace(self, multiplicity=Multiplicity.LIST)

    def map(self, mapped_type_name: str, convert: Converter) -> PropertyDefinition[Any]:
        """Convert the extracted value with a converter that may fail.

        *convert* receives ``(key, mapped_type_name, raw_value)`` and returns a
        :class:`Validated`.
        """
        self._require_plain("map")
        conversion = Conversion(mapped_type_name, convert)
        return dataclasses.replace(self, conversions=(*self.conversions, conversion))

    def map_raw(
        self, convert: Callable[[Any], Any], mapped_type_name: str | None = None
    ) -> PropertyDefinition[Any]:
        """Convert the extracted value with a function that cannot fail."""

        def lift(_key: str, _type_name: str, raw: Any) -> Validated[Any]:
            return Valid(convert(raw))

        return self.map(mapped_type_name or self.element_type_name, lift)

    with_default = optional
    as_list = list
    map_validated = map

    def bind(self, key: str, containing_path: Sequence[str] = ()) -> PropertyDefinition[T]:
        """Return a copy keyed by *key* under *containing_path*."""
        return dataclasses.replace(self, key=key, containing_path=tuple(containing_path))

    # --- Validation ---

    def extract(
        self, tree: ConfigTree, options: ValidationOptions | None = None
    ) -> Validated[T]:
        """Read, type-check and convert the value at this property's path."""
        options = options or DEFAULT_OPTIONS
        *parent, key = self.path
        if not tree.has_path(self.path):
            if self.required:
                return Validated.invalid(MissingValue.of(key, self.type_name, parent))
            return Valid(self.default)

        raw = tree.get(self.path)
        if self.multiplicity is Multiplicity.SINGLE:
            return self._extract_one(raw, self.path, options)

        if not isinstance(raw, list):
            return Validated.invalid(
                WrongType.of(key, self.type_name, ConfigTree.type_name_of(raw), parent)
            )
        items = [
            self._extract_one(item, (*self.path, str(index)), options)
            for index, item in enumerate(raw)
        ]
        return combine(*items).map(list)

    def _extract_one(
        self, raw: Any, path: tuple[str, ...], options: ValidationOptions
    ) -> Validated[Any]:
        result = self.extractor.read(raw, path, options, sensitive=self.sensitive)
        for conversion in self.conversions:
            result = result.flat_map(
                lambda value, conversion=conversion: self._convert(conversion, value, path)
            )
        return result

    def _convert(
        self, conversion: Conversion, raw: Any, path: tuple[str, ...]
    ) -> Validated[Any]:
        result = conversion.convert(self._bound_key(), conversion.type_name, raw)
        if self.sensitive and isinstance(raw, str):
            result = result.map_errors(lambda error: error.redacted(raw))
        element = path[len(self.path) :]
        return result.map_errors(lambda error: self._locate(error, element))

    def _locate(self, error: ConfigError, element: tuple[str, ...]) -> ConfigError:
        # Errors reported at the key expand a dotted key and gain the list index.
        if error.path[:1] == (self.key,):
            key_path = split_path(self._bound_key())
            error = error.model_copy(update={"path": (*key_path, *element, *error.path[1:])})
        return error.with_containing_path(*self.containing_path)

    def validate(
        self, tree: ConfigTree, options: ValidationOptions | None = None
    ) -> Validated[ConfigTree]:
        """Check presence, type and conversions; Valid carries *tree* back."""
        return self.extract(tree, options).map(lambda _: tree)

    def errors_in(
        self, tree: ConfigTree, options: ValidationOptions | None = None
    ) -> tuple[ConfigError, ...]:
        return self.extract(tree, options).errors

    def value_in(self, tree: ConfigTree) -> T:
        """Return the typed value, assuming *tree* already validated.

        Raises:
            InvalidConfigurationError: If the value is missing or malformed.
        """
        return self.extract(tree).value_or_raise()

    def __repr__(self) -> str:
        location = ".".join(self.path) if self.key is not None else "<unbound>"
        flags = [] if self.required else [f"optional(default={self._default_repr()})"]
        if self.sensitive:
            flags.append("sensitive")
        suffix = f" {' '.join(flags)}" if flags else ""
        return f"<PropertyDefinition {location}: {self.type_name}{suffix}>"

    def _default_repr(self) -> str:
        return "****" if self.sensitive and self.default is not None else repr(self.default)
