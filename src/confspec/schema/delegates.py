"""Property delegates — how properties are declared on a specification.

A delegate is a declaration waiting for a key::

    class RpcSettingsSpec(Specification[RpcSettings]):
        use_ssl = boolean()
        port = integer("rpcPort").optional(10003)

Combinators return new delegates and register nothing.  Only the delegate
that ends up assigned to a class attribute is seen by the specification,
so ``string().list().optional()`` registers exactly once.  When no key is
given, the attribute name is used.

Registration itself happens when the specification is instantiated (see
:class:`~confspec.schema.specification.SpecificationBuilder`); reading the
attribute on that instance returns the cached, keyed
:class:`~confspec.schema.property.PropertyDefinition`.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeVar, overload

from confspec.config.tree import ConfigTree
from confspec.domain.exceptions import SpecificationError
from confspec.schema.extractors import Extractor, ValueType
from confspec.schema.property import Converter, PropertyDefinition

if TYPE_CHECKING:
    from datetime import timedelta

    from confspec.schema.specification import Specification

T = TypeVar("T")
E = TypeVar("E", bound=Enum)


class PropertyDelegate(Generic[T]):
    """Unbound property declaration; a descriptor on specification classes."""

    def __init__(self, definition: PropertyDefinition[T], key: str | None = None) -> None:
        self._definition = definition
        self._key = key
        self._owner: type | None = None
        self._attribute: str | None = None

    def __set_name__(self, owner: type, name: str) -> None:
        if self._owner is not None and self._owner is not owner:
            raise SpecificationError(
                f"Property '{self._key or name}' is already declared on "
                f"{self._owner.__name__} and cannot be shared with {owner.__name__}"
            )
        self._owner = owner
        self._attribute = name

    @property
    def attribute(self) -> str | None:
        return self._attribute

    @property
    def key(self) -> str:
        key = self._key or self._attribute
        if key is None:
            raise SpecificationError("Property has no explicit key and is not a class attribute")
        return key

    @property
    def definition(self) -> PropertyDefinition[T]:
        """The unbound definition this delegate will bind."""
        return self._definition

    def provide(self, containing_path: Sequence[str] = ()) -> PropertyDefinition[T]:
        """Create the keyed definition for a specification rooted at *containing_path*."""
        return self._definition.bind(self.key, containing_path)

    @overload
    def __get__(self, instance: None, owner: type) -> PropertyDelegate[T]: ...

    @overload
    def __get__(self, instance: Specification[Any], owner: type) -> PropertyDefinition[T]: ...

    def __get__(
        self, instance: Specification[Any] | None, owner: type
    ) -> PropertyDelegate[T] | PropertyDefinition[T]:
        if instance is None:
            return self
        return instance.definition_for(self)

    # --- Combinators ---

    def _derive(self, definition: PropertyDefinition[Any]) -> PropertyDelegate[Any]:
        return PropertyDelegate(definition, self._key)

    def optional(self, default: T | None = None) -> PropertyDelegate[T | None]:
        return self._derive(self._definition.optional(default))

    def list(self) -> PropertyDelegate[list[T]]:
        return self._derive(self._definition.list())

    def map(self, mapped_type_name: str, convert: Converter) -> PropertyDelegate[Any]:
        return self._derive(self._definition.map(mapped_type_name, convert))

    def map_raw(
        self, convert: Callable[[T], Any], mapped_type_name: str | None = None
    ) -> PropertyDelegate[Any]:
        return self._derive(self._definition.map_raw(convert, mapped_type_name))

    def __repr__(self) -> str:
        key = self._key or self._attribute or "<unbound>"
        return f"<PropertyDelegate {key}: {self._definition.type_name}>"


def _declare(value_type: ValueType, key: str | None, sensitive: bool) -> PropertyDelegate[Any]:
    return PropertyDelegate(PropertyDefinition(Extractor(value_type), sensitive=sensitive), key)


def string(key: str | None = None, *, sensitive: bool = False) -> PropertyDelegate[str]:
    return _declare(ValueType.STRING, key, sensitive)


def integer(key: str | None = None, *, sensitive: bool = False) -> PropertyDelegate[int]:
    return _declare(ValueType.INTEGER, key, sensitive)


def double(key: str | None = None, *, sensitive: bool = False) -> PropertyDelegate[float]:
    return _declare(ValueType.FLOAT, key, sensitive)


def boolean(key: str | None = None, *, sensitive: bool = False) -> PropertyDelegate[bool]:
    return _declare(ValueType.BOOLEAN, key, sensitive)


def duration(key: str | None = None, *, sensitive: bool = False) -> PropertyDelegate[timedelta]:
    return _declare(ValueType.DURATION, key, sensitive)


def enum(
    enum_class: type[E], key: str | None = None, *, sensitive: bool = False
) -> PropertyDelegate[E]:
    """Declare a property read as an *enum_class* member, looked up by name."""
    extractor = Extractor(ValueType.ENUM, enum_class=enum_class)
    return PropertyDelegate(PropertyDefinition(extractor, sensitive=sensitive), key)


def nested_object(
    specification: Specification[Any] | None = None,
    key: str | None = None,
    *,
    sensitive: bool = False,
) -> PropertyDelegate[ConfigTree]:
    """Declare an object-valued property.

    The raw value is the sub-tree.  When *specification* is given, the sub-tree
    is validated against it and its errors are reported under this key.
    """
    extractor = Extractor(ValueType.OBJECT, specification=specification)
    return PropertyDelegate(PropertyDefinition(extractor, sensitive=sensitive), key)


def nested(
    specification: Specification[T], key: str | None = None, *, sensitive: bool = False
) -> PropertyDelegate[T]:
    """Declare an object-valued property parsed by *specification*."""
    return nested_object(specification, key, sensitive=sensitive).map(
        specification.name, specification.parse_nested
    )
