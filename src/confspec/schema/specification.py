"""Specification — a named, ordered set of property definitions.

Declare a specification by subclassing and assigning delegates::

    class AddressesSpec(Specification[Addresses]):
        principal = string().map("Address", parse_address)
        admin = string().map("Address", parse_address)

        def parse_valid(self, tree: ConfigTree) -> Addresses:
            return Addresses(self.principal.value_in(tree), self.admin.value_in(tree))

Instantiating the class registers every declared property exactly once and
seals the property set.  After that the instance is read-only and can be
shared between threads: :meth:`validate` and :meth:`parse` are pure
functions of ``(specification, tree, options)``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from confspec.config.tree import ConfigTree, TreePath, split_path
from confspec.domain.errors import ConfigError, UnknownKey
from confspec.domain.exceptions import SpecificationError
from confspec.domain.validated import Valid, Validated
from confspec.schema.delegates import PropertyDelegate
from confspec.schema.options import DEFAULT_OPTIONS, ValidationOptions
from confspec.schema.property import PropertyDefinition

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SpecificationBuilder:
    """Collects property definitions while a specification is constructed.

    INVARIANT: keys are unique, and nothing can be registered once sealed.
    """

    def __init__(self, specification_name: str) -> None:
        self._specification_name = specification_name
        self._properties: dict[str, PropertyDefinition[Any]] = {}
        self._sealed = False

    def register(self, definition: PropertyDefinition[T]) -> PropertyDefinition[T]:
        if self._sealed:
            raise SpecificationError(
                f"Specification '{self._specification_name}' is sealed; "
                f"cannot register '{definition.key}'"
            )
        key = definition.key
        if key is None:
            raise SpecificationError("Cannot register a property without a key")
        if key in self._properties:
            raise SpecificationError(
                f"Duplicate property key '{key}' in specification '{self._specification_name}'"
            )
        self._properties[key] = definition
        return definition

    def seal(self) -> tuple[PropertyDefinition[Any], ...]:
        self._sealed = True
        return tuple(self._properties.values())


def _declared_delegates(cls: type) -> Iterator[tuple[str, PropertyDelegate[Any]]]:
    """Yield ``(attribute, delegate)`` in declaration order, base classes first."""
    found: dict[str, PropertyDelegate[Any]] = {}
    for klass in reversed(cls.__mro__):
        for name, value in vars(klass).items():
            if isinstance(value, PropertyDelegate):
                found[name] = value
            elif name in found:
                # Overridden by a plain attribute in a subclass.
                del found[name]
    yield from found.items()


class Specification(Generic[T]):
    """Schema for one configuration section.

    Args:
        name: Display name; defaults to the class name.
        prefix: Path under which every property is looked up.
        reject_unknown_nested: When False, strict mode does not report unknown
            keys inside this specification while it is validated as a nested
            object of another specification.
    """

    def __init__(
        self,
        name: str | None = None,
        prefix: TreePath | None = None,
        *,
        reject_unknown_nested: bool = True,
    ) -> None:
        self.name = name or type(self).__name__
        self.prefix: tuple[str, ...] = split_path(prefix) if prefix else ()
        self.reject_unknown_nested = reject_unknown_nested

        builder = SpecificationBuilder(self.name)
        bound: dict[PropertyDelegate[Any], PropertyDefinition[Any]] = {}
        for _attribute, delegate in _declared_delegates(type(self)):
            bound[delegate] = builder.register(delegate.provide(self.prefix))
        self._bound = MappingProxyType(bound)
        self._properties = builder.seal()
        logger.debug(
            "Specification %s sealed with %d properties", self.name, len(self._properties)
        )

    # --- Registered properties ---

    @property
    def properties(self) -> tuple[PropertyDefinition[Any], ...]:
        return self._properties

    @property
    def property_keys(self) -> tuple[str, ...]:
        return tuple(definition.key for definition in self._properties if definition.key)

    def definition_for(self, delegate: PropertyDelegate[Any]) -> PropertyDefinition[Any]:
        """Return the definition registered for *delegate* on this instance."""
        try:
            return self._bound[delegate]
        except KeyError:
            raise SpecificationError(
                f"Property '{delegate.key}' is not declared on specification '{self.name}'"
            ) from None

    # --- Validation ---

    def validate(
        self, tree: ConfigTree, options: ValidationOptions | None = None
    ) -> Validated[ConfigTree]:
        """Validate every property against *tree*, collecting all errors."""
        options = options or DEFAULT_OPTIONS
        errors: list[ConfigError] = []
        for definition in self._properties:
            errors.extend(definition.errors_in(tree, options))
        if options.strict:
            errors.extend(self._unknown_keys(tree, options))
        result = Validated.with_result(tree, errors)
        logger.debug(
            "Validated %s (strict=%s): %d error(s)", self.name, options.strict, len(result.errors)
        )
        return result

    def validate_nested(
        self, tree: ConfigTree, options: ValidationOptions
    ) -> Validated[ConfigTree]:
        """Validate *tree* as the value of an object property of another schema."""
        nested_options = options.model_copy(update={"exempt_paths": ()})
        if not self.reject_unknown_nested:
            nested_options = nested_options.lenient()
        return self.validate(tree, nested_options)

    def _unknown_keys(self, tree: ConfigTree, options: ValidationOptions) -> list[ConfigError]:
        if self.prefix:
            if not tree.has_path(self.prefix):
                return []
            try:
                scope = tree.get_tree(self.prefix)
            except TypeError:
                return []
        else:
            scope = tree
        # A dotted key such as "rpc.address" claims its first segment.
        known = {split_path(key)[0] for key in self.property_keys}
        return [
            UnknownKey.of(key, self.prefix)
            for key in scope.keys()
            if key not in known and not options.is_exempt((*self.prefix, key))
        ]

    # --- Parsing ---

    def parse(self, tree: ConfigTree, options: ValidationOptions | None = None) -> Validated[T]:
        """Validate *tree* and, only if valid, build the typed value."""
        return self.validate(tree, options).flat_map(self._construct)

    def _construct(self, tree: ConfigTree) -> Validated[T]:
        result = self.parse_valid(tree)
        if isinstance(result, Validated):
            return result
        return Valid(result)

    def parse_valid(self, tree: ConfigTree) -> T | Validated[T]:
        """Build the typed value from an already validated tree.

        Every property is known to be present and well-typed here, so
        ``definition.value_in(tree)`` does not fail.  May return a plain value
        or a :class:`Validated` for cross-property checks.
        """
        raise NotImplementedError(f"{type(self).__name__} must implement parse_valid()")

    def parse_nested(self, key: str, type_name: str, raw: ConfigTree) -> Validated[T]:
        """Converter for ``nested_object(spec).map(spec.name, spec.parse_nested)``."""
        return self.parse(raw).map_errors(lambda error: error.with_containing_path(key))

    # --- Introspection ---

    def describe(self) -> list[dict[str, Any]]:
        """Summaries of the registered properties, defaults masked when sensitive."""
        rows: list[dict[str, Any]] = []
        for definition in self._properties:
            default = definition.default
            if definition.sensitive and default is not None:
                default = "****"
            rows.append(
                {
                    "key": definition.key,
                    "path": definition.dotted_path,
                    "type": definition.type_name,
                    "required": definition.required,
                    "list": definition.is_list,
                    "sensitive": definition.sensitive,
                    "default": default,
                }
            )
        return rows

    def __repr__(self) -> str:
        prefix = f" prefix={'.'.join(self.prefix)}" if self.prefix else ""
        keys = list(self.property_keys)
        return f"<{type(self).__name__} {self.name!r}{prefix} properties={keys}>"
