"""Version-dispatched parsing.

A configuration carries its schema version at a known path.  The
:class:`VersionExtractor` reads it (falling back to a default when absent,
if one is configured) and :class:`VersionedSpecificationRegistry` picks the
specification registered for that version, so old and new layouts can be
parsed through one entry point::

    registry = VersionedSpecificationRegistry.mapping(
        VersionExtractor.from_key("configuration.metadata.version"),
        {1: RpcSettingsV1(), 2: RpcSettingsV2()},
    )
    settings = registry.parse(tree)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from confspec.config.tree import ConfigTree, TreePath, split_path
from confspec.domain.errors import BadValue
from confspec.domain.exceptions import SpecificationError
from confspec.domain.validated import Valid, Validated
from confspec.schema.delegates import integer
from confspec.schema.options import DEFAULT_OPTIONS, ValidationOptions
from confspec.schema.specification import Specification

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_VERSION_PATH = "configuration_metadata.version"
VERSION_TYPE_NAME = "integer"


def _version_specification(path: tuple[str, ...], default: int | None) -> Specification[int]:
    *containing, key = path
    declared = integer(key) if default is None else integer(key).optional(default)

    class VersionSpecification(Specification[int]):
        version = declared

        def parse_valid(self, tree: ConfigTree) -> int:
            return self.version.value_in(tree)

    return VersionSpecification("Version", prefix=tuple(containing))


class VersionExtractor:
    """Reads the integer version of a configuration tree.

    Absent with a default: the default.  Absent without one: ``MissingValue``
    at the version path.  Present but not an integer: ``WrongType``.
    """

    def __init__(self, path: TreePath, default_version: int | None = None) -> None:
        self.path = split_path(path)
        if not self.path:
            raise SpecificationError("Version path must not be empty")
        self.default_version = default_version
        self._specification = _version_specification(self.path, default_version)

    @classmethod
    def from_key(
        cls, version_path: TreePath = DEFAULT_VERSION_PATH, default_version: int | None = None
    ) -> VersionExtractor:
        return cls(version_path, default_version)

    def parse(self, tree: ConfigTree, options: ValidationOptions | None = None) -> Validated[int]:
        # The version lives next to arbitrary payload keys; never strict here.
        return self._specification.parse(tree, (options or DEFAULT_OPTIONS).lenient())

    __call__ = parse

    def __repr__(self) -> str:
        return f"<VersionExtractor {'.'.join(self.path)} default={self.default_version}>"


VersionSource = VersionExtractor | Callable[[ConfigTree], Validated[int]]


class VersionedSpecificationRegistry(Generic[T]):
    """Maps configuration versions to the specifications that parse them.

    Built once and queried per tree; holds no per-call state.

    Args:
        extract_version: A :class:`VersionExtractor`, or a callable taking the
            tree and returning the version.  Version reading is always lenient,
            so a callable is not handed the validation options.
        specifications: Version number to specification.
        version_path: Where the version lives in the tree.  Defaults to the
            extractor's path; required for a callable source.  Strict parsing
            never reports it as unknown, and unsupported versions are reported
            there.
    """

    def __init__(
        self,
        extract_version: VersionSource,
        specifications: Mapping[int, Specification[T]],
        version_path: TreePath | None = None,
    ) -> None:
        if not specifications:
            raise SpecificationError("A versioned registry needs at least one specification")
        self._extract_version = extract_version
        self._specifications = MappingProxyType(dict(specifications))
        if version_path is not None:
            self.version_path = split_path(version_path)
        elif isinstance(extract_version, VersionExtractor):
            self.version_path = extract_version.path
        else:
            raise SpecificationError(
                "A callable version source needs an explicit version_path"
            )
        if not self.version_path:
            raise SpecificationError("Version path must not be empty")

    @classmethod
    def mapping(
        cls,
        extract_version: VersionSource,
        specifications: Mapping[int, Specification[T]] | Iterable[tuple[int, Specification[T]]],
        version_path: TreePath | None = None,
    ) -> VersionedSpecificationRegistry[T]:
        return cls(extract_version, dict(specifications), version_path)

    @property
    def versions(self) -> tuple[int, ...]:
        return tuple(sorted(self._specifications))

    @property
    def specifications(self) -> Mapping[int, Specification[T]]:
        return self._specifications

    def extract_version(
        self, tree: ConfigTree, options: ValidationOptions | None = None
    ) -> Validated[int]:
        if isinstance(self._extract_version, VersionExtractor):
            return self._extract_version.parse(tree, options)
        return self._extract_version(tree)

    def select(
        self, tree: ConfigTree, options: ValidationOptions | None = None
    ) -> Validated[Specification[T]]:
        """Return the specification matching the version found in *tree*."""
        return self.extract_version(tree, options).flat_map(self._lookup)

    def _lookup(self, version: int) -> Validated[Specification[T]]:
        specification = self._specifications.get(version)
        if specification is None:
            known = ", ".join(str(v) for v in self.versions)
            *containing, key = self.version_path
            return Validated.invalid(
                BadValue.of(
                    key,
                    VERSION_TYPE_NAME,
                    f"Unsupported configuration version {version} (known versions: {known})",
                    containing,
                )
            )
        logger.debug("Selected %s for configuration version %d", specification.name, version)
        return Valid(specification)

    def parse(self, tree: ConfigTree, options: ValidationOptions | None = None) -> Validated[T]:
        """Extract the version, select its specification and parse *tree* with it."""
        options = (options or DEFAULT_OPTIONS).exempting(self.version_path)
        return self.select(tree, options).flat_map(
            lambda specification: specification.parse(tree, options)
        )

    def describe(self) -> dict[int, list[dict[str, Any]]]:
        return {version: self._specifications[version].describe() for version in self.versions}

    def __repr__(self) -> str:
        return f"<VersionedSpecificationRegistry versions={list(self.versions)}>"
