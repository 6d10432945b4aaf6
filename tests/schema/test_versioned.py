"""Tests for version extraction and version-dispatched parsing."""

from typing import Any

import pytest

from confspec.config.tree import ConfigTree
from confspec.domain.errors import BadValue, MissingValue, UnknownKey, WrongType
from confspec.domain.exceptions import SpecificationError
from confspec.domain.validated import Valid
from confspec.schema import (
    ValidationOptions,
    VersionedSpecificationRegistry,
    VersionExtractor,
)
from tests.conftest import addresses
from tests.schemas import (
    ENDPOINTS,
    ENDPOINTS_V1,
    ENDPOINTS_V2,
    VERSION_PATH,
    Endpoints,
    NetworkHostAndPort,
)

EXPECTED = Endpoints(NetworkHostAndPort("localhost", 8080), NetworkHostAndPort("127.0.0.1", 8081))


def v1_tree(**extra: Any) -> ConfigTree:
    return ConfigTree(
        {
            "configuration.metadata.version": 1,
            "principalHost": "localhost",
            "principalPort": 8080,
            "adminHost": "127.0.0.1",
            "adminPort": 8081,
            **extra,
        }
    )


def v2_tree(version: int | None = 2, **value: Any) -> ConfigTree:
    data: dict[str, Any] = {"configuration.value.addresses": addresses(), **value}
    if version is not None:
        data["configuration.metadata.version"] = version
    return ConfigTree(data)


class TestVersionExtractor:
    def test_reads_version(self) -> None:
        extractor = VersionExtractor.from_key(VERSION_PATH)
        assert extractor.parse(v1_tree()) == Valid(1)

    def test_missing_without_default(self) -> None:
        result = VersionExtractor.from_key(VERSION_PATH).parse(ConfigTree())

        assert len(result.errors) == 1
        error = result.errors[0]
        assert isinstance(error, MissingValue)
        assert error.path == ("configuration", "metadata", "version")

    def test_missing_with_default(self) -> None:
        extractor = VersionExtractor.from_key(VERSION_PATH, default_version=2)
        assert extractor.parse(ConfigTree()) == Valid(2)

    def test_not_an_integer(self) -> None:
        tree = ConfigTree({"configuration.metadata.version": "two"})
        error = VersionExtractor.from_key(VERSION_PATH).parse(tree).errors[0]
        assert isinstance(error, WrongType)
        assert error.dotted_path == VERSION_PATH

    def test_numeric_string(self) -> None:
        tree = ConfigTree({"configuration.metadata.version": "2"})
        assert VersionExtractor.from_key(VERSION_PATH).parse(tree) == Valid(2)

    def test_default_path(self) -> None:
        tree = ConfigTree({"configuration_metadata": {"version": 3}})
        assert VersionExtractor.from_key()(tree) == Valid(3)

    def test_ignores_strict_mode(self) -> None:
        extractor = VersionExtractor.from_key(VERSION_PATH)
        assert extractor.parse(v1_tree(), ValidationOptions(strict=True)) == Valid(1)

    def test_empty_path_rejected(self) -> None:
        with pytest.raises(SpecificationError):
            VersionExtractor("")


class TestSelect:
    def test_selects_by_version(self) -> None:
        assert ENDPOINTS.select(v1_tree()).value is ENDPOINTS_V1
        assert ENDPOINTS.select(v2_tree()).value is ENDPOINTS_V2

    def test_unknown_version(self) -> None:
        result = ENDPOINTS.select(v2_tree(version=3))

        error = result.errors[0]
        assert isinstance(error, BadValue)
        assert error.path == ("configuration", "metadata", "version")
        assert "Unsupported configuration version 3" in error.message
        assert "1, 2" in error.message

    def test_default_version(self) -> None:
        registry = VersionedSpecificationRegistry.mapping(
            VersionExtractor.from_key(VERSION_PATH, default_version=2),
            {1: ENDPOINTS_V1, 2: ENDPOINTS_V2},
        )
        assert registry.select(v2_tree(version=None)).value is ENDPOINTS_V2

    def test_callable_version_source(self) -> None:
        registry = VersionedSpecificationRegistry.mapping(
            lambda tree: Valid(2),
            [(1, ENDPOINTS_V1), (2, ENDPOINTS_V2)],
            version_path=VERSION_PATH,
        )
        assert registry.select(ConfigTree()).value is ENDPOINTS_V2

    def test_callable_source_needs_path(self) -> None:
        with pytest.raises(SpecificationError, match="version_path"):
            VersionedSpecificationRegistry.mapping(lambda tree: Valid(2), {2: ENDPOINTS_V2})


class TestParse:
    def test_layouts_parse_to_equal_values(self) -> None:
        first = ENDPOINTS.parse(v1_tree())
        second = ENDPOINTS.parse(v2_tree())

        assert first.value == EXPECTED
        assert second.value == EXPECTED

    def test_missing_version(self) -> None:
        result = ENDPOINTS.parse(v2_tree(version=None))
        assert [e.dotted_path for e in result.errors] == [VERSION_PATH]
        assert isinstance(result.errors[0], MissingValue)

    def test_errors_from_selected_layout(self) -> None:
        result = ENDPOINTS.parse(v1_tree(adminPort="eighty"))
        assert [e.dotted_path for e in result.errors] == ["adminPort"]

    def test_nested_errors_under_prefix(self) -> None:
        tree = v2_tree(**{"configuration.value.addresses.admin": "localhost:0"})
        result = ENDPOINTS.parse(tree)
        assert [e.path for e in result.errors] == [
            ("configuration", "value", "addresses", "admin")
        ]

    def test_strict_exempts_version_key(self) -> None:
        strict = ValidationOptions(strict=True)
        assert ENDPOINTS.parse(v1_tree(), strict).value == EXPECTED
        assert ENDPOINTS.parse(v2_tree(), strict).value == EXPECTED

    def test_strict_reports_other_keys(self) -> None:
        strict = ValidationOptions(strict=True)

        flat = ENDPOINTS.parse(v1_tree(bogus=True), strict)
        assert flat.errors == (UnknownKey.of("bogus"),)

        layered = ENDPOINTS.parse(v2_tree(**{"configuration.value.extra": 1}), strict)
        assert layered.errors == (UnknownKey.of("extra", ("configuration", "value")),)

    def test_cross_property_check(self) -> None:
        result = ENDPOINTS.parse(v1_tree(adminPort=0))
        assert len(result.errors) == 1
        assert "host(String):port(Int > 0)" in result.errors[0].message


class TestRegistry:
    def test_versions_sorted(self) -> None:
        registry = VersionedSpecificationRegistry.mapping(
            VersionExtractor.from_key(VERSION_PATH), {2: ENDPOINTS_V2, 1: ENDPOINTS_V1}
        )
        assert registry.versions == (1, 2)
        assert registry.version_path == ("configuration", "metadata", "version")

    def test_empty_registry_rejected(self) -> None:
        with pytest.raises(SpecificationError):
            VersionedSpecificationRegistry.mapping(VersionExtractor.from_key(), {})

    def test_describe(self) -> None:
        described = ENDPOINTS.describe()
        assert list(described) == [1, 2]
        assert described[2][0]["path"] == "configuration.value.addresses"


class TestCallableVersionSource:
    @pytest.fixture
    def registry(self) -> VersionedSpecificationRegistry[Endpoints]:
        extractor = VersionExtractor.from_key(VERSION_PATH)
        return VersionedSpecificationRegistry.mapping(
            lambda tree: extractor.parse(tree),
            {1: ENDPOINTS_V1, 2: ENDPOINTS_V2},
            version_path=VERSION_PATH,
        )

    def test_version_path_taken_from_argument(
        self, registry: VersionedSpecificationRegistry[Endpoints]
    ) -> None:
        assert registry.version_path == ("configuration", "metadata", "version")

    def test_strict_exempts_version_key(
        self, registry: VersionedSpecificationRegistry[Endpoints]
    ) -> None:
        strict = ValidationOptions(strict=True)
        assert registry.parse(v1_tree(), strict).value == EXPECTED
        assert registry.parse(v2_tree(), strict).value == EXPECTED

    def test_unknown_version_reported_at_version_path(
        self, registry: VersionedSpecificationRegistry[Endpoints]
    ) -> None:
        result = registry.parse(v2_tree(version=7))

        assert len(result.errors) == 1
        error = result.errors[0]
        assert isinstance(error, BadValue)
        assert error.path == ("configuration", "metadata", "version")
        assert "Unsupported configuration version 7" in error.message
