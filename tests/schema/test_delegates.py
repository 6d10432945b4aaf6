"""Tests for property delegates and their factories."""

from typing import Any

import pytest

from confspec.config.tree import ConfigTree
from confspec.domain.exceptions import SpecificationError
from confspec.schema import (
    PropertyDefinition,
    PropertyDelegate,
    Specification,
    ValueType,
    boolean,
    double,
    duration,
    enum,
    integer,
    nested,
    nested_object,
    string,
)
from tests.schemas import ADDRESSES, LogLevel


class TestFactories:
    @pytest.mark.parametrize(
        ("factory", "type_name"),
        [
            (string, "string"),
            (integer, "integer"),
            (double, "float"),
            (boolean, "boolean"),
            (duration, "duration"),
            (nested_object, "object"),
        ],
    )
    def test_type_names(self, factory: Any, type_name: str) -> None:
        assert factory().definition.type_name == type_name

    def test_enum(self) -> None:
        definition = enum(LogLevel).definition
        assert definition.type_name == "LogLevel"
        assert definition.extractor.value_type is ValueType.ENUM

    def test_nested_maps_to_specification_name(self) -> None:
        definition = nested(ADDRESSES).definition
        assert definition.type_name == "Addresses"
        assert definition.extractor.specification is ADDRESSES

    def test_sensitive_flag(self) -> None:
        assert string(sensitive=True).definition.sensitive
        assert not string().definition.sensitive


class TestBinding:
    def test_class_access_returns_delegate(self) -> None:
        class Spec(Specification[Any]):
            host = string()

        assert isinstance(Spec.host, PropertyDelegate)
        assert Spec.host.key == "host"
        assert Spec.host.attribute == "host"

    def test_instance_access_returns_definition(self) -> None:
        class Spec(Specification[Any]):
            host = string("hostName")

        spec = Spec(prefix="server")
        assert isinstance(spec.host, PropertyDefinition)
        assert spec.host.path == ("server", "hostName")

    def test_explicit_key_wins(self) -> None:
        class Spec(Specification[Any]):
            use_ssl = boolean("useSsl")

        assert Spec.use_ssl.key == "useSsl"

    def test_unassigned_delegate_has_no_key(self) -> None:
        with pytest.raises(SpecificationError):
            _ = string().key

    def test_provide_binds_under_path(self) -> None:
        definition = string("host").provide(("a", "b"))
        assert definition.path == ("a", "b", "host")

    def test_combinators_keep_explicit_key(self) -> None:
        assert string("tags").list().optional().key == "tags"

    def test_nested_object_without_specification(self) -> None:
        class Spec(Specification[Any]):
            extra = nested_object()

            def parse_valid(self, tree: ConfigTree) -> Any:
                return self.extra.value_in(tree)

        result = Spec().parse(ConfigTree({"extra": {"anything": [1, 2]}}))
        assert result.value == ConfigTree({"anything": [1, 2]})

    def test_repr(self) -> None:
        assert repr(integer("port").optional(1)) == "<PropertyDelegate port: integer>"
