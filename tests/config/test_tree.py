"""Tests for ConfigTree lookup and introspection."""

from datetime import timedelta

import pytest

from confspec.config.tree import ConfigTree, split_path


class TestSplitPath:
    def test_dotted(self) -> None:
        assert split_path("a.b.c") == ("a", "b", "c")

    def test_sequence(self) -> None:
        assert split_path(["a", "b"]) == ("a", "b")

    def test_empty(self) -> None:
        assert split_path("") == ()


class TestConstruction:
    def test_dotted_keys_expand(self) -> None:
        assert ConfigTree({"a.b.c": 1}) == ConfigTree({"a": {"b": {"c": 1}}})

    def test_dotted_keys_merge_into_objects(self) -> None:
        tree = ConfigTree({"configuration.metadata.version": 2, "configuration.value": {"x": 1}})
        assert tree.to_dict() == {
            "configuration": {"metadata": {"version": 2}, "value": {"x": 1}}
        }

    def test_nested_trees_are_unwrapped(self) -> None:
        inner = ConfigTree({"x": 1})
        assert ConfigTree({"outer": inner}).get("outer.x") == 1

    def test_objects_inside_lists_expand(self) -> None:
        tree = ConfigTree({"servers": [{"net.port": 1}]})
        assert tree.get("servers") == [{"net": {"port": 1}}]

    def test_to_dict_is_a_copy(self) -> None:
        tree = ConfigTree({"a": {"b": 1}})
        tree.to_dict()["a"]["b"] = 2
        assert tree.get("a.b") == 1


class TestLookup:
    def test_has_path(self) -> None:
        tree = ConfigTree({"a": {"b": 1, "n": None}})
        assert tree.has_path("a.b")
        assert tree.has_path(("a",))
        assert not tree.has_path("a.c")
        assert not tree.has_path("a.b.c")
        assert not tree.has_path("a.n")
        assert tree.is_null("a.n")
        assert "a.b" in tree

    def test_get_missing_raises(self) -> None:
        with pytest.raises(KeyError):
            ConfigTree({}).get("nope")

    def test_get_tree_projects_subtree(self) -> None:
        tree = ConfigTree({"a": {"b": {"c": 1}}})
        assert tree.get_tree("a.b") == ConfigTree({"c": 1})

    def test_get_tree_on_scalar(self) -> None:
        with pytest.raises(TypeError):
            ConfigTree({"a": 1}).get_tree("a")

    def test_keys(self) -> None:
        assert ConfigTree({"b": 1, "a.x": 2}).keys() == ("b", "a")


class TestTypeNames:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, "null"),
            (True, "boolean"),
            (1, "number"),
            (1.5, "number"),
            ("x", "string"),
            (timedelta(seconds=1), "duration"),
            ([1], "list"),
            ({"a": 1}, "object"),
        ],
    )
    def test_type_name_of(self, value: object, expected: str) -> None:
        assert ConfigTree.type_name_of(value) == expected
