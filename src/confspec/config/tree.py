"""ConfigTree — the parsed configuration handed to specifications.

A thin, read-only view over nested mappings as produced by a TOML, JSON or
YAML parser.  Keys containing dots are expanded into nested objects the way
HOCON does, so ``{"a.b": 1}`` and ``{"a": {"b": 1}}`` are the same tree, and
objects that end up under the same key are merged.

Lookups take either a dotted string (``"rpc.addresses.admin"``) or a
sequence of segments.
"""

from __future__ import annotations

import copy
from collections.abc import Iterator, Mapping, Sequence
from datetime import timedelta
from typing import Any

TreePath = str | Sequence[str]

_MISSING = object()


def split_path(path: TreePath) -> tuple[str, ...]:
    """Normalize a dotted string or segment sequence to a tuple of segments."""
    if isinstance(path, str):
        return tuple(path.split(".")) if path else ()
    return tuple(path)


def _normalize(value: Any) -> Any:
    if isinstance(value, ConfigTree):
        return value.to_dict()
    if isinstance(value, Mapping):
        return _expand(value)
    if isinstance(value, list | tuple):
        return [_normalize(item) for item in value]
    return value


def _merge(target: dict[str, Any], key: str, value: Any) -> None:
    existing = target.get(key, _MISSING)
    if isinstance(existing, dict) and isinstance(value, dict):
        for sub_key, sub_value in value.items():
            _merge(existing, sub_key, sub_value)
    else:
        target[key] = value


def _expand(mapping: Mapping[Any, Any]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for raw_key, raw_value in mapping.items():
        segments = split_path(str(raw_key)) or ("",)
        value = _normalize(raw_value)
        for segment in reversed(segments[1:]):
            value = {segment: value}
        _merge(result, segments[0], value)
    return result


class ConfigTree:
    """Immutable hierarchical configuration addressed by path."""

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[Any, Any] | None = None) -> None:
        self._data: dict[str, Any] = _expand(data or {})

    @classmethod
    def empty(cls) -> ConfigTree:
        return cls()

    # --- Lookup ---

    def _lookup(self, path: TreePath) -> Any:
        current: Any = self._data
        for segment in split_path(path):
            if not isinstance(current, dict) or segment not in current:
                return _MISSING
            current = current[segment]
        return current

    def has_path(self, path: TreePath) -> bool:
        """True when *path* exists and is not null."""
        value = self._lookup(path)
        return value is not _MISSING and value is not None

    def is_null(self, path: TreePath) -> bool:
        """True when *path* exists with an explicit null value."""
        return self._lookup(path) is None

    def get(self, path: TreePath) -> Any:
        """Return the raw value at *path*.

        Raises:
            KeyError: If *path* does not exist.
        """
        value = self._lookup(path)
        if value is _MISSING:
            raise KeyError(".".join(split_path(path)))
        return copy.deepcopy(value)

    def get_tree(self, path: TreePath) -> ConfigTree:
        """Project the object at *path* back into a tree.

        Raises:
            KeyError: If *path* does not exist.
            TypeError: If the value at *path* is not an object.
        """
        value = self._lookup(path)
        if value is _MISSING:
            raise KeyError(".".join(split_path(path)))
        if not isinstance(value, dict):
            raise TypeError(f"Value at '{'.'.join(split_path(path))}' is not an object")
        return ConfigTree(value)

    def keys(self) -> tuple[str, ...]:
        return tuple(self._data)

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)

    # --- Introspection ---

    @staticmethod
    def type_name_of(value: Any) -> str:
        """Name the configuration type of a raw value."""
        if value is None:
            return "null"
        if isinstance(value, bool):
            return "boolean"
        if isinstance(value, int | float):
            return "number"
        if isinstance(value, str):
            return "string"
        if isinstance(value, timedelta):
            return "duration"
        if isinstance(value, list | tuple):
            return "list"
        if isinstance(value, Mapping | ConfigTree):
            return "object"
        return type(value).__name__

    # --- Dunder ---

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str | tuple | list):
            return False
        return self.has_path(path)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigTree):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(repr(self._data))

    def __repr__(self) -> str:
        return f"ConfigTree({self._data!r})"
