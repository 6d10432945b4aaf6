"""Configuration file loading.

Turns a TOML, JSON or YAML document into a :class:`ConfigTree`.  The format
is picked from the file suffix.  No variable substitution and no includes:
the document is taken as written.
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from confspec.config.tree import ConfigTree
from confspec.domain.exceptions import ConfigLoadError

logger = logging.getLogger(__name__)

TOML_SUFFIXES = frozenset({".toml"})
JSON_SUFFIXES = frozenset({".json"})
YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def _parse_yaml(text: str) -> Any:
    # A fresh parser per document; ruamel's YAML object keeps state between loads.
    return YAML(typ="safe", pure=True).load(text)


def parse_document(text: str, fmt: str) -> ConfigTree:
    """Parse *text* in the given format (``toml``, ``json`` or ``yaml``).

    Raises:
        ConfigLoadError: If the text is malformed or its root is not an object.
    """
    try:
        if fmt == "toml":
            data: Any = tomllib.loads(text)
        elif fmt == "json":
            data = json.loads(text)
        elif fmt == "yaml":
            data = _parse_yaml(text)
        else:
            raise ConfigLoadError(f"Unsupported configuration format: {fmt}")
    except (tomllib.TOMLDecodeError, json.JSONDecodeError, YAMLError) as exc:
        raise ConfigLoadError(f"Invalid {fmt.upper()}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigLoadError(f"Top-level {fmt.upper()} value must be an object")
    return ConfigTree(data)


def format_for(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix in TOML_SUFFIXES:
        return "toml"
    if suffix in JSON_SUFFIXES:
        return "json"
    if suffix in YAML_SUFFIXES:
        return "yaml"
    raise ConfigLoadError(f"Cannot infer configuration format from '{path.name}'")


def load_tree(path: Path | str) -> ConfigTree:
    """Read and parse the configuration file at *path*.

    Raises:
        ConfigLoadError: If the file is missing, unreadable or malformed.
    """
    path = Path(path)
    fmt = format_for(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigLoadError(f"Cannot read {path}: {exc.strerror or exc}") from exc

    try:
        tree = parse_document(text, fmt)
    except ConfigLoadError as exc:
        raise ConfigLoadError(f"{path}: {exc}") from exc
    logger.debug("Loaded %s configuration from %s (%d top-level keys)", fmt, path, len(tree))
    return tree
