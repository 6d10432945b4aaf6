"""CheckService — validate a configuration file against a schema reference."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any

from confspec.config.loader import load_tree
from confspec.domain.exceptions import ConfigLoadError, SpecificationError
from confspec.schema.options import ValidationOptions
from confspec.schema.specification import Specification
from confspec.schema.versioned import VersionedSpecificationRegistry
from confspec.services.result import ServiceResult
from confspec.services.schema_loader import Schema, resolve_specification

logger = logging.getLogger(__name__)


def _plain(value: Any) -> Any:
    """Make a default value JSON-friendly for describe output."""
    if isinstance(value, Enum):
        return value.name
    if value is None or isinstance(value, str | int | float | bool):
        return value
    if isinstance(value, list | tuple):
        return [_plain(item) for item in value]
    return str(value)


def _rows(schema: Specification[Any]) -> list[dict[str, Any]]:
    return [{**row, "default": _plain(row["default"])} for row in schema.describe()]


def _schema_name(schema: Schema) -> str:
    if isinstance(schema, VersionedSpecificationRegistry):
        return "versioned(" + ", ".join(str(v) for v in schema.versions) + ")"
    return schema.name


class CheckService:
    """Runs schema checks for the CLI.

    Data errors become ``issues`` on a failed result; only programming or I/O
    problems (bad schema reference, unreadable file) become ``error``.
    """

    def check(self, config_file: Path, schema_ref: str, *, strict: bool = False) -> ServiceResult:
        """Validate and parse *config_file* with the schema named by *schema_ref*."""
        op = "check"
        try:
            schema = resolve_specification(schema_ref)
        except SpecificationError as exc:
            return ServiceResult.failure(op, "BAD_SCHEMA", str(exc))
        try:
            tree = load_tree(config_file)
        except ConfigLoadError as exc:
            return ServiceResult.failure(
                op, "LOAD_FAILED", str(exc), detail={"file": str(config_file)}
            )

        options = ValidationOptions(strict=strict)
        data: dict[str, Any] = {
            "file": str(config_file),
            "schema": _schema_name(schema),
            "strict": strict,
        }
        if isinstance(schema, VersionedSpecificationRegistry):
            version = schema.extract_version(tree, options)
            if version.is_valid:
                data["version"] = version.value

        result = schema.parse(tree, options)
        if result.is_invalid:
            logger.info("%s failed validation with %d error(s)", config_file, len(result.errors))
            return ServiceResult.failure(
                op,
                "INVALID_CONFIG",
                f"{len(result.errors)} validation error(s) in {config_file}",
                issues=result.errors,
                data=data,
            )
        return ServiceResult(ok=True, op=op, data=data)

    def describe(self, schema_ref: str) -> ServiceResult:
        """List the properties declared by the schema named by *schema_ref*."""
        op = "describe"
        try:
            schema = resolve_specification(schema_ref)
        except SpecificationError as exc:
            return ServiceResult.failure(op, "BAD_SCHEMA", str(exc))
        if isinstance(schema, VersionedSpecificationRegistry):
            versions = {
                version: _rows(spec) for version, spec in sorted(schema.specifications.items())
            }
            return ServiceResult(
                ok=True,
                op=op,
                data={
                    "schema": _schema_name(schema),
                    "version_path": ".".join(schema.version_path),
                    "versions": {str(version): rows for version, rows in versions.items()},
                },
            )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "schema": schema.name,
                "prefix": ".".join(schema.prefix),
                "properties": _rows(schema),
            },
        )
