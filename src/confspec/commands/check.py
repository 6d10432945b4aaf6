"""Command: validate a configuration file against a schema."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from confspec.commands._base import ConfspecCommand, schema_option

if TYPE_CHECKING:
    from confspec.commands._context import AppContext


@click.command(
    cls=ConfspecCommand,
    examples="""\
  confspec check node.toml --schema myapp.settings:NodeSettingsSpec
  confspec check node.yaml --schema myapp.settings:REGISTRY --strict
  confspec --json check node.json""",
)
@click.argument("config_file", type=click.Path(path_type=Path))
@schema_option
@click.option("--strict", is_flag=True, help="Reject keys the schema does not declare.")
@click.option("--lenient", is_flag=True, help="Ignore undeclared keys (overrides config).")
@click.pass_obj
def check(
    app: AppContext,
    config_file: Path,
    schema: str | None,
    strict: bool,
    lenient: bool,
) -> None:
    """Validate CONFIG_FILE and report every error found."""
    from confspec.services.check import CheckService

    strictness = app.strict(strict_flag=strict, lenient_flag=lenient)
    app.emit(CheckService().check(config_file, app.schema_ref(schema), strict=strictness))
