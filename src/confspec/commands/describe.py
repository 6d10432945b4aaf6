"""Command: list the properties a schema declares."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from confspec.commands._base import ConfspecCommand, schema_option

if TYPE_CHECKING:
    from confspec.commands._context import AppContext


@click.command(
    cls=ConfspecCommand,
    examples="""\
  confspec describe --schema myapp.settings:NodeSettingsSpec
  confspec -v describe --schema myapp.settings:REGISTRY""",
)
@schema_option
@click.pass_obj
def describe(app: AppContext, schema: str | None) -> None:
    """Show the keys, types and defaults a schema declares."""
    from confspec.services.check import CheckService

    app.emit(CheckService().describe(app.schema_ref(schema)))
