"""AppContext: state shared by every confspec command.

The root group builds one from the resolved :class:`ConfspecSettings` and
passes it down with ``@click.pass_obj``.  Commands ask it which schema and
strictness apply, then hand their :class:`ServiceResult` to :meth:`emit`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from confspec.config.logging import configure_logging
from confspec.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from confspec.config.settings import ConfspecSettings
    from confspec.services.result import ServiceResult


class AppContext:
    """Per-invocation context for confspec commands."""

    def __init__(self, settings: ConfspecSettings) -> None:
        self.settings = settings
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def schema_ref(self, explicit: str | None) -> str:
        """``--schema`` if given, else ``specification`` from the settings."""
        ref = explicit or self.settings.specification
        if not ref:
            raise click.UsageError(
                "No schema given. Pass --schema package.module:attribute "
                "or set 'specification' in confspec.toml."
            )
        return ref

    def strict(self, *, strict_flag: bool = False, lenient_flag: bool = False) -> bool:
        """Strictness for this run: ``--strict``/``--lenient`` beat the settings."""
        if strict_flag and lenient_flag:
            raise click.UsageError("--strict and --lenient are mutually exclusive.")
        if strict_flag or lenient_flag:
            return strict_flag
        return self.settings.strict

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; failures go to stderr and end the process with exit code 1."""
        text = format_result(result, settings=self.output)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)
        click.echo(text)
        if not self.output.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
