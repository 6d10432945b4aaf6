"""Root CLI group for confspec with global flags and command registration."""

from __future__ import annotations

import click

from confspec import __version__
from confspec.commands import register_commands
from confspec.commands._context import AppContext
from confspec.config.settings import ConfspecSettings
from confspec.domain.exceptions import ConfigLoadError


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="confspec")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """confspec — validate configuration files against typed schemas."""
    ctx.ensure_object(dict)
    # Unset flags stay None so env vars and confspec.toml still apply.
    try:
        settings = ConfspecSettings.from_cli(
            config_path=config_path,
            json_output=json_output or None,
            quiet=quiet or None,
            verbose=verbose or None,
            log_json=log_json or None,
        )
    except ConfigLoadError as exc:
        raise click.ClickException(str(exc)) from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
