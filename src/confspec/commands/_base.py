"""Building blocks shared by confspec commands.

``ConfspecCommand`` adds an eager ``--examples`` flag that prints usage
examples and exits, keeping ``--help`` short.  ``schema_option`` is the
``-s/--schema`` option every schema-driven command accepts.
"""

from __future__ import annotations

from typing import Any

import click

schema_option = click.option(
    "-s",
    "--schema",
    "schema",
    default=None,
    metavar="MODULE:ATTR",
    help="Schema to use, e.g. myapp.settings:NODE_SETTINGS.",
)


class ConfspecCommand(click.Command):
    """A command that can show usage examples on demand."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples and exit.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)
