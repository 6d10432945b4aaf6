"""Rich Console factory and theme for confspec output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CONFSPEC_THEME = Theme(
    {
        "cs.ok": "bold green",
        "cs.error": "bold red",
        "cs.warning": "bold yellow",
        "cs.op": "bold cyan",
        "cs.key": "dim",
        "cs.path": "bold blue",
        "cs.type": "magenta",
        "cs.kind.missing_value": "yellow",
        "cs.kind.wrong_type": "red",
        "cs.kind.bad_value": "red",
        "cs.kind.unknown_key": "cyan",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=CONFSPEC_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    """Return the Rich style name for an error kind."""
    return f"cs.kind.{kind}"
