"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from confspec.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from confspec.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode: one line per issue."""
    if result.ok:
        return f"OK: {result.op}"
    if result.issues:
        return "\n".join(issue.describe() for issue in result.issues)
    msg = result.error.message if result.error else "Unknown error"
    return f"ERROR: {result.op} — {msg}"


# ── Renderers ─────────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    console.print(Text.assemble(("OK", "cs.ok"), ": ", (result.op, "cs.op")))
    for key, value in result.data.items():
        console.print(Text.assemble(("  " + key, "cs.key"), f": {value}"))


def _render_check(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    data = result.data
    summary = Text.assemble(("OK", "cs.ok"), ": ", (str(data.get("file", "")), "cs.path"))
    summary.append(f" is valid for {data.get('schema', '?')}")
    if "version" in data:
        summary.append(f" (version {data['version']})")
    if data.get("strict"):
        summary.append(" [strict]")
    console.print(summary)


def _render_describe(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    data = result.data
    if "versions" in data:
        console.print(
            Text.assemble(("Versioned schema", "cs.op"), f" keyed by {data['version_path']}")
        )
        for version, rows in data["versions"].items():
            console.print(_property_table(f"version {version}", rows, verbose=verbose))
        return
    title = data["schema"]
    if data.get("prefix"):
        title += f" (under {data['prefix']})"
    console.print(_property_table(title, data["properties"], verbose=verbose))


def _property_table(title: str, rows: list[dict[str, Any]], *, verbose: bool) -> Table:
    table = Table(title=title, show_lines=False)
    table.add_column("Key", style="cs.path")
    table.add_column("Type", style="cs.type")
    table.add_column("Required")
    table.add_column("Default")
    if verbose:
        table.add_column("Path", style="cs.key")
        table.add_column("Sensitive")
    for row in rows:
        cells = [
            str(row["key"]),
            str(row["type"]),
            "yes" if row["required"] else "no",
            "" if row["required"] else repr(row["default"]),
        ]
        if verbose:
            cells += [str(row["path"]), "yes" if row["sensitive"] else ""]
        table.add_row(*cells)
    return table


def _render_error(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    message = result.error.message if result.error else "Unknown error"
    console.print(
        Text.assemble(("ERROR", "cs.error"), ": ", (result.op, "cs.op"), f" — {message}")
    )
    if not result.issues:
        return
    table = Table(show_header=True, show_lines=False)
    table.add_column("Path", style="cs.path")
    table.add_column("Kind")
    table.add_column("Message")
    if verbose:
        table.add_column("Type", style="cs.type")
    for issue in result.issues:
        cells = [
            issue.dotted_path or "<root>",
            Text(issue.kind, style=style_for_kind(issue.kind)),
            issue.message,
        ]
        if verbose:
            cells.append(issue.type_name or "")
        table.add_row(*cells)
    console.print(table)


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "check": _render_check,
    "describe": _render_describe,
}
