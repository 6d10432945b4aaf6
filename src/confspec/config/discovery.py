"""Locate the CLI's own settings file, ``confspec.toml``.

``CONFSPEC_CONFIG`` names the file explicitly.  Otherwise the search starts
in the given directory (default: cwd) and climbs towards the filesystem
root, the way git finds ``.git/``.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "confspec.toml"
CONFIG_ENV_VAR = "CONFSPEC_CONFIG"


def _search_dirs(start: Path) -> Iterator[Path]:
    resolved = start.resolve()
    yield resolved
    yield from resolved.parents


def find_config(start: Path | None = None) -> Path | None:
    """Return the settings file in effect, or None when there is none.

    An env var pointing at a missing file yields None rather than falling
    back to the walk-up search.
    """
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        candidate = Path(explicit)
        return candidate if candidate.is_file() else None

    for directory in _search_dirs(start or Path.cwd()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
