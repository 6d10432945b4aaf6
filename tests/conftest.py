"""Shared pytest fixtures and test helpers for confspec tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from confspec.config.tree import ConfigTree


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run in an empty directory with no inherited confspec settings."""
    monkeypatch.chdir(tmp_path)
    for name in ("CONFSPEC_CONFIG", "CONFSPEC_STRICT", "CONFSPEC_SPECIFICATION", "CONFSPEC_QUIET"):
        monkeypatch.delenv(name, raising=False)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def tree(**values: Any) -> ConfigTree:
    """Build a ConfigTree; dotted keys expand like they do in HOCON."""
    return ConfigTree(values)


def addresses(principal: str = "localhost:8080", admin: str = "127.0.0.1:8081") -> dict[str, str]:
    return {"principal": principal, "admin": admin}
