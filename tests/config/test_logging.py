"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest

from confspec.config.logging import configure_logging
from confspec.config.tree import ConfigTree
from tests.schemas import RPC_SETTINGS


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    confspec_logger = logging.getLogger("confspec")
    confspec_level = confspec_logger.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    confspec_logger.setLevel(confspec_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("confspec").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False)
        assert logging.getLogger("confspec").level == logging.WARNING

    def test_json_lines(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("confspec.test").warning("loaded %s", "node.toml")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "loaded node.toml"
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "confspec.test"
        assert "timestamp" in parsed

    def test_validation_logs_at_debug(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        RPC_SETTINGS.validate(ConfigTree({"useSsl": True}))
        events = [json.loads(line)["event"] for line in capfd.readouterr().err.splitlines()]
        assert "Validated RpcSettings (strict=False): 1 error(s)" in events

    def test_quiet_by_default(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        RPC_SETTINGS.validate(ConfigTree({"useSsl": True}))
        assert capfd.readouterr().err == ""
