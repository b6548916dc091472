"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog

from paractl.config.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    para = logging.getLogger("paractl")
    para_level = para.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    para.setLevel(para_level)
    structlog.contextvars.clear_contextvars()


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("paractl").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False)
        assert logging.getLogger("paractl").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        structlog.get_logger("paractl.test").warning(
            "relocation.batch_item_failed", path="Projects/Alpha/c.md"
        )
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "relocation.batch_item_failed"
        assert parsed["path"] == "Projects/Alpha/c.md"
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "paractl.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("paractl.infrastructure.host").debug("Moved %s -> %s", "a.md", "b/a.md")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Moved a.md -> b/a.md"
        assert parsed["level"] == "debug"

    def test_quiet_below_warning(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        structlog.get_logger("paractl.test").info("relocation.batch_complete")
        assert capfd.readouterr().err == ""

    def test_quiet_keeps_errors_only(self) -> None:
        configure_logging(quiet=True)
        assert logging.getLogger("paractl").level == logging.ERROR

    def test_verbose_wins_over_quiet(self) -> None:
        configure_logging(verbose=True, quiet=True)
        assert logging.getLogger("paractl").level == logging.DEBUG

    def test_json_lines_carry_vault(
        self, tmp_path: Path, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(log_json=True, vault_root=tmp_path)
        structlog.get_logger("paractl.test").warning("relocation.tags_skipped")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["vault"] == str(tmp_path)

    def test_console_lines_omit_vault(
        self, tmp_path: Path, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(vault_root=tmp_path)
        structlog.get_logger("paractl.test").warning("relocation.tags_skipped")
        err = capfd.readouterr().err
        assert "relocation.tags_skipped" in err
        assert "vault=" not in err
