"""Tests for the move CLI command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from paractl.cli import cli
from tests.conftest import read_doc, tagged, write_doc


@pytest.mark.usefixtures("_isolated_vault")
class TestMoveCommand:
    def test_explicit_folder(self, cli_runner: CliRunner, vault_root: Path) -> None:
        write_doc(vault_root, "Inbox/idea.md", tagged("work"))
        result = cli_runner.invoke(
            cli, ["--json", "move", "Inbox/idea.md", "resource", "-f", "Resources/Tools"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["data"]["new_path"] == "Resources/Tools/idea.md"
        assert data["data"]["tags"] == ["work", "para/ref/Tools"]
        assert read_doc(vault_root, "Resources/Tools/idea.md") == tagged("work", "para/ref/Tools")

    def test_interactive_pick(self, cli_runner: CliRunner, vault_root: Path) -> None:
        write_doc(vault_root, "Inbox/idea.md", tagged("work"))
        result = cli_runner.invoke(cli, ["move", "Inbox/idea.md", "project"], input="2\n")
        assert result.exit_code == 0, result.output
        assert "Projects/Beta" in result.output
        assert read_doc(vault_root, "Projects/Alpha/idea.md") == tagged(
            "work", "para/projects/Alpha"
        )

    def test_single_candidate_needs_no_prompt(
        self, cli_runner: CliRunner, vault_root: Path
    ) -> None:
        write_doc(vault_root, "Inbox/idea.md", tagged("work"))
        result = cli_runner.invoke(cli, ["--no-interact", "-q", "move", "Inbox/idea.md", "area"])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "Areas/idea.md"

    def test_no_interact_requires_folder(self, cli_runner: CliRunner, vault_root: Path) -> None:
        write_doc(vault_root, "Inbox/idea.md", tagged("work"))
        result = cli_runner.invoke(cli, ["--no-interact", "move", "Inbox/idea.md", "project"])
        assert result.exit_code == 2
        assert "--folder is required" in result.output
        assert (vault_root / "Inbox/idea.md").exists()

    def test_folder_outside_rule(self, cli_runner: CliRunner, vault_root: Path) -> None:
        write_doc(vault_root, "Inbox/idea.md", tagged("work"))
        result = cli_runner.invoke(
            cli, ["--json", "move", "Inbox/idea.md", "project", "-f", "Areas"]
        )
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "INVALID_DESTINATION"

    def test_missing_document(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "move", "Inbox/ghost.md", "area", "-f", "Areas"]
        )
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "NO_ACTIVE_DOCUMENT"

    def test_unknown_rule(self, cli_runner: CliRunner, vault_root: Path) -> None:
        write_doc(vault_root, "Inbox/idea.md", tagged("work"))
        result = cli_runner.invoke(cli, ["--json", "move", "Inbox/idea.md", "someday"])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "UNKNOWN_RULE"

    def test_verbose_shows_telemetry(self, cli_runner: CliRunner, vault_root: Path) -> None:
        write_doc(vault_root, "Inbox/idea.md", tagged("work"))
        result = cli_runner.invoke(cli, ["-v", "move", "Inbox/idea.md", "area", "-f", "Areas"])
        assert result.exit_code == 0, result.output
        assert "RelocationService.relocate_with_rule" in result.output

    def test_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["move", "--help"])
        assert result.exit_code == 0
        assert "DOCUMENT" in result.output
        assert "--folder" in result.output
