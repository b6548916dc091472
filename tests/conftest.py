"""Shared pytest fixtures and test helpers for paractl tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from paractl.config.settings import ParaSettings
from paractl.infrastructure.host import LocalVaultHost
from paractl.services.relocation import RelocationService
from paractl.services.telemetry import disable_telemetry

RULES = [
    {"name": "project", "directory": "Projects", "tag": "projects"},
    {"name": "area", "directory": "Areas", "tag": "areas"},
    {"name": "resource", "directory": "Resources", "tag": "ref"},
]

CONFIG_TOML = """\
[tags]
namespace = "para"

[archive]
root = "archive"

[[rules]]
name = "project"
directory = "Projects"
tag = "projects"

[[rules]]
name = "area"
directory = "Areas"
tag = "areas"

[[rules]]
name = "resource"
directory = "Resources"
tag = "ref"
"""


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's PARACTL_* environment out of the tests."""
    monkeypatch.delenv("PARACTL_CONFIG", raising=False)
    monkeypatch.delenv("PARACTL_VAULT_ROOT", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def vault_root(tmp_path: Path) -> Path:
    """Temporary vault with a small PARA folder layout.

    This is the single source of truth for the vault directory layout.
    """
    for folder in (
        "Inbox",
        "Projects/Alpha",
        "Projects/Beta",
        "Areas",
        "Resources/Tools",
        ".obsidian",
    ):
        (tmp_path / folder).mkdir(parents=True)
    return tmp_path


@pytest.fixture
def settings(vault_root: Path) -> ParaSettings:
    return ParaSettings.from_cli(vault_root=vault_root, rules=RULES)


@pytest.fixture
def host(vault_root: Path) -> LocalVaultHost:
    return LocalVaultHost(vault_root)


@pytest.fixture
def service(host: LocalVaultHost, settings: ParaSettings) -> RelocationService:
    return RelocationService(host, settings)


@pytest.fixture
def _isolated_vault(vault_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp vault and drop a paractl.toml into it.

    Use via ``@pytest.mark.usefixtures("_isolated_vault")`` on command test
    classes.
    """
    (vault_root / "paractl.toml").write_text(CONFIG_TOML, encoding="utf-8")
    monkeypatch.chdir(vault_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_doc(root: Path, rel: str, text: str) -> Path:
    """Write a document into the vault, creating parent folders."""
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(text.encode("utf-8"))
    return path


def read_doc(root: Path, rel: str) -> str:
    return (root / rel).read_bytes().decode("utf-8")


def tagged(*tags: str, body: str = "Body\n") -> str:
    """Document text with a block-style tags list, as ruamel.yaml renders it."""
    lines = ["---", "tags:", *(f"  - {t}" for t in tags), "---"]
    return "\n".join(lines) + "\n" + body


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """Telemetry is a context variable; a verbose CLI test must not leak it."""
    yield
    disable_telemetry()
