"""Tests for folder tree enumeration."""

from __future__ import annotations

from pathlib import Path

import pytest

from paractl.domain.paths import FolderRef
from paractl.infrastructure.host import LocalVaultHost
from paractl.infrastructure.tree import all_documents, all_subfolders
from tests.conftest import write_doc


@pytest.fixture
def populated(vault_root: Path) -> Path:
    write_doc(vault_root, "Projects/top.md", "")
    write_doc(vault_root, "Projects/Alpha/a.md", "")
    write_doc(vault_root, "Projects/Alpha/Sub/deep/b.md", "")
    write_doc(vault_root, "Projects/Beta/c.md", "")
    write_doc(vault_root, "Areas/d.md", "")
    return vault_root


class TestAllSubfolders:
    @pytest.mark.asyncio
    async def test_pre_order_with_root_first(
        self, host: LocalVaultHost, populated: Path
    ) -> None:
        folders = await all_subfolders(host, "Projects")
        assert folders == [
            FolderRef("Projects"),
            FolderRef("Projects/Alpha"),
            FolderRef("Projects/Alpha/Sub"),
            FolderRef("Projects/Alpha/Sub/deep"),
            FolderRef("Projects/Beta"),
        ]

    @pytest.mark.asyncio
    async def test_leaf_folder(self, host: LocalVaultHost, populated: Path) -> None:
        assert await all_subfolders(host, "Areas") == [FolderRef("Areas")]

    @pytest.mark.asyncio
    async def test_vault_root_skips_hidden(self, host: LocalVaultHost, populated: Path) -> None:
        paths = [f.path for f in await all_subfolders(host, "")]
        assert paths[0] == ""
        assert ".obsidian" not in paths
        assert "Resources/Tools" in paths


class TestAllDocuments:
    @pytest.mark.asyncio
    async def test_recursive(self, host: LocalVaultHost, populated: Path) -> None:
        docs = await all_documents(host, "Projects")
        assert sorted(docs) == [
            "Projects/Alpha/Sub/deep/b.md",
            "Projects/Alpha/a.md",
            "Projects/Beta/c.md",
            "Projects/top.md",
        ]

    @pytest.mark.asyncio
    async def test_stable_between_calls(self, host: LocalVaultHost, populated: Path) -> None:
        assert await all_documents(host, "") == await all_documents(host, "")

    @pytest.mark.asyncio
    async def test_empty_folder(self, host: LocalVaultHost, populated: Path) -> None:
        assert await all_documents(host, "Inbox") == []

    @pytest.mark.asyncio
    async def test_reflects_changes(self, host: LocalVaultHost, populated: Path) -> None:
        before = await all_documents(host, "Areas")
        write_doc(populated, "Areas/e.md", "")
        after = await all_documents(host, "Areas")
        assert after == [*before, "Areas/e.md"]
