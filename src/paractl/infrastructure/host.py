"""Document host — the storage primitives the relocation core relies on.

:class:`DocumentHost` is the narrow, async interface to whatever owns the
documents (an editor's vault API, a remote store, a plain directory). All
paths are vault-relative POSIX strings; see :mod:`paractl.domain.paths`.
I/O failures surface as :class:`OSError`.

:class:`LocalVaultHost` backs the interface with a directory on disk.
Blocking calls run in a worker thread via :func:`asyncio.to_thread` so the
coordinator can await each step in turn.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from paractl.domain.frontmatter import read_metadata
from paractl.domain.paths import base_name, normalize_path

logger = logging.getLogger(__name__)

DOCUMENT_SUFFIX = ".md"


@dataclass(frozen=True)
class ChildEntry:
    """One entry of a folder listing."""

    name: str
    is_folder: bool


@runtime_checkable
class DocumentHost(Protocol):
    """Storage primitives consumed by the relocation core."""

    async def read_document(self, path: str) -> str: ...

    async def write_document(self, path: str, text: str) -> None: ...

    async def move_document(self, path: str, new_path: str) -> None:
        """Move a document; raises :class:`FileExistsError` if *new_path* is taken."""
        ...

    async def create_directory(self, path: str) -> None:
        """Create *path* and missing parents; no-op if it already exists."""
        ...

    async def get_metadata_snapshot(self, path: str) -> dict[str, Any] | None:
        """Cached metadata mapping for a document, or None if it has none."""
        ...

    async def list_children(self, folder: str) -> list[ChildEntry]:
        """Documents and folders directly inside *folder*, in a stable order."""
        ...

    async def resolve(self, path: str) -> ChildEntry | None:
        """Look up a single entry by path; None if nothing exists there."""
        ...


class LocalVaultHost:
    """:class:`DocumentHost` over a vault directory on the local filesystem.

    Only ``*.md`` files count as documents. Dot-prefixed entries
    (``.obsidian``, ``.git``, ``.trash``) are invisible.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    # ------------------------------------------------------------------
    # Path resolution
    # ------------------------------------------------------------------

    def _abs(self, path: str) -> Path:
        """Map a vault-relative path to disk, refusing paths outside the vault."""
        relative = normalize_path(path)
        result = self.root / relative if relative else self.root
        if not result.resolve().is_relative_to(self.root.resolve()):
            msg = f"Path escapes vault root: {path!r}"
            raise ValueError(msg)
        return result

    @staticmethod
    def _visible(entry: Path) -> bool:
        if entry.name.startswith("."):
            return False
        return entry.is_dir() or entry.suffix == DOCUMENT_SUFFIX

    # ------------------------------------------------------------------
    # DocumentHost
    # ------------------------------------------------------------------

    async def read_document(self, path: str) -> str:
        target = self._abs(path)
        return await asyncio.to_thread(_read_exact, target)

    async def write_document(self, path: str, text: str) -> None:
        target = self._abs(path)
        await asyncio.to_thread(_write_exact, target, text)

    async def move_document(self, path: str, new_path: str) -> None:
        source = self._abs(path)
        target = self._abs(new_path)
        await asyncio.to_thread(_move_no_clobber, source, target)
        logger.debug("Moved %s -> %s", path, new_path)

    async def create_directory(self, path: str) -> None:
        target = self._abs(path)
        await asyncio.to_thread(target.mkdir, parents=True, exist_ok=True)

    async def get_metadata_snapshot(self, path: str) -> dict[str, Any] | None:
        text = await self.read_document(path)
        return read_metadata(text)

    async def list_children(self, folder: str) -> list[ChildEntry]:
        target = self._abs(folder)
        return await asyncio.to_thread(self._list_sync, target)

    async def resolve(self, path: str) -> ChildEntry | None:
        target = self._abs(path)
        return await asyncio.to_thread(self._resolve_sync, target)

    # ------------------------------------------------------------------
    # Blocking helpers (run in a worker thread)
    # ------------------------------------------------------------------

    def _list_sync(self, folder: Path) -> list[ChildEntry]:
        if not folder.is_dir():
            msg = f"Not a folder: {folder}"
            raise NotADirectoryError(msg)
        entries = [e for e in folder.iterdir() if self._visible(e)]
        return [ChildEntry(name=e.name, is_folder=e.is_dir()) for e in sorted(entries)]

    def _resolve_sync(self, target: Path) -> ChildEntry | None:
        if target == self.root:
            return ChildEntry(name="", is_folder=True)
        if not target.exists() or not self._visible(target):
            return None
        return ChildEntry(name=base_name(target.as_posix()), is_folder=target.is_dir())


def _read_exact(target: Path) -> str:
    with target.open(encoding="utf-8", newline="") as fh:
        return fh.read()


def _write_exact(target: Path, text: str) -> None:
    with target.open("w", encoding="utf-8", newline="") as fh:
        fh.write(text)


def _move_no_clobber(source: Path, target: Path) -> None:
    if not source.is_file():
        msg = f"No such document: {source}"
        raise FileNotFoundError(msg)
    if target.exists():
        msg = f"Destination already exists: {target}"
        raise FileExistsError(msg)
    if not target.parent.is_dir():
        msg = f"Destination folder does not exist: {target.parent}"
        raise FileNotFoundError(msg)
    source.rename(target)
