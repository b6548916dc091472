"""Folder tree enumeration over a :class:`DocumentHost`.

Nothing is cached: every call walks the host's current tree, so results
are a snapshot that can go stale if the vault changes underneath.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from paractl.domain.paths import FolderRef, join_path

if TYPE_CHECKING:
    from paractl.infrastructure.host import DocumentHost


async def all_subfolders(host: DocumentHost, root: str) -> list[FolderRef]:
    """Every folder under *root* in pre-order, starting with *root* itself."""
    folders = [FolderRef(root)]
    for child in await host.list_children(root):
        if child.is_folder:
            folders.extend(await all_subfolders(host, join_path(root, child.name)))
    return folders


async def all_documents(host: DocumentHost, root: str) -> list[str]:
    """Paths of every document transitively under *root*, depth-first in listing order."""
    documents: list[str] = []
    for child in await host.list_children(root):
        path = join_path(root, child.name)
        if child.is_folder:
            documents.extend(await all_documents(host, path))
        else:
            documents.append(path)
    return documents
