"""Vault path rules — vault-relative POSIX paths for documents and folders.

Paths never start or end with ``/``; the vault root folder is ``""``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath

PATH_SEPARATOR = "/"


def normalize_path(path: str) -> str:
    """Normalize a user-supplied vault path.

    Backslashes become slashes, surrounding slashes and ``.`` segments are
    dropped. Paths that climb out of the vault with ``..`` are rejected.

    Raises:
        ValueError: *path* contains a ``..`` segment.
    """
    raw_parts = path.replace("\\", PATH_SEPARATOR).split(PATH_SEPARATOR)
    parts = [p for p in raw_parts if p not in ("", ".")]
    if ".." in parts:
        msg = f"Path escapes vault root: {path!r}"
        raise ValueError(msg)
    return PATH_SEPARATOR.join(parts)


def join_path(folder: str, name: str) -> str:
    """Join a folder path and a child name (``""`` is the vault root)."""
    return f"{folder}{PATH_SEPARATOR}{name}" if folder else name


def parent_path(path: str) -> str:
    """Folder containing *path* (``""`` for top-level entries)."""
    head, _sep, _tail = path.rpartition(PATH_SEPARATOR)
    return head


def base_name(path: str) -> str:
    return PurePosixPath(path).name


def is_within(path: str, folder: str) -> bool:
    """Whether *path* is *folder* itself or lies below it."""
    if not folder:
        return True
    return path == folder or path.startswith(folder + PATH_SEPARATOR)


def archive_path(path: str, archive_root: str) -> str:
    """Destination of *path* when archived: mirrored under *archive_root*."""
    return join_path(archive_root, path)


def unarchive_path(path: str, archive_root: str) -> str | None:
    """Original location of an archived *path*, or None if it isn't archived."""
    prefix = archive_root + PATH_SEPARATOR
    if not archive_root or not path.startswith(prefix):
        return None
    return path[len(prefix) :]


@dataclass(frozen=True)
class FolderRef:
    """A folder in the vault tree, identified by its vault-relative path."""

    path: str

    @property
    def name(self) -> str:
        return base_name(self.path)

    @property
    def is_top_level(self) -> bool:
        """True for folders directly under the vault root (and the root itself)."""
        return self.name == self.path
