"""Locate ``paractl.toml`` and the vault it belongs to.

The search climbs from the starting directory towards the filesystem root
but never leaves the vault: a directory holding a vault marker (the
editor's ``.obsidian`` settings folder) is the last one inspected, so a
config in some ancestor of the vault is never picked up by accident.
``PARACTL_CONFIG`` short-circuits the search.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "paractl.toml"
CONFIG_ENV_VAR = "PARACTL_CONFIG"
VAULT_MARKERS = (".obsidian",)


def _ancestors(start: Path | None) -> Iterator[Path]:
    current = (start or Path.cwd()).resolve()
    yield current
    yield from current.parents


def is_vault_root(directory: Path) -> bool:
    """Whether *directory* carries one of the vault marker folders."""
    return any((directory / marker).is_dir() for marker in VAULT_MARKERS)


def find_config(start: Path | None = None) -> Path | None:
    """Find the ``paractl.toml`` governing *start* (default: cwd).

    Returns None when ``PARACTL_CONFIG`` names a missing file, or when the
    climb reaches the vault root or the filesystem root without a match.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    for directory in _ancestors(start):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if is_vault_root(directory):
            return None
    return None


def find_vault_root(start: Path | None = None) -> Path | None:
    """Nearest directory at or above *start* that carries a vault marker."""
    for directory in _ancestors(start):
        if is_vault_root(directory):
            return directory
    return None
