"""Subcommand modules for paractl.

Provides register_commands() which uses deferred imports to keep
``paractl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from paractl.commands.archive import archive, archive_folder, unarchive
    from paractl.commands.folders import folders
    from paractl.commands.move import move

    cli.add_command(move)
    cli.add_command(folders)
    cli.add_command(archive)
    cli.add_command(unarchive)
    cli.add_command(archive_folder)
