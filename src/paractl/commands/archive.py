"""Commands: archive and unarchive documents or whole folders."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from paractl.commands._base import ParaCommand
from paractl.domain.paths import is_within, normalize_path
from paractl.services.result import ALREADY_ARCHIVED, ServiceResult

if TYPE_CHECKING:
    from paractl.commands._context import AppContext


@click.command(
    cls=ParaCommand,
    examples="""\
  paractl archive Projects/Alpha/notes.md
  paractl --json archive Areas/Health/plan.md""",
)
@click.argument("document")
@click.pass_obj
def archive(app: AppContext, document: str) -> None:
    """Move DOCUMENT under the archive root and mark its category tag archived."""
    if _already_archived(app, document):
        app.emit(
            ServiceResult.failure(
                "archive", ALREADY_ARCHIVED, f"Document is already archived: {document}"
            )
        )
    app.emit(app.run(app.relocation.toggle_archive_one(document, archiving=True)))


@click.command(
    cls=ParaCommand,
    examples="""\
  paractl unarchive archive/Projects/Alpha/notes.md
  paractl -q unarchive archive/Areas/Health/plan.md""",
)
@click.argument("document")
@click.pass_obj
def unarchive(app: AppContext, document: str) -> None:
    """Move DOCUMENT out of the archive root back to its original folder."""
    app.emit(app.run(app.relocation.toggle_archive_one(document, archiving=False)))


@click.command(
    "archive-folder",
    cls=ParaCommand,
    examples="""\
  paractl archive-folder Projects/Alpha
  paractl archive-folder archive/Projects/Alpha      # inferred: unarchive
  paractl archive-folder Projects --unarchive""",
)
@click.argument("folder")
@click.option(
    "--archive/--unarchive",
    "archiving",
    default=None,
    help="Force a direction (default: unarchive inside the archive root, archive elsewhere).",
)
@click.pass_obj
def archive_folder(app: AppContext, folder: str, archiving: bool | None) -> None:
    """Archive or unarchive every document under FOLDER, reporting N of M succeeded."""
    app.emit(app.run(app.relocation.toggle_archive_folder(folder, archiving)))


def _already_archived(app: AppContext, document: str) -> bool:
    if not app.settings.archive.enabled:
        return False
    try:
        path = normalize_path(document)
        root = normalize_path(app.settings.archive.root)
    except ValueError:
        return False
    return bool(path) and is_within(path, root)
