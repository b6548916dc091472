"""Command: move a document under a destination rule and retag it."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from paractl.commands._base import ParaCommand

if TYPE_CHECKING:
    from paractl.commands._context import AppContext
    from paractl.services.result import ServiceResult


@click.command(
    cls=ParaCommand,
    examples="""\
  paractl move Inbox/idea.md project --folder Projects/Alpha
  paractl move Inbox/idea.md resource          # pick the folder interactively
  paractl --json move notes/todo.md area -f Areas""",
)
@click.argument("document")
@click.argument("rule")
@click.option(
    "-f",
    "--folder",
    default=None,
    help="Destination folder; must be the rule's directory or below it.",
)
@click.pass_obj
def move(app: AppContext, document: str, rule: str, folder: str | None) -> None:
    """Move DOCUMENT into a folder of RULE and replace its category tag."""
    service = app.relocation
    if folder is None:
        listing = app.run(service.candidate_folders(rule))
        if not listing.ok:
            app.emit(listing)
        folder = _pick_folder(app, listing)

    app.emit(app.run(service.relocate_with_rule(document, rule, folder)))


def _pick_folder(app: AppContext, listing: ServiceResult) -> str:
    """Ask the user to choose one of the candidate folders."""
    items = listing.data["items"]
    if len(items) == 1:
        return items[0]["path"]
    if app.settings.no_interact:
        msg = "--folder is required with --no-interact when the rule has subfolders"
        raise click.UsageError(msg)

    for idx, item in enumerate(items, start=1):
        click.echo(f"  {idx:>3}  {item['path'] or '/'}", err=True)
    choice = click.prompt("Folder", type=click.IntRange(1, len(items)), err=True)
    return items[choice - 1]["path"]
