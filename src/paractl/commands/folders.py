"""Command: list the destination folders available under a rule."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from paractl.commands._base import ParaCommand

if TYPE_CHECKING:
    from paractl.commands._context import AppContext


@click.command(
    cls=ParaCommand,
    examples="""\
  paractl folders project
  paractl --json folders area
  paractl -q folders resource""",
)
@click.argument("rule")
@click.pass_obj
def folders(app: AppContext, rule: str) -> None:
    """List folders under RULE's base directory (the base itself first)."""
    app.emit(app.run(app.relocation.candidate_folders(rule)))
