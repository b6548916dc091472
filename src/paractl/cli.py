"""Root CLI group for paractl with global flags and command registration."""

from __future__ import annotations

import click
from pydantic import ValidationError

from paractl import __version__
from paractl.commands import register_commands
from paractl.commands._base import ParaGroup
from paractl.commands._context import AppContext
from paractl.config.settings import ParaSettings


@click.group(
    cls=ParaGroup,
    invoke_without_command=True,
    examples="""\
  paractl move Inbox/idea.md project --folder Projects/Alpha
  paractl archive Projects/Alpha/notes.md
  paractl archive-folder Projects/Alpha
  paractl -c ~/vault/paractl.toml --json folders area""",
)
@click.version_option(version=__version__, prog_name="paractl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--no-interact", is_flag=True, help="Non-interactive mode (no prompts).")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    no_interact: bool,
    config_path: str | None,
) -> None:
    """paractl — file vault documents into PARA folders and keep their tags in sync."""
    ctx.ensure_object(dict)
    try:
        settings = ParaSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
            no_interact=no_interact,
        )
    except ValidationError as exc:
        msg = f"Invalid configuration: {exc}"
        raise click.ClickException(msg) from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
