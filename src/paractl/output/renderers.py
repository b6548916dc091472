"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from paractl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from paractl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item.get("path", "")) for item in items if isinstance(item, dict))

    if "new_path" in result.data:
        return str(result.data["new_path"])
    if "total" in result.data:
        return f"{result.data['success_count']}/{result.data['total']}"

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="para.ok")
    op = Text(f"  {result.op}", style="para.op")
    console.print(Text.assemble(label, op))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="para.key")
    if key in ("path", "new_path", "folder", "directory"):
        v = Text(str(value) or "/", style="para.path")
    elif key == "tags":
        v = Text(", ".join(value) if value else "(none)", style="para.tag")
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    if span_data.get("annotations"):
        extras = [f"{ak}={av}" for ak, av in span_data["annotations"].items()]
        line += f"  ({', '.join(extras)})"

    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="para.error")
    op = Text(f"  {result.op}", style="para.op")
    sep = Text(" — ")
    console.print(Text.assemble(label, op, sep, msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Operation renderers ───────────────────────────────────────────────


def _render_relocation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render relocate/archive/unarchive results."""
    _status_line(console, result)
    for key in ("path", "new_path", "tags"):
        if key in result.data:
            _field(console, key, result.data[key])
    if not result.data.get("tags_synced", True):
        console.print(
            "  [para.warning]tags not synced[/para.warning] (metadata missing or malformed)"
        )
    if verbose:
        _render_meta(console, result)


def _render_batch(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render archive_folder results as an ``N of M succeeded`` summary."""
    _status_line(console, result)
    d = result.data
    _field(console, "folder", d.get("folder", ""))
    _field(console, "direction", d.get("direction", ""))
    style = "para.ok" if d.get("success_count") == d.get("total") else "para.warning"
    console.print(
        f"  [{style}]{d.get('success_count', 0)} of {d.get('total', 0)} succeeded[/{style}]"
    )
    if verbose:
        _render_meta(console, result)


def _render_folders(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render candidate folders as a numbered table."""
    _status_line(console, result)
    _field(console, "rule", result.data.get("rule", ""))
    _field(console, "directory", result.data.get("directory", ""))

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Folder", style="para.path")
    table.add_column("Name")
    for idx, item in enumerate(result.data.get("items", []), start=1):
        table.add_row(str(idx), item.get("path") or "/", item.get("name", ""))
    console.print(table)
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "relocate": _render_relocation,
    "archive": _render_relocation,
    "unarchive": _render_relocation,
    "archive_folder": _render_batch,
    "folders": _render_folders,
}
