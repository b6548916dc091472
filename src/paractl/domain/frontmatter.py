"""Frontmatter codec — read and rewrite the ``tags`` field of a metadata block.

A metadata block is the YAML mapping between a ``---`` line at the very
start of a document and the next ``---`` line. Everything after the closing
delimiter is the body, and it is never touched: :func:`replace_tags`
re-emits the block and then appends the original tail byte-for-byte.

Parsing uses ruamel.yaml in round-trip mode so non-tag fields keep their
comments, key order, and quote styles when the block is re-serialized.
"""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.error import YAMLError
from ruamel.yaml.util import load_yaml_guess_indent

DELIMITER = "---"
TAGS_KEY = "tags"

# Block sequence layout for blocks that don't show one: ``  - item``.
SEQUENCE_INDENT = 4
SEQUENCE_OFFSET = 2


class MalformedMetadataError(ValueError):
    """A metadata block is present but does not decode to a mapping."""


# ---------------------------------------------------------------------------
# YAML parser (round-trip preserves comments and quote styles)
# ---------------------------------------------------------------------------


def _new_yaml(*, sequence: int = SEQUENCE_INDENT, offset: int = SEQUENCE_OFFSET) -> YAML:
    """Create a fresh round-trip YAML parser.

    ruamel's YAML object keeps emitter state between calls, so each
    operation gets its own instance.
    """
    y = YAML()
    y.preserve_quotes = True
    y.default_flow_style = False
    y.width = 4096
    y.indent(mapping=2, sequence=sequence, offset=offset)
    return y


# ---------------------------------------------------------------------------
# Block location
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class _Block:
    """Location of a metadata block inside a document's text."""

    yaml_text: str
    tail: str  # everything after the closing delimiter, line ending included


def _locate_block(text: str) -> _Block | None:
    """Find the leading metadata block, or None if the delimiters don't pair up."""
    lines = text.split("\n")
    if lines[0].rstrip("\r") != DELIMITER:
        return None

    offset = len(lines[0]) + 1
    for line in lines[1:]:
        if line.rstrip("\r") == DELIMITER:
            yaml_text = text[len(lines[0]) + 1 : offset]
            tail = text[offset + len(DELIMITER) :]
            return _Block(yaml_text=yaml_text, tail=tail)
        offset += len(line) + 1
    return None


def _load_mapping(yaml_text: str) -> CommentedMap:
    try:
        data = _new_yaml().load(yaml_text)
    except (YAMLError, ValueError) as exc:
        # ruamel raises a bare ValueError for scalars it cannot construct,
        # e.g. an impossible date such as 2024-02-30.
        msg = f"Metadata block is not valid YAML: {exc}"
        raise MalformedMetadataError(msg) from exc

    if data is None:
        return CommentedMap()
    if not isinstance(data, dict):
        msg = f"Metadata block must be a mapping, got {type(data).__name__}"
        raise MalformedMetadataError(msg)
    return data


def _sequence_layout(yaml_text: str) -> tuple[int, int]:
    """``(indent, dash offset)`` of the block's own sequences, or the defaults."""
    try:
        _, indent, offset = load_yaml_guess_indent(yaml_text)
    except (YAMLError, ValueError, IndexError):
        return SEQUENCE_INDENT, SEQUENCE_OFFSET
    if indent is None or offset is None or indent < offset + 2:
        return SEQUENCE_INDENT, SEQUENCE_OFFSET
    return indent, offset


def _normalize_tags(value: Any) -> list[str]:
    """Coerce a ``tags`` value (scalar, sequence, or null) into a list of strings."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item is not None]
    return [str(value)]


def _dump_mapping(data: dict[str, Any], layout: tuple[int, int] | None = None) -> str:
    sequence, offset = layout or (SEQUENCE_INDENT, SEQUENCE_OFFSET)
    buf = StringIO()
    _new_yaml(sequence=sequence, offset=offset).dump(data, buf)
    return buf.getvalue()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def has_metadata_block(text: str) -> bool:
    """Whether *text* starts with a paired ``---`` block (decodable or not)."""
    return _locate_block(text) is not None


def extract_tags(text: str) -> tuple[list[str], bool]:
    """Read the tag list from a document's metadata block.

    Returns:
        ``(tags, has_block)``. A document without a block yields
        ``([], False)``; the caller must synthesize a block rather
        than attempt a replacement.

    Raises:
        MalformedMetadataError: The block exists but is not a YAML mapping.
    """
    block = _locate_block(text)
    if block is None:
        return [], False
    data = _load_mapping(block.yaml_text)
    return _normalize_tags(data.get(TAGS_KEY)), True


def replace_tags(text: str, tags: list[str]) -> str:
    """Rewrite the ``tags`` field, keeping all other fields and the body intact.

    Raises:
        MalformedMetadataError: The block exists but is not a YAML mapping.
        ValueError: *text* has no metadata block.
    """
    block = _locate_block(text)
    if block is None:
        msg = "Document has no metadata block to rewrite"
        raise ValueError(msg)

    data = _load_mapping(block.yaml_text)
    data[TAGS_KEY] = list(tags)
    layout = _sequence_layout(block.yaml_text)
    return f"{DELIMITER}\n{_dump_mapping(data, layout)}{DELIMITER}{block.tail}"


def synthesize_block(text: str, tags: list[str]) -> str:
    """Prepend a new metadata block holding only *tags* to *text*."""
    return f"{DELIMITER}\n{_dump_mapping({TAGS_KEY: list(tags)})}{DELIMITER}\n{text}"


def read_metadata(text: str) -> dict[str, Any] | None:
    """Parse the metadata block into a plain dict.

    Lenient counterpart of :func:`extract_tags`: absent or malformed
    blocks both yield ``None``.
    """
    block = _locate_block(text)
    if block is None:
        return None
    try:
        data = YAML(typ="safe").load(block.yaml_text)
    except (YAMLError, ValueError):
        return None
    if data is None:
        return {}
    if not isinstance(data, dict):
        return None
    return data
