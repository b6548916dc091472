"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, paractl.toml only contains
overrides. A vault with no config file still gets a working namespace
and archive root; destination rules must be declared to use ``move``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from paractl.domain.paths import normalize_path

# --- paractl.toml sections ---


class TagsConfig(BaseModel):
    """[tags] section."""

    model_config = {"frozen": True}

    namespace: str = Field(default="para", min_length=1)


class ArchiveConfig(BaseModel):
    """[archive] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    root: str = Field(default="archive", min_length=1)

    @field_validator("root")
    @classmethod
    def _root_inside_vault(cls, root: str) -> str:
        # normalize_path raises ValueError for roots that climb out with "..".
        if not normalize_path(root):
            msg = f"Archive root must name a folder below the vault root, got {root!r}"
            raise ValueError(msg)
        return root


class DestinationRule(BaseModel):
    """One [[rules]] entry: a named destination with its base folder and tag label.

    Documents moved with this rule land somewhere under *directory* and
    get the managed tag ``<namespace>/<tag>[/<folder>]``.
    """

    model_config = {"frozen": True}

    name: str = Field(min_length=1)
    directory: str
    tag: str = Field(min_length=1)
