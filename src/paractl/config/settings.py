"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``PARACTL_*`` prefix
  3. TOML file    — ``paractl.toml`` discovered via walk-up (stops at the vault root)
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`paractl.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any, ClassVar

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from paractl.config.discovery import find_config, find_vault_root
from paractl.config.models import ArchiveConfig, DestinationRule, TagsConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``paractl.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class ParaSettings(BaseSettings):
    """Unified settings for the paractl CLI.

    Stored on :class:`~paractl.commands._context.AppContext` at the CLI
    root and handed to services.

    Attributes:
        vault_root: Resolved vault directory: the parent of ``paractl.toml``,
            else the nearest marked vault above the CWD, else the CWD.
        config_path: The config file that was loaded, if any.
        rules: Ordered destination rules for ``paractl move``.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "PARACTL_",
        "env_nested_delimiter": "__",
    }

    # --- Resolved path (derived from config location, not read from TOML) ---
    vault_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_interact: bool = False

    # --- TOML sections ---
    tags: TagsConfig = Field(default_factory=TagsConfig)
    archive: ArchiveConfig = Field(default_factory=ArchiveConfig)
    rules: list[DestinationRule] = Field(default_factory=list)

    # Retained for type-checker visibility; not used at runtime.
    _toml_path: ClassVar[Path | None] = None

    @field_validator("rules")
    @classmethod
    def _unique_rule_names(cls, rules: list[DestinationRule]) -> list[DestinationRule]:
        seen: set[str] = set()
        for rule in rules:
            if rule.name in seen:
                msg = f"Duplicate rule name: {rule.name!r}"
                raise ValueError(msg)
            seen.add(rule.name)
        return rules

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        vault_root: Path | None = None,
        **cli_flags: Any,
    ) -> ParaSettings:
        """Construct settings from CLI invocation.

        Discovers ``paractl.toml`` via walk-up (or explicit *config_path*),
        resolves *vault_root* from the config file's parent directory,
        and merges CLI flags as highest-priority overrides.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(vault_root)

        resolved_root = vault_root
        if resolved_root is None:
            if toml_path is not None:
                resolved_root = toml_path.parent
            else:
                resolved_root = find_vault_root() or Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                vault_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None

    def find_rule(self, name: str) -> DestinationRule | None:
        """Look up a destination rule by name."""
        for rule in self.rules:
            if rule.name == name:
                return rule
        return None
