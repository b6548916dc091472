"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy host/service construction, a
coroutine runner, and centralized result emission (stdout/stderr
routing + exit codes).
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import TYPE_CHECKING, Any

import click

from paractl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from paractl.config.settings import ParaSettings
    from paractl.infrastructure.host import DocumentHost
    from paractl.services.relocation import RelocationService
    from paractl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The host is created
    on first use so ``--help`` and ``--version`` never touch the vault.
    """

    def __init__(self, settings: ParaSettings) -> None:
        self.settings = settings
        self._host: DocumentHost | None = None

        # Configure structured logging
        from paractl.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
            vault_root=settings.vault_root,
        )

        # Enable telemetry context var when verbose
        if settings.verbose:
            from paractl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def host(self) -> DocumentHost:
        """The document host for the resolved vault root."""
        if self._host is None:
            from paractl.infrastructure.host import LocalVaultHost

            self._host = LocalVaultHost(self.settings.vault_root)
        return self._host

    @property
    def relocation(self) -> RelocationService:
        from paractl.services.relocation import RelocationService

        return RelocationService(self.host, self.settings)

    def run(self, coro: Coroutine[Any, Any, ServiceResult]) -> ServiceResult:
        """Drive a service coroutine to completion."""
        return asyncio.run(coro)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
