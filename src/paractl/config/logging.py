"""Log routing for paractl: structlog events and stdlib records to stderr.

The relocation service reports per-document trouble (skipped tag syncs,
failed batch items) as log events rather than in the command result, so
stderr is where a user learns *which* documents a batch left behind.

``-v`` shows the step-by-step debug events, ``-q`` keeps only errors, and
``--log-json`` switches to one JSON object per line for scripts. JSON lines
carry the vault root so logs from several vaults can be told apart.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from pathlib import Path


def _level_for(*, verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_json: bool = False,
    vault_root: Path | None = None,
) -> None:
    """Install the stderr handler and the structlog processor chain.

    Args:
        verbose: Show ``paractl`` debug events (wins over *quiet*).
        quiet: Show only ``paractl`` errors.
        log_json: Render JSON lines instead of the console format.
        vault_root: Bound as ``vault`` on every JSON line.
    """
    chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.contextvars.clear_contextvars()
    if log_json:
        if vault_root is not None:
            structlog.contextvars.bind_contextvars(vault=str(vault_root))
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    # Stdlib records (the host logs through ``logging``) share the chain.
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("paractl").setLevel(_level_for(verbose=verbose, quiet=quiet))
    logging.getLogger("asyncio").setLevel(logging.WARNING)
