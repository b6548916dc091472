"""BaseService — shared construction for paractl services.

Every service receives a :class:`DocumentHost` and the resolved
:class:`ParaSettings` at construction time. Services never touch the
filesystem directly; all storage goes through the host.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from paractl.domain.paths import normalize_path

if TYPE_CHECKING:
    from paractl.config.settings import ParaSettings
    from paractl.infrastructure.host import DocumentHost


class BaseService:
    """Base for service-layer classes.

    Usage::

        class RelocationService(BaseService):
            async def relocate_one(self, document, destination, label) -> ServiceResult:
                text = await self._host.read_document(document)
                ...
    """

    def __init__(self, host: DocumentHost, settings: ParaSettings) -> None:
        self._host = host
        self._settings = settings

    @property
    def namespace(self) -> str:
        """The category namespace that marks a tag as managed."""
        return self._settings.tags.namespace

    @property
    def archive_root(self) -> str:
        """Vault folder that mirrors the tree for archived documents."""
        return normalize_path(self._settings.archive.root)
