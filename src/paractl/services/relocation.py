"""RelocationService — move documents and keep their managed tag in sync.

Per-document pipeline: ENSURE DIRECTORY → MOVE → SYNC TAGS → DONE

Each step awaits one host call before the next starts. A failed
``create_directory`` is tolerated (the folder usually exists already);
a failed move or write stops the document at :attr:`RelocationState.FAILED`.
Move and tag sync are not atomic: a document whose metadata cannot be
decoded is still moved, it just keeps its old tags.

Batch operations run the pipeline one document at a time and keep going
past failures, reporting ``success_count`` out of ``total``.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

import structlog

from paractl.domain.frontmatter import (
    MalformedMetadataError,
    extract_tags,
    replace_tags,
    synthesize_block,
)
from paractl.domain.paths import (
    FolderRef,
    archive_path,
    base_name,
    is_within,
    join_path,
    normalize_path,
    parent_path,
    unarchive_path,
)
from paractl.domain.tags import recategorize, toggle_archive
from paractl.infrastructure.tree import all_documents, all_subfolders
from paractl.services.base import BaseService
from paractl.services.result import (
    ARCHIVE_DISABLED,
    INVALID_DESTINATION,
    NO_ACTIVE_DOCUMENT,
    NOT_ARCHIVED,
    RELOCATION_FAILED,
    UNKNOWN_RULE,
    ServiceResult,
)
from paractl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from paractl.config.models import DestinationRule

logger = structlog.get_logger(__name__)

# Rewrites the tags of the document at the given (post-move) path.
# Returns the tags now on the document, or None when sync was skipped.
TagSync = Callable[[str], Awaitable[list[str] | None]]


class RelocationState(StrEnum):
    PENDING = "pending"
    DIRECTORY_ENSURED = "directory_ensured"
    MOVED = "moved"
    TAGS_SYNCED = "tags_synced"
    DONE = "done"
    FAILED = "failed"


@dataclass
class Relocation:
    """Progress of one document through the pipeline."""

    source: str
    target: str
    state: RelocationState = RelocationState.PENDING
    tags: list[str] | None = None

    @property
    def tags_synced(self) -> bool:
        return self.tags is not None

    def to_dict(self) -> dict[str, object]:
        return {
            "path": self.source,
            "new_path": self.target,
            "tags": self.tags or [],
            "tags_synced": self.tags_synced,
        }


class RelocationError(Exception):
    """A move or write failed partway through a relocation."""

    def __init__(
        self,
        relocation: Relocation,
        reached: RelocationState,
        cause: OSError | UnicodeDecodeError,
    ) -> None:
        super().__init__(f"{relocation.source}: {cause}")
        self.relocation = relocation
        self.reached = reached
        self.cause = cause


class RelocationService(BaseService):
    """Category reassignment and archive toggling for vault documents."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    async def candidate_folders(self, rule_name: str) -> ServiceResult:
        """List the folders a document can be moved to with *rule_name*.

        The rule's base directory comes first, followed by every folder
        below it in pre-order.
        """
        op = "folders"
        resolved = await self._resolve_rule(op, rule_name)
        if isinstance(resolved, ServiceResult):
            return resolved
        rule, base = resolved

        folders = await all_subfolders(self._host, base)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "rule": rule.name,
                "directory": base,
                "count": len(folders),
                "items": [{"path": f.path, "name": f.name} for f in folders],
            },
        )

    @traced
    async def relocate_with_rule(
        self,
        document: str | None,
        rule_name: str,
        folder: str,
    ) -> ServiceResult:
        """Move *document* into *folder*, which must lie under the rule's base directory."""
        op = "relocate"
        resolved = await self._resolve_rule(op, rule_name)
        if isinstance(resolved, ServiceResult):
            return resolved
        rule, base = resolved

        try:
            wanted = normalize_path(folder)
        except ValueError as exc:
            return ServiceResult.failure(op, INVALID_DESTINATION, str(exc))
        if not is_within(wanted, base):
            return ServiceResult.failure(
                op, INVALID_DESTINATION, f"Folder {folder!r} is not under {base!r}"
            )

        return await self.relocate_one(document, wanted, rule.tag)

    @traced
    async def relocate_one(
        self,
        document: str | None,
        destination: str,
        label: str,
    ) -> ServiceResult:
        """Move *document* into *destination* and stamp ``<namespace>/<label>[/<folder>]``."""
        op = "relocate"
        source = await self._lookup_document(document)
        if source is None:
            return ServiceResult.failure(op, NO_ACTIVE_DOCUMENT, _no_document_message(document))

        folder = await self._lookup_folder(destination)
        if folder is None:
            return ServiceResult.failure(
                op, INVALID_DESTINATION, f"Destination is not a folder: {destination!r}"
            )

        dest = FolderRef(folder)
        target = join_path(dest.path, base_name(source))

        async def sync(path: str) -> list[str] | None:
            return await self._sync_category(path, label, dest)

        try:
            relocation = await self._relocate(source, target, sync)
        except RelocationError as exc:
            return _failure_from(op, exc)

        return ServiceResult(ok=True, op=op, data=relocation.to_dict())

    @traced
    async def toggle_archive_one(self, document: str | None, archiving: bool) -> ServiceResult:
        """Archive (or unarchive) a single document.

        Archiving mirrors the document's path under the archive root;
        unarchiving strips that prefix again and refuses documents that
        are not inside the archive root.
        """
        op = "archive" if archiving else "unarchive"
        if not self._settings.archive.enabled:
            return ServiceResult.failure(op, ARCHIVE_DISABLED, "Archive feature is disabled")

        source = await self._lookup_document(document)
        if source is None:
            return ServiceResult.failure(op, NO_ACTIVE_DOCUMENT, _no_document_message(document))

        target = self._archive_target(source, archiving)
        if target is None:
            return ServiceResult.failure(
                op,
                NOT_ARCHIVED,
                f"Document is not in the archive directory: {source}",
                archive_root=self.archive_root,
            )

        try:
            relocation = await self._relocate(source, target, self._archive_sync(archiving))
        except RelocationError as exc:
            return _failure_from(op, exc)

        return ServiceResult(ok=True, op=op, data=relocation.to_dict())

    @traced
    async def toggle_archive_folder(
        self,
        folder: str,
        archiving: bool | None = None,
    ) -> ServiceResult:
        """Archive or unarchive every document under *folder*.

        When *archiving* is None the direction follows the folder: folders
        inside the archive root are unarchived, all others archived.
        Documents already in the requested state are left out of the batch.
        """
        op = "archive_folder"
        if not self._settings.archive.enabled:
            return ServiceResult.failure(op, ARCHIVE_DISABLED, "Archive feature is disabled")

        root = await self._lookup_folder(folder)
        if root is None:
            return ServiceResult.failure(op, NO_ACTIVE_DOCUMENT, f"No such folder: {folder!r}")

        if archiving is None:
            archiving = not self._is_archived(root)
        direction = "archive" if archiving else "unarchive"

        # Snapshot the document list before anything moves.
        documents = await all_documents(self._host, root)
        if archiving:
            documents = [d for d in documents if not self._is_archived(d)]

        sync = self._archive_sync(archiving)
        success_count = 0
        for source in documents:
            target = self._archive_target(source, archiving)
            if target is None:
                logger.warning("relocation.batch_item_failed", path=source, reason="not_archived")
                continue
            try:
                await self._relocate(source, target, sync)
            except RelocationError as exc:
                logger.warning(
                    "relocation.batch_item_failed",
                    path=source,
                    reached=str(exc.reached),
                    reason=str(exc.cause),
                )
                continue
            success_count += 1

        total = len(documents)
        logger.info(
            "relocation.batch_complete",
            folder=root,
            direction=direction,
            success_count=success_count,
            total=total,
        )

        warnings: list[str] = []
        if success_count < total:
            warnings.append(f"{total - success_count} of {total} documents failed to relocate")

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "folder": root,
                "direction": direction,
                "success_count": success_count,
                "total": total,
            },
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    async def _relocate(self, source: str, target: str, sync: TagSync) -> Relocation:
        """Run one document through ENSURE DIRECTORY → MOVE → SYNC TAGS.

        Raises:
            RelocationError: The move failed, or the document could not be
                read or written back.
        """
        relocation = Relocation(source=source, target=target)
        try:
            with trace_span("ensure_directory"):
                await self._ensure_directory(parent_path(target))
            relocation.state = RelocationState.DIRECTORY_ENSURED

            with trace_span("move"):
                if source != target:
                    await self._host.move_document(source, target)
            relocation.state = RelocationState.MOVED
            logger.debug("relocation.moved", path=source, new_path=target)

            with trace_span("sync_tags"):
                relocation.tags = await sync(target)
            relocation.state = RelocationState.TAGS_SYNCED
        except (OSError, UnicodeDecodeError) as exc:
            # A document that is not UTF-8 cannot be retagged; it fails like an I/O error.
            reached = relocation.state
            relocation.state = RelocationState.FAILED
            raise RelocationError(relocation, reached, exc) from exc

        relocation.state = RelocationState.DONE
        return relocation

    async def _ensure_directory(self, folder: str) -> None:
        if not folder:
            return
        try:
            await self._host.create_directory(folder)
        except OSError:
            # Treated as "already exists"; a real problem surfaces at the move.
            logger.debug("relocation.create_directory_failed", folder=folder, exc_info=True)

    # ------------------------------------------------------------------
    # Tag synchronization
    # ------------------------------------------------------------------

    async def _sync_category(
        self,
        path: str,
        label: str,
        destination: FolderRef,
    ) -> list[str] | None:
        text = await self._host.read_document(path)
        try:
            tags, has_block = extract_tags(text)
        except MalformedMetadataError as exc:
            logger.warning("relocation.tags_skipped", path=path, reason=str(exc))
            return None

        new_tags = recategorize(tags, self.namespace, label, destination)
        if has_block:
            new_text = replace_tags(text, new_tags)
        else:
            new_text = synthesize_block(text, new_tags)
        await self._host.write_document(path, new_text)
        return new_tags

    def _archive_sync(self, archiving: bool) -> TagSync:
        async def sync(path: str) -> list[str] | None:
            return await self._sync_archive(path, archiving)

        return sync

    async def _sync_archive(self, path: str, archiving: bool) -> list[str] | None:
        # Documents without metadata have no managed tag to toggle.
        if await self._host.get_metadata_snapshot(path) is None:
            return None

        text = await self._host.read_document(path)
        try:
            tags, has_block = extract_tags(text)
        except MalformedMetadataError as exc:
            logger.warning("relocation.tags_skipped", path=path, reason=str(exc))
            return None
        if not has_block:
            return None

        new_tags = toggle_archive(tags, self.namespace, archiving)
        if new_tags != tags:
            await self._host.write_document(path, replace_tags(text, new_tags))
        return new_tags

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def _resolve_rule(
        self,
        op: str,
        rule_name: str,
    ) -> tuple[DestinationRule, str] | ServiceResult:
        """Find a rule and its existing base folder, or a failure result."""
        rule = self._settings.find_rule(rule_name)
        if rule is None:
            return ServiceResult.failure(
                op, UNKNOWN_RULE, f"No destination rule named {rule_name!r}"
            )

        base = await self._lookup_folder(rule.directory)
        if base is None:
            return ServiceResult.failure(
                op,
                INVALID_DESTINATION,
                f"Invalid base directory for rule {rule.name!r}: {rule.directory!r}",
            )
        return rule, base

    async def _lookup_document(self, document: str | None) -> str | None:
        """Normalized path of an existing document, or None."""
        if not document:
            return None
        try:
            path = normalize_path(document)
        except ValueError:
            return None
        if not path:
            return None
        entry = await self._host.resolve(path)
        if entry is None or entry.is_folder:
            return None
        return path

    async def _lookup_folder(self, folder: str) -> str | None:
        """Normalized path of an existing folder (``""`` is the vault root), or None."""
        try:
            path = normalize_path(folder)
        except ValueError:
            return None
        entry = await self._host.resolve(path)
        if entry is None or not entry.is_folder:
            return None
        return path

    def _is_archived(self, path: str) -> bool:
        return is_within(path, self.archive_root)

    def _archive_target(self, path: str, archiving: bool) -> str | None:
        if archiving:
            return archive_path(path, self.archive_root)
        return unarchive_path(path, self.archive_root)


def _no_document_message(document: str | None) -> str:
    if not document:
        return "No active document"
    return f"No such document: {document!r}"


def _failure_from(op: str, exc: RelocationError) -> ServiceResult:
    return ServiceResult.failure(
        op,
        RELOCATION_FAILED,
        f"Could not relocate {exc.relocation.source}: {exc.cause}",
        path=exc.relocation.source,
        new_path=exc.relocation.target,
        reached=str(exc.reached),
    )
