"""Tag domain logic — managed-tag parsing and the two tag transforms.

A tag is *managed* when its first ``/``-separated segment equals the
configured category namespace. Managed tags have the shape::

    <namespace>[/archive]/<category>[/<qualifier>...]

where the ``archive`` segment, when present, is always the second one.
Both transforms are pure: they take a tag list and return a new one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Self

if TYPE_CHECKING:
    from paractl.domain.paths import FolderRef

TAG_SEPARATOR = "/"
ARCHIVE_SEGMENT = "archive"


@dataclass(frozen=True)
class ManagedTag:
    """A namespace-prefixed tag split into its structural parts.

    ``str(tag)`` rebuilds the exact segment-joined form.

    Examples:
        >>> t = ManagedTag.parse("para/archive/projects/Alpha", "para")
        >>> t.archived, t.rest
        (True, ('projects', 'Alpha'))
        >>> str(t.with_archived(False))
        'para/projects/Alpha'
    """

    namespace: str
    archived: bool
    rest: tuple[str, ...]

    @classmethod
    def parse(cls, tag: str, namespace: str) -> Self | None:
        """Parse *tag* if it is managed by *namespace*, else return None."""
        segments = tag.split(TAG_SEPARATOR)
        if segments[0] != namespace:
            return None
        archived = len(segments) > 1 and segments[1] == ARCHIVE_SEGMENT
        rest = segments[2:] if archived else segments[1:]
        return cls(namespace=namespace, archived=archived, rest=tuple(rest))

    @property
    def category(self) -> str | None:
        return self.rest[0] if self.rest else None

    def with_archived(self, archived: bool) -> ManagedTag:
        return ManagedTag(namespace=self.namespace, archived=archived, rest=self.rest)

    def __str__(self) -> str:
        segments = [self.namespace]
        if self.archived:
            segments.append(ARCHIVE_SEGMENT)
        segments.extend(self.rest)
        return TAG_SEPARATOR.join(segments)


def is_managed(tag: str, namespace: str) -> bool:
    """Whether *tag*'s first segment is *namespace*."""
    return tag.split(TAG_SEPARATOR, 1)[0] == namespace


def category_tag(namespace: str, label: str, destination: FolderRef) -> str:
    """Build the managed tag for a document filed under *destination*.

    Top-level folders get ``<namespace>/<label>``; nested folders also
    carry the folder's own name as a qualifier.
    """
    if destination.is_top_level:
        return TAG_SEPARATOR.join((namespace, label))
    return TAG_SEPARATOR.join((namespace, label, destination.name))


def recategorize(
    tags: list[str],
    namespace: str,
    label: str,
    destination: FolderRef,
) -> list[str]:
    """Replace every managed tag with a single one derived from *destination*.

    Unmanaged tags keep their relative order; the new tag goes last.
    """
    kept = [tag for tag in tags if not is_managed(tag, namespace)]
    kept.append(category_tag(namespace, label, destination))
    return kept


def toggle_archive(tags: list[str], namespace: str, archiving: bool) -> list[str]:
    """Insert or remove the ``archive`` segment on every managed tag.

    Tags outside *namespace*, or already in the requested state, pass
    through unchanged, so applying the same direction twice is a no-op.
    """
    result: list[str] = []
    for tag in tags:
        managed = ManagedTag.parse(tag, namespace)
        if managed is None or managed.archived == archiving:
            result.append(tag)
        else:
            result.append(str(managed.with_archived(archiving)))
    return result
