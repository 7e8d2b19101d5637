"""Domain models for a Yuque knowledge base."""

from dataclasses import dataclass, field
from typing import Any

from yuque_mirror.core.tree.sanitize import local_path


@dataclass(frozen=True)
class TocNode:
    """A single item of the flattened knowledge-base TOC."""

    uuid: str
    title: str
    type: str | None = None
    parent_uuid: str = ""
    child_uuid: str = ""
    url: str = ""

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "TocNode":
        raw_type = raw.get("type")
        return cls(
            uuid=str(raw.get("uuid") or ""),
            title=str(raw.get("title") or ""),
            type=raw_type if isinstance(raw_type, str) else None,
            parent_uuid=str(raw.get("parent_uuid") or ""),
            child_uuid=str(raw.get("child_uuid") or ""),
            url=str(raw.get("url") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "uuid": self.uuid,
            "title": self.title,
            "type": self.type,
            "parent_uuid": self.parent_uuid,
            "child_uuid": self.child_uuid,
            "url": self.url,
        }

    @property
    def is_directory(self) -> bool:
        """A TITLE item, or any item that has children."""
        if self.type is None:
            return False
        return self.type.lower() == "title" or self.child_uuid != ""

    @property
    def is_leaf(self) -> bool:
        """An item with a downloadable article behind it."""
        return self.type is not None and not self.is_directory and self.url != ""


@dataclass(frozen=True)
class BookInfo:
    """Knowledge-base metadata plus its TOC, in pre-order."""

    book_id: int | None = None
    slug: str = ""
    name: str = ""
    description: str = ""
    toc: tuple[TocNode, ...] = ()


@dataclass(frozen=True)
class ResolvedEntry:
    """A TOC node with its computed location under the book directory.

    ``path`` is ``title_segments`` joined with '/'; for leaves the last segment
    carries the ``.md`` suffix. ``id_segments`` is the ancestor uuid chain,
    root first, ending with the node itself.
    """

    id: str
    path: str
    title_segments: tuple[str, ...]
    id_segments: tuple[str, ...]
    node: TocNode

    @property
    def is_leaf(self) -> bool:
        return self.node.is_leaf

    @property
    def depth(self) -> int:
        return len(self.id_segments)

    @property
    def local_path(self) -> str:
        """``path`` made safe to join onto the book directory."""
        return local_path(self.title_segments)

    @property
    def parent_path(self) -> str:
        """Relative directory containing this entry ('' for the book root)."""
        return local_path(self.title_segments[:-1])

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "path": self.path,
            "title_segments": list(self.title_segments),
            "id_segments": list(self.id_segments),
            "node": self.node.to_dict(),
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "ResolvedEntry":
        return cls(
            id=raw["id"],
            path=raw["path"],
            title_segments=tuple(raw["title_segments"]),
            id_segments=tuple(raw["id_segments"]),
            node=TocNode.from_dict(raw["node"]),
        )


@dataclass(frozen=True)
class ProgressRecord:
    """One durably stored outcome for one node."""

    entry: ResolvedEntry
    success: bool


@dataclass
class RunReport:
    """Outcome of one synchronization pass."""

    total_articles: int = 0
    failed_articles: list[ResolvedEntry] = field(default_factory=list)
    complete: bool = False
