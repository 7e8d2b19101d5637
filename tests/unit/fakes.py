"""Fake implementations for testing the mirror tool."""

from pathlib import Path
from typing import Any

from yuque_mirror.errors import FetchError
from yuque_mirror.models.toc import BookInfo, TocNode

SAMPLE_TOC: list[dict[str, Any]] = [
    {"uuid": "A", "parent_uuid": "", "child_uuid": "B", "type": "TITLE", "title": "Intro"},
    {"uuid": "B", "parent_uuid": "A", "type": "DOC", "title": "Hello", "url": "x1"},
    {"uuid": "C", "parent_uuid": "A", "child_uuid": "D", "type": "TITLE", "title": "Deep Dive"},
    {"uuid": "D", "parent_uuid": "C", "type": "DOC", "title": "a/b", "url": "x2"},
    {"uuid": "E", "parent_uuid": "", "type": "DOC", "title": "FAQ", "url": "x3"},
]


def make_book(
    toc: list[dict[str, Any]] | None = None,
    *,
    book_id: int | None = 42,
    name: str = "Handbook",
    description: str = "All the things",
) -> BookInfo:
    """Create a BookInfo from raw TOC dicts."""
    raw = SAMPLE_TOC if toc is None else toc
    return BookInfo(
        book_id=book_id,
        slug="handbook",
        name=name,
        description=description,
        toc=tuple(TocNode.from_dict(x) for x in raw),
    )


class FakeYuqueClient:
    """In-memory fake for YuqueApi.

    Serves a fixed book, writes small article files, and records all fetch calls.
    Articles whose url is in ``failing`` raise FetchError.
    """

    def __init__(self, book: BookInfo | None = None) -> None:
        self.book = book or BookInfo()
        self.failing: set[str] = set()
        self.book_calls: list[str] = []
        self.calls: list[dict[str, Any]] = []

    def fetch_book_info(self, url: str) -> BookInfo:
        self.book_calls.append(url)
        return self.book

    def fetch_document(
        self,
        *,
        book_id: int,
        container_dir: Path,
        dest_file: Path,
        target_ref: str,
        context_id: str,
        title: str,
        source_url: str,
    ) -> None:
        """Record the call, then write ``# title`` to dest_file or fail."""
        self.calls.append(
            {
                "book_id": book_id,
                "container_dir": container_dir,
                "dest_file": dest_file,
                "target_ref": target_ref,
                "context_id": context_id,
                "title": title,
                "source_url": source_url,
            }
        )
        if target_ref in self.failing:
            msg = f"download article Error: {target_ref}"
            raise FetchError(msg)
        dest_file.write_text(f"# {title}\n", encoding="utf-8")

    @property
    def fetched_refs(self) -> list[str]:
        return [c["target_ref"] for c in self.calls]
