"""Protocols for dependency injection in the mirror tool."""

from pathlib import Path
from typing import Protocol, runtime_checkable

from yuque_mirror.models.toc import BookInfo


@runtime_checkable
class BookSourceProtocol(Protocol):
    """Protocol for clients that fetch knowledge-base metadata and TOC."""

    def fetch_book_info(self, url: str) -> BookInfo:
        """Fetch the book behind a knowledge-base URL."""
        ...


@runtime_checkable
class DocumentFetcherProtocol(Protocol):
    """Protocol for clients that download a single article to disk."""

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
        """Download one article. Raises FetchError on any failure."""
        ...


@runtime_checkable
class YuqueClientProtocol(BookSourceProtocol, DocumentFetcherProtocol, Protocol):
    """Protocol for clients that play both collaborator roles."""
