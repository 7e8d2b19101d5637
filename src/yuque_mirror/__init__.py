"""Mirror Yuque knowledge bases into local markdown files."""

from yuque_mirror.api import YuqueApi
from yuque_mirror.core.progress.store import ProgressStore
from yuque_mirror.core.sync.orchestrator import BookSyncer
from yuque_mirror.errors import FetchError
from yuque_mirror.protocols import (
    BookSourceProtocol,
    DocumentFetcherProtocol,
    YuqueClientProtocol,
)

__all__ = [
    "BookSourceProtocol",
    "BookSyncer",
    "DocumentFetcherProtocol",
    "FetchError",
    "ProgressStore",
    "YuqueApi",
    "YuqueClientProtocol",
]
