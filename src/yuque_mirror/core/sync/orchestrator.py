"""Drive one resumable pass over a knowledge-base TOC."""

from collections.abc import Callable
from pathlib import Path

from loguru import logger
from tqdm import tqdm

from yuque_mirror.core.progress.store import ProgressStore
from yuque_mirror.core.summary.render import write_summary
from yuque_mirror.core.tree.resolver import ResolutionMap, resolve_toc
from yuque_mirror.errors import FetchError
from yuque_mirror.models.toc import BookInfo, ResolvedEntry, RunReport
from yuque_mirror.protocols import DocumentFetcherProtocol


def _make_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


class BookSyncer:
    """Mirror one book into ``<dist_dir>/<book_id>``.

    Directories are created and recorded right away. Articles are fetched one
    at a time; a failed article is reported but left unrecorded so the next
    run retries it.
    """

    def __init__(
        self,
        fetcher: DocumentFetcherProtocol,
        dist_dir: str | Path,
        *,
        source_url_prefix: str = "",
        show_progress: bool = True,
        make_dir: Callable[[Path], None] = _make_dir,
    ) -> None:
        self._fetcher = fetcher
        self.dist_dir = Path(dist_dir)
        self.source_url_prefix = source_url_prefix.rstrip("/")
        self.show_progress = show_progress
        self._make_dir = make_dir

    def book_path(self, book: BookInfo) -> Path:
        return self.dist_dir / str(book.book_id)

    def run(self, book: BookInfo, store: ProgressStore | None = None) -> RunReport:
        """Sync the whole book and regenerate its summary.

        Args:
            book: Book metadata and TOC.
            store: Progress store to use. Defaults to the one inside the book directory.

        Raises:
            ValueError: The book has no id or an empty TOC. Nothing is written.
        """
        if not book.book_id:
            msg = "No book id found"
            raise ValueError(msg)
        if not book.toc:
            msg = "No toc list found"
            raise ValueError(msg)

        book_path = self.book_path(book)
        total = len(book.toc)
        if store is None:
            store = ProgressStore(book_path, total)
        prior = store.load()

        if store.is_complete():
            logger.info("√ Already complete")
            return RunReport(complete=True)
        if store.is_interrupted():
            logger.info(f"Resuming interrupted download: {store.completed_count}/{total} done")

        self._make_dir(book_path)
        resolution_map, skip = resolve_toc(book.toc, prior)
        report = RunReport()
        failed_ids: set[str] = set()
        handled = set(skip)

        with tqdm(
            total=total,
            initial=store.completed_count,
            unit="item",
            disable=not self.show_progress,
        ) as bar:
            for node in book.toc:
                if node.uuid in handled:
                    continue
                entry = resolution_map.get(node.uuid)
                if entry is None:
                    continue
                handled.add(node.uuid)

                if entry.is_leaf:
                    report.total_articles += 1
                    if self._download(book, book_path, entry):
                        store.append(entry, True)
                    else:
                        failed_ids.add(entry.id)
                        report.failed_articles.append(entry)
                else:
                    self._make_dir(book_path / entry.local_path)
                    store.append(entry, True)
                bar.update(1)

        self._report_failures(report)

        # Articles that failed this run have no file on disk and are left out of the index.
        write_summary(
            book_path,
            book.name,
            book.description,
            _entries_in_toc_order(book, resolution_map, exclude=failed_ids),
        )
        logger.info("√ Generated summary SUMMARY.md")

        report.complete = store.is_complete()
        if report.complete:
            logger.info("√ Complete")
        return report

    def _download(self, book: BookInfo, book_path: Path, entry: ResolvedEntry) -> bool:
        node = entry.node
        source_url = f"{self.source_url_prefix}/{node.url}" if self.source_url_prefix else ""
        try:
            self._fetcher.fetch_document(
                book_id=int(book.book_id or 0),
                container_dir=book_path / entry.parent_path,
                dest_file=book_path / entry.local_path,
                target_ref=node.url,
                context_id=node.uuid,
                title=node.title,
                source_url=source_url,
            )
        except FetchError as e:
            logger.error(f"✕ {e}")
            return False
        logger.debug(f"Downloaded {entry.path!r}")
        return True

    def _report_failures(self, report: RunReport) -> None:
        if not report.failed_articles:
            return
        logger.info(
            f"Articles this run: {report.total_articles}, "
            f"✕ failed: {len(report.failed_articles)}"
        )
        for entry in report.failed_articles:
            logger.error(f"✕ {entry.path}")
        logger.info("The failures above are likely network hiccups, please run the command again")


def _entries_in_toc_order(
    book: BookInfo, resolution_map: ResolutionMap, *, exclude: set[str]
) -> list[ResolvedEntry]:
    entries: list[ResolvedEntry] = []
    seen: set[str] = set()
    for node in book.toc:
        entry = resolution_map.get(node.uuid)
        if entry is None or node.uuid in seen or node.uuid in exclude:
            continue
        seen.add(node.uuid)
        entries.append(entry)
    return entries
