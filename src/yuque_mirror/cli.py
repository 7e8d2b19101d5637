"""Command-line interface for yuque-mirror."""

from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from yuque_mirror.api import YuqueApi, article_url_prefix
from yuque_mirror.config import DEFAULT_DIST_DIR
from yuque_mirror.core.sync.orchestrator import BookSyncer
from yuque_mirror.errors import FetchError
from yuque_mirror.logging_config import configure_logging
from yuque_mirror.models.toc import RunReport
from yuque_mirror.protocols import YuqueClientProtocol


def run_mirror(
    client: YuqueClientProtocol,
    url: str,
    dist_dir: Path,
    *,
    show_progress: bool = True,
) -> RunReport:
    """Fetch the book behind ``url`` and mirror it into ``dist_dir``.

    Raises:
        FetchError: The knowledge-base page could not be fetched or parsed.
        ValueError: The page carries no book id or an empty TOC.
    """
    book = client.fetch_book_info(url)
    logger.debug(f"Book {book.book_id!r} ({book.name!r}): {len(book.toc)} TOC items")
    syncer = BookSyncer(
        client,
        dist_dir,
        source_url_prefix=article_url_prefix(url, book.slug),
        show_progress=show_progress,
    )
    return syncer.run(book)


def main(
    url: str = typer.Argument(..., help="Knowledge-base URL, e.g. https://www.yuque.com/<group>/<book>"),
    dist_dir: Annotated[
        Path,
        typer.Option("--dist-dir", "-d", help="Directory to download into"),
    ] = DEFAULT_DIST_DIR,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    no_progress: bool = typer.Option(False, "--no-progress", help="Hide the progress bar"),
) -> None:
    """Download a Yuque knowledge base as markdown files."""
    configure_logging(verbose=verbose)
    try:
        run_mirror(YuqueApi(), url, dist_dir.expanduser(), show_progress=not no_progress)
    except (FetchError, ValueError) as e:
        logger.error(str(e))
        raise typer.Exit(1) from e


app = typer.Typer(help="Mirror a Yuque knowledge base into local markdown files.")
app.command()(main)
