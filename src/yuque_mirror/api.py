"""Yuque web client: knowledge-base TOC and article markdown."""

import json
import random
import re
from pathlib import Path
from typing import Any
from urllib.parse import unquote

import requests
from loguru import logger

from yuque_mirror.config import DOCS_API_URL, REQUEST_TIMEOUT, USER_AGENTS
from yuque_mirror.core.content.markdown import decorate_article, localize_images
from yuque_mirror.errors import FetchError
from yuque_mirror.models.toc import BookInfo, TocNode

_BOOK_DATA_RE = re.compile(r'decodeURIComponent\("(.+)"\)\);', re.MULTILINE)


def random_user_agent() -> str:
    return random.choice(USER_AGENTS)


def parse_book_info(html: str) -> BookInfo:
    """Extract the book embedded in a knowledge-base page.

    Returns an empty BookInfo when the page carries no book data.
    """
    match = _BOOK_DATA_RE.search(html)
    if not match:
        return BookInfo()
    try:
        data = json.loads(unquote(match.group(1)))
    except ValueError as e:
        msg = f"Cannot parse book data: {e}"
        raise FetchError(msg) from e

    book = data.get("book") if isinstance(data, dict) else None
    if not book:
        return BookInfo()
    return BookInfo(
        book_id=book.get("id"),
        slug=book.get("slug") or "",
        name=book.get("name") or "",
        description=book.get("description") or "",
        toc=tuple(TocNode.from_dict(x) for x in book.get("toc") or []),
    )


def article_url_prefix(url: str, slug: str) -> str:
    """Cut a knowledge-base URL right after its ``/<slug>`` part."""
    if not slug:
        return url.rstrip("/")
    return re.sub(rf"(.*?/{re.escape(slug)}).*", r"\1", url, count=1, flags=re.DOTALL)


class YuqueApi:
    """Anonymous client for public Yuque knowledge bases."""

    def __init__(self) -> None:
        self.sess = requests.Session()

    def _get(self, url: str, **kwargs: Any) -> requests.Response:
        headers = {"user-agent": random_user_agent()}
        logger.debug(f"GET {url!r}")
        try:
            r = self.sess.get(url, headers=headers, timeout=REQUEST_TIMEOUT, **kwargs)
        except requests.RequestException as e:
            msg = f"GET {url} failed: {e}"
            raise FetchError(msg) from e
        if r.status_code != 200:
            msg = f"GET {url} failed: http status {r.status_code}"
            raise FetchError(msg)
        return r

    def fetch_book_info(self, url: str) -> BookInfo:
        """Fetch and parse the knowledge-base page."""
        return parse_book_info(self._get(url).text)

    def fetch_article_markdown(self, *, book_id: int, target_ref: str) -> str:
        """Fetch raw markdown source of one article."""
        api_url = f"{DOCS_API_URL}/{target_ref}"
        params = {"book_id": str(book_id), "merge_dynamic_data": "false", "mode": "markdown"}
        try:
            body = self._get(api_url, params=params).json()
        except (FetchError, ValueError) as e:
            msg = f"download article Error: {api_url} {e}"
            raise FetchError(msg) from e

        data = body.get("data") if isinstance(body, dict) else None
        sourcecode = data.get("sourcecode") if isinstance(data, dict) else None
        if not isinstance(sourcecode, str):
            msg = f"download article Error: {api_url}"
            raise FetchError(msg)
        return sourcecode

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
        """Download an article with its images and write it to ``dest_file``."""
        markdown = self.fetch_article_markdown(book_id=book_id, target_ref=target_ref)
        markdown = localize_images(
            markdown,
            session=self.sess,
            container_dir=container_dir,
            context_id=context_id,
            headers={"user-agent": random_user_agent()},
        )
        text = decorate_article(markdown, title=title, source_url=source_url)
        try:
            dest_file.write_text(text, encoding="utf-8")
        except OSError as e:
            msg = f"download article Error {source_url}: {e}"
            raise FetchError(msg) from e
