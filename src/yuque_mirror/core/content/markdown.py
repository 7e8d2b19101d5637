"""Post-process article markdown: local images, header and footer."""

import re
from pathlib import Path
from urllib.parse import unquote, urlparse

import requests
from loguru import logger

from yuque_mirror.config import IMAGE_DIR_NAME, REQUEST_TIMEOUT
from yuque_mirror.errors import FetchError

_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\((\S+?)(\s+\"[^\"]*\")?\)")
_BR_RE = re.compile(r"<br(\s?)/>")
_UNSAFE_NAME_RE = re.compile(r"[^A-Za-z0-9._-]+")


def _image_basename(url: str, index: int) -> str:
    name = unquote(Path(urlparse(url).path).name)
    name = _UNSAFE_NAME_RE.sub("_", name).strip("._")
    return name or f"image-{index}"


def _unique_name(name: str, taken: set[str]) -> str:
    stem, suffix = Path(name).stem, Path(name).suffix
    candidate = name
    count = 0
    while candidate in taken:
        count += 1
        candidate = f"{stem}-{count}{suffix}"
    taken.add(candidate)
    return candidate


def localize_images(
    markdown: str,
    *,
    session: requests.Session,
    container_dir: Path,
    context_id: str,
    headers: dict[str, str] | None = None,
) -> str:
    """Download every remote markdown image and point the link at the local copy.

    Images are saved to ``<container_dir>/img/<context_id>/`` and linked as
    ``./img/<context_id>/<name>``. Any download failure raises FetchError.
    """
    rel_dir = f"{IMAGE_DIR_NAME}/{context_id}"
    image_dir = container_dir / rel_dir
    taken: set[str] = set()
    saved: dict[str, str] = {}

    def replace(match: re.Match[str]) -> str:
        alt, url, title = match.group(1), match.group(2), match.group(3) or ""
        if not url.startswith(("http://", "https://")):
            return match.group(0)
        if url not in saved:
            name = _unique_name(_image_basename(url, len(saved) + 1), taken)
            try:
                r = session.get(url, headers=headers, timeout=REQUEST_TIMEOUT)
                r.raise_for_status()
            except requests.RequestException as e:
                msg = f"download article image Error {url}: {e}"
                raise FetchError(msg) from e
            try:
                image_dir.mkdir(parents=True, exist_ok=True)
                (image_dir / name).write_bytes(r.content)
            except OSError as e:
                msg = f"download article image Error {url}: {e}"
                raise FetchError(msg) from e
            logger.debug(f"Saved image {url!r} -> {str(image_dir / name)!r}")
            saved[url] = f"./{rel_dir}/{name}"
        return f"![{alt}]({saved[url]}{title})"

    return _IMAGE_RE.sub(replace, markdown)


def decorate_article(markdown: str, *, title: str, source_url: str) -> str:
    """Normalize line breaks, add the title header and the source footer."""
    text = _BR_RE.sub("\n", markdown)
    if title:
        text = f"# {title}\n<!--page header-->\n\n{text}\n\n"
    if source_url:
        text += f"<!--page footer-->\n- 原文: <{source_url}>"
    return text
