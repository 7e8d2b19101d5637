"""Render the SUMMARY.md index of a mirrored book."""

import io
from collections.abc import Iterable
from pathlib import Path
from urllib.parse import quote

from yuque_mirror.config import SUMMARY_FILE_NAME
from yuque_mirror.models.toc import ResolvedEntry


def render_summary(book_name: str, book_desc: str, entries: Iterable[ResolvedEntry]) -> str:
    """Render entries as a nested markdown list.

    Args:
        book_name: Used as the top-level heading.
        book_desc: Quoted below the heading when non-empty.
        entries: Resolved entries in original TOC order.

    Returns:
        Markdown text. Directories are plain items, articles link to their file.
    """
    out = io.StringIO()
    out.write(f"# {book_name}\n\n")
    if book_desc:
        for line in book_desc.splitlines():
            out.write(f"> {line}\n")
        out.write("\n")

    for entry in entries:
        indent = "    " * max(entry.depth - 1, 0)
        title = entry.node.title.replace("\n", " ").strip()
        if entry.is_leaf:
            out.write(f"{indent}- [{title}]({quote(entry.local_path)})\n")
        else:
            out.write(f"{indent}- {title}\n")

    return out.getvalue()


def write_summary(
    book_path: Path, book_name: str, book_desc: str, entries: Iterable[ResolvedEntry]
) -> Path:
    """Write SUMMARY.md into the book directory, replacing any previous one."""
    target = book_path / SUMMARY_FILE_NAME
    target.write_text(render_summary(book_name, book_desc, entries), encoding="utf-8")
    return target
