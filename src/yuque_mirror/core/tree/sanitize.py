"""Turn untrusted titles into safe path segments."""

import re
from collections.abc import Iterable

_ILLEGAL_CHARS_RE = re.compile(r'[\\/:*?"<>|\n\r]')
_WHITESPACE_RE = re.compile(r"\s")


def sanitize_title(title: str) -> str:
    """Replace characters illegal in a path component with '_'.

    Only the first whitespace character is removed afterwards; embedded
    spaces further along are kept as they are.
    """
    return _WHITESPACE_RE.sub("", _ILLEGAL_CHARS_RE.sub("_", title), count=1)


def local_path(segments: Iterable[str]) -> str:
    """Join sanitized segments into a path that stays below its base directory.

    Empty segments are dropped and '.' or '..' become underscores, so the
    result is never absolute and never climbs out.
    """
    parts = []
    for segment in segments:
        if not segment:
            continue
        if set(segment) == {"."}:
            segment = "_" * len(segment)
        parts.append(segment)
    return "/".join(parts)
