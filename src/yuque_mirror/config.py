"""Configuration constants for yuque-mirror."""

from pathlib import Path

YUQUE_HOST: str = "https://www.yuque.com"

# Article markdown endpoint, the TOC item url is appended.
DOCS_API_URL: str = f"{YUQUE_HOST}/api/docs"

# Seconds, applied to every HTTP request.
REQUEST_TIMEOUT: float = 30.0

# Desktop browser user agents. One is picked at random per request.
USER_AGENTS: list[str] = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/123.0.0.0 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/122.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/121.0.0.0 Safari/537.36 Edg/121.0.0.0",
]

# Per-book files, relative to <dist_dir>/<book_id>.
PROGRESS_FILE_NAME: str = "progress.jsonl"
SUMMARY_FILE_NAME: str = "SUMMARY.md"

# Images of an article land in <article dir>/<IMAGE_DIR_NAME>/<article uuid>/.
IMAGE_DIR_NAME: str = "img"

DEFAULT_DIST_DIR: Path = Path("download")
