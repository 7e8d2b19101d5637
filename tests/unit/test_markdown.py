"""Tests for article markdown post-processing."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

from yuque_mirror.core.content.markdown import decorate_article, localize_images
from yuque_mirror.errors import FetchError


def _session(content: bytes = b"PNG") -> MagicMock:
    session = MagicMock()
    session.get.return_value.content = content
    return session


def test_localize_images_downloads_and_rewrites_links(tmp_path: Path) -> None:
    session = _session()
    md = "Intro\n![diagram](https://cdn.example.com/a/b/pic.png#averageHue=%23fff \"Title\")\n"

    result = localize_images(md, session=session, container_dir=tmp_path, context_id="B")

    assert result == 'Intro\n![diagram](./img/B/pic.png "Title")\n'
    assert (tmp_path / "img" / "B" / "pic.png").read_bytes() == b"PNG"


def test_localize_images_deduplicates_names_and_reuses_same_url(tmp_path: Path) -> None:
    session = _session()
    md = (
        "![](https://a.example.com/x/pic.png)\n"
        "![](https://b.example.com/y/pic.png)\n"
        "![](https://a.example.com/x/pic.png)\n"
    )

    result = localize_images(md, session=session, container_dir=tmp_path, context_id="B")

    assert result.splitlines() == [
        "![](./img/B/pic.png)",
        "![](./img/B/pic-1.png)",
        "![](./img/B/pic.png)",
    ]
    assert session.get.call_count == 2


def test_localize_images_leaves_relative_links_alone(tmp_path: Path) -> None:
    session = _session()
    md = "![local](./already/here.png)"

    assert localize_images(md, session=session, container_dir=tmp_path, context_id="B") == md
    session.get.assert_not_called()


def test_localize_images_raises_fetch_error_on_download_failure(tmp_path: Path) -> None:
    session = _session()
    session.get.return_value.raise_for_status.side_effect = requests.HTTPError("403")

    with pytest.raises(FetchError, match="image"):
        localize_images(
            "![](https://cdn.example.com/p.png)",
            session=session,
            container_dir=tmp_path,
            context_id="B",
        )


def test_decorate_article_without_title_or_url_only_fixes_breaks() -> None:
    assert decorate_article("a<br/>b", title="", source_url="") == "a\nb"
