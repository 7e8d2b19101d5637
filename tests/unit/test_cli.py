"""Tests for the yuque-mirror CLI."""

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from tests.unit.fakes import FakeYuqueClient, make_book
from yuque_mirror.cli import app, run_mirror
from yuque_mirror.errors import FetchError

runner = CliRunner()

BOOK_URL = "https://www.yuque.com/group/handbook/some-doc"


@pytest.fixture
def fake_client() -> Iterator[FakeYuqueClient]:
    """Patch YuqueApi so the CLI talks to an in-memory fake."""
    client = FakeYuqueClient(make_book())
    with patch("yuque_mirror.cli.YuqueApi", return_value=client):
        yield client


def test_run_mirror_fetches_book_and_builds_source_urls(tmp_path: Path) -> None:
    client = FakeYuqueClient(make_book())

    report = run_mirror(client, BOOK_URL, tmp_path, show_progress=False)

    assert report.complete
    assert client.book_calls == [BOOK_URL]
    assert client.calls[0]["source_url"] == "https://www.yuque.com/group/handbook/x1"


def test_cli_downloads_book(tmp_path: Path, fake_client: FakeYuqueClient) -> None:
    result = runner.invoke(app, [BOOK_URL, "--dist-dir", str(tmp_path), "--no-progress"])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "42" / "SUMMARY.md").exists()
    assert fake_client.fetched_refs == ["x1", "x2", "x3"]


def test_cli_exits_zero_when_some_articles_fail(
    tmp_path: Path, fake_client: FakeYuqueClient
) -> None:
    fake_client.failing = {"x2"}

    result = runner.invoke(app, [BOOK_URL, "-d", str(tmp_path), "--no-progress"])

    assert result.exit_code == 0, result.output
    assert not (tmp_path / "42" / "Intro" / "DeepDive" / "a_b.md").exists()


def test_cli_exits_nonzero_without_book_id(tmp_path: Path, fake_client: FakeYuqueClient) -> None:
    fake_client.book = make_book(book_id=None)

    result = runner.invoke(app, [BOOK_URL, "-d", str(tmp_path), "--no-progress"])

    assert result.exit_code == 1
    assert list(tmp_path.iterdir()) == []


def test_cli_exits_nonzero_on_empty_toc(tmp_path: Path, fake_client: FakeYuqueClient) -> None:
    fake_client.book = make_book([])

    result = runner.invoke(app, [BOOK_URL, "-d", str(tmp_path), "--no-progress"])

    assert result.exit_code == 1


def test_cli_exits_nonzero_when_page_fetch_fails(tmp_path: Path) -> None:
    client = FakeYuqueClient()
    with (
        patch.object(client, "fetch_book_info", side_effect=FetchError("http status 404")),
        patch("yuque_mirror.cli.YuqueApi", return_value=client),
    ):
        result = runner.invoke(app, [BOOK_URL, "-d", str(tmp_path), "--no-progress"])

    assert result.exit_code == 1
    assert client.calls == []
