"""Shared test fixtures."""

from collections.abc import Iterator

import pytest
from loguru import logger

from tests.unit.fakes import make_book
from yuque_mirror.models.toc import BookInfo


@pytest.fixture
def book() -> BookInfo:
    return make_book()


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Capture loguru messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
