"""Tests for markdown_toc.logging."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from markdown_toc import insert
from markdown_toc.logging import configure_logging, get_logger


@pytest.fixture
def restore_package_logger():
    logger = logging.getLogger("markdown_toc")
    saved = (logger.level, logger.propagate, list(logger.handlers))
    yield logger
    logger.setLevel(saved[0])
    logger.propagate = saved[1]
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in saved[2]:
        logger.addHandler(handler)


def test_get_logger_namespaces_under_package() -> None:
    assert get_logger().name == "markdown_toc"
    assert get_logger("builder").name == "markdown_toc.builder"


def test_configure_logging_replaces_handlers(tmp_path: Path, restore_package_logger) -> None:
    log_file = tmp_path / "toc.log"
    configure_logging(verbose=True)
    logger = configure_logging(verbose=True, log_file=log_file)

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2

    insert("<!-- toc -->\n# AAA\n")
    for handler in logger.handlers:
        handler.flush()
    assert "Start marker on line 1" in log_file.read_text(encoding="utf-8")


def test_core_logs_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="markdown_toc"):
        insert("# AAA\n")
    assert any("No <!-- toc --> marker found" in message for message in caplog.messages)
