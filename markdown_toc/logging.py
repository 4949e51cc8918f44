"""Logging utilities for markdown_toc."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "markdown_toc"
_CONSOLE_FORMAT = "[markdown_toc] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the markdown_toc hierarchy.

    Library modules only ever log through these; handlers are attached by
    :func:`configure_logging`, never on import.
    """
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send markdown_toc records to stderr and, optionally, to ``log_file``."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = get_logger()
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when configured more than once.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        fmt = _FILE_FORMAT if isinstance(handler, logging.FileHandler) else _CONSOLE_FORMAT
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
