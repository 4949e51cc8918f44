"""Generate a markdown table of contents and keep it up to date in place."""

from __future__ import annotations

from typing import Any, Mapping

from .builder import TableOfContentsBuilder, titleize
from .config import ConfigError, TocOptions, load_options, resolve_options
from .insert import TocInserter
from .models import HeadingRecord, TocEntry, TocResult
from .slugify import SlugRegistry, Slugifier, default_slug, slugify
from .tokens import extract_headings, parse


def toc(
    markdown: str, options: Mapping[str, Any] | TocOptions | None = None, **kwargs: Any
) -> TocResult:
    """Build the table of contents for ``markdown``."""
    return TableOfContentsBuilder(resolve_options(options, **kwargs)).build(markdown)


def insert(
    markdown: str, options: Mapping[str, Any] | TocOptions | None = None, **kwargs: Any
) -> str:
    """Insert or refresh the TOC between the document's marker comments."""
    return TocInserter(resolve_options(options, **kwargs)).insert(markdown)


__all__ = [
    "ConfigError",
    "HeadingRecord",
    "SlugRegistry",
    "Slugifier",
    "TableOfContentsBuilder",
    "TocEntry",
    "TocInserter",
    "TocOptions",
    "TocResult",
    "default_slug",
    "extract_headings",
    "insert",
    "load_options",
    "parse",
    "resolve_options",
    "slugify",
    "titleize",
    "toc",
]
