"""In-place insertion of a TOC between marker comments."""

from __future__ import annotations

from typing import Optional

from .builder import TableOfContentsBuilder
from .config import TocOptions, resolve_options
from .logging import get_logger
from .markers import MarkerScanner, MarkerSpan
from .tokens import extract_headings, headings_after, parse

logger = get_logger("insert")


class TocInserter:
    """Writes a TOC into a document between ``<!-- toc -->`` and ``<!-- tocstop -->``.

    Only the region between the markers changes. Every byte before the start
    marker line and after the stop marker line, trailing newlines included,
    is returned as it was.
    """

    def __init__(self, options: Optional[TocOptions] = None) -> None:
        self.options = options or resolve_options()
        self._scanner = MarkerScanner(self.options.open, self.options.close)

    def insert(self, markdown: str) -> str:
        span = self._scanner.scan(markdown)
        if span is None:
            return markdown

        toc = self.options.toc
        if toc is None:
            toc = self._build(markdown, span)

        start = span.start
        newline = start.newline or "\n"
        body = f"{newline}{toc}{newline}{newline}" if toc else newline

        if span.stop is None:
            logger.debug("No stop marker; inserting one below the TOC")
            return (
                markdown[: start.start + len(start.text)]
                + newline
                + body
                + self.options.close
                + start.newline
                + markdown[start.end :]
            )

        return markdown[: start.end] + body + markdown[span.stop.start :]

    def _build(self, markdown: str, span: MarkerSpan) -> str:
        # Only headings below the managed region; the region itself is rewritten.
        boundary = span.stop.number if span.stop is not None else span.start.number
        tokens = parse(markdown)
        records = extract_headings(tokens)
        kept = headings_after(records, boundary)
        if len(kept) != len(records):
            logger.debug("Ignoring %d headings above the TOC region", len(records) - len(kept))
        builder = TableOfContentsBuilder(self.options)
        return builder.build_records(kept, tokens).content


__all__ = ["TocInserter"]
