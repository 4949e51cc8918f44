"""Automatic table-of-contents generation."""

from __future__ import annotations

import re
from typing import Any, List, Optional, Sequence

from .config import TocOptions, resolve_options
from .logging import get_logger
from .models import HeadingRecord, TocEntry, TocResult
from .slugify import SlugRegistry, Slugifier, link_label
from .tokens import extract_headings, parse

logger = get_logger("builder")

_HTML_TAG = re.compile(r"</?[^>]+>")
_INLINE_SPACE = re.compile(r"[ \t]+")


def titleize(text: str, *, strip_tags: bool = True) -> str:
    """Display text for a heading: link label, tags removed, spaces collapsed."""
    title = link_label(text)
    if strip_tags:
        title = _HTML_TAG.sub("", title)
    title = _INLINE_SPACE.sub(" ", title)
    return title.strip()


class TableOfContentsBuilder:
    """Builds nested bullet lists from the headings of a markdown document."""

    def __init__(self, options: Optional[TocOptions] = None) -> None:
        self.options = options or resolve_options()

    def build(self, markdown: str) -> TocResult:
        """Parse ``markdown`` and render its TOC."""
        return self.build_tokens(parse(markdown))

    def build_tokens(self, tokens: List[Any]) -> TocResult:
        """Render the TOC for an already parsed token stream."""
        return self.build_records(extract_headings(tokens), tokens)

    def build_records(
        self, records: Sequence[HeadingRecord], tokens: Optional[List[Any]] = None
    ) -> TocResult:
        opts = self.options
        candidates = list(records)

        if not opts.firsth1 and candidates:
            top = min(record.level for record in candidates)
            first = next(record for record in candidates if record.level == top)
            candidates.remove(first)

        if not candidates:
            return TocResult(content="", highest=1, tokens=tokens or [], json=[])

        highest = min(record.level for record in candidates)
        deepest = highest + opts.maxdepth - 1
        candidates = [record for record in candidates if record.level <= deepest]

        registry = SlugRegistry()
        slugifier = Slugifier(opts.slugify)
        entries: List[TocEntry] = []
        for record in candidates:
            if opts.strip is not None:
                text = opts.strip(record.text)
            else:
                text = titleize(record.text, strip_tags=opts.strip_heading_tags)
            if opts.filter is not None and not opts.filter(text, record, candidates):
                continue
            depth = max(record.level - highest, 0)
            entries.append(
                TocEntry(
                    content=text,
                    slug=slugifier.slug(record.text, registry),
                    lvl=depth,
                    bullet_index=depth % len(opts.bullets),
                    level=record.level,
                    record=record,
                )
            )

        content = "\n".join(self._render(entry) for entry in entries)
        if opts.append and content:
            content = f"{content}\n\n{opts.append}"
        logger.debug("Rendered %d TOC entries (highest h%d)", len(entries), highest)
        return TocResult(content=content, highest=highest, tokens=tokens or [], json=entries)

    def _render(self, entry: TocEntry) -> str:
        opts = self.options
        prefix = f"{opts.indent * entry.lvl}{opts.bullets[entry.bullet_index]}"
        if not opts.linkify:
            return f"{prefix} {entry.content}"
        return f"{prefix} [{entry.content}](#{entry.slug})"


__all__ = ["TableOfContentsBuilder", "titleize"]
