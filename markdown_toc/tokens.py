"""Heading extraction from the markdown-it token stream."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Sequence

from markdown_it import MarkdownIt
from markdown_it.token import Token

from .logging import get_logger
from .models import HeadingRecord

logger = get_logger("tokens")

# Front matter must open with a "key:" line so a leading thematic break is left alone.
_FRONT_MATTER = re.compile(
    r"\A---[ \t]*\r?\n(?:[A-Za-z_\"'][^\n]*:.*?\r?\n)??---[ \t]*(?:\r?\n|\Z)", re.DOTALL
)
_CODE_TOKENS = {"fence", "code_block"}


def create_parser() -> MarkdownIt:
    return MarkdownIt("commonmark")


def blank_front_matter(markdown: str) -> str:
    """Replace a leading YAML front-matter block with empty lines.

    Line numbers are kept so token maps still line up with the source, and the
    closing ``---`` can no longer be read as a setext underline.
    """
    match = _FRONT_MATTER.match(markdown)
    if not match:
        return markdown
    block = match.group(0)
    return "\n" * block.count("\n") + markdown[match.end():]


def parse(markdown: str, parser: Optional[MarkdownIt] = None) -> List[Token]:
    """Tokenize ``markdown`` with markdown-it, ignoring front matter."""
    md = parser or create_parser()
    return md.parse(blank_front_matter(markdown))


def extract_headings(tokens: Sequence[Token]) -> List[HeadingRecord]:
    """Walk the token stream once and return the headings in document order.

    Headings without any non-whitespace text are dropped, as are heading
    events that sit inside a code region. Each heading's inline token gets
    ``meta["lvl"]`` so callers holding the tokens can see the level.
    """
    records: List[HeadingRecord] = []
    code_depth = 0
    index = 0
    ordinal = 0
    total = len(tokens)

    while index < total:
        token = tokens[index]
        index += 1

        if token.type in _CODE_TOKENS:
            continue
        if token.type.startswith(("fence_", "code_block_")):
            code_depth += token.nesting
            code_depth = max(code_depth, 0)
            continue
        if token.type != "heading_open":
            continue

        level = _heading_level(token)
        text_parts: List[str] = []
        while index < total and tokens[index].type != "heading_close":
            inline = tokens[index]
            if inline.type == "inline":
                inline.meta["lvl"] = level
                text_parts.append(inline.content)
            index += 1
        index += 1  # heading_close

        source_index = ordinal
        ordinal += 1
        if code_depth:
            logger.debug("Skipping heading inside code region: %r", "".join(text_parts))
            continue

        text = "".join(text_parts)
        if not text.strip():
            logger.debug("Dropping empty h%d heading", level)
            continue

        records.append(
            HeadingRecord(
                text=text,
                level=level,
                source_index=source_index,
                line=token.map[0] if token.map else None,
            )
        )

    logger.debug("Extracted %d headings from %d tokens", len(records), total)
    return records


def headings_after(records: Iterable[HeadingRecord], line: int) -> List[HeadingRecord]:
    """Keep the headings that start below source ``line``."""
    return [record for record in records if record.line is None or record.line > line]


def _heading_level(token: Token) -> int:
    # h1..h6
    return int(token.tag[1:])


__all__ = ["blank_front_matter", "create_parser", "extract_headings", "headings_after", "parse"]
