"""Locating TOC marker comments in a host document."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional

from .logging import get_logger

logger = get_logger("markers")

_FENCE = re.compile(r"^(`{3,}|~{3,})")


@dataclass(frozen=True)
class SourceLine:
    """A physical line of the document with its offset and line ending."""

    number: int
    start: int
    text: str
    newline: str

    @property
    def end(self) -> int:
        """Offset just past the line ending."""
        return self.start + len(self.text) + len(self.newline)


@dataclass(frozen=True)
class MarkerSpan:
    """Where the start marker and, when present, the stop marker sit."""

    start: SourceLine
    stop: Optional[SourceLine] = None


def split_lines(markdown: str) -> List[SourceLine]:
    """Split on ``\\n`` only, keeping ``\\r\\n`` endings intact per line."""
    lines: List[SourceLine] = []
    offset = 0
    for number, raw in enumerate(markdown.split("\n")):
        has_newline = offset + len(raw) < len(markdown)
        if raw.endswith("\r") and has_newline:
            text, newline = raw[:-1], "\r\n"
        else:
            text, newline = raw, "\n" if has_newline else ""
        lines.append(SourceLine(number=number, start=offset, text=text, newline=newline))
        offset += len(raw) + (1 if has_newline else 0)
    if lines and not lines[-1].text and not lines[-1].newline:
        lines.pop()
    return lines


def _normalise(text: str) -> str:
    return "".join(text.split()).lower()


class MarkerScanner:
    """Two-phase line scan for the start marker, then the stop marker below it.

    A marker matches a whole line, ignoring case and whitespace, so
    ``<!--TOC-->`` and ``  <!-- toc -->`` are both start markers. Lines inside
    fenced code blocks are never markers.
    """

    def __init__(self, open_marker: str, close_marker: str) -> None:
        self.open_marker = open_marker
        self.close_marker = close_marker
        self._open_key = _normalise(open_marker)
        self._close_key = _normalise(close_marker)

    def scan(self, markdown: str) -> Optional[MarkerSpan]:
        lines = list(self._outside_code(split_lines(markdown)))
        start = next((line for line in lines if self.is_open(line.text)), None)
        if start is None:
            logger.debug("No %s marker found", self.open_marker)
            return None
        stop = next(
            (
                line
                for line in lines
                if line.number > start.number and self.is_close(line.text)
            ),
            None,
        )
        logger.debug(
            "Start marker on line %d, stop marker %s",
            start.number + 1,
            f"on line {stop.number + 1}" if stop else "missing",
        )
        return MarkerSpan(start=start, stop=stop)

    def is_open(self, text: str) -> bool:
        return _normalise(text) == self._open_key

    def is_close(self, text: str) -> bool:
        return _normalise(text) == self._close_key

    @staticmethod
    def _outside_code(lines: List[SourceLine]) -> Iterator[SourceLine]:
        fence: Optional[str] = None
        for line in lines:
            stripped = line.text.strip()
            match = _FENCE.match(stripped)
            if fence is None:
                if match:
                    fence = match.group(1)
                    continue
                yield line
                continue
            # Closing fence: same character, at least as long, no info string.
            if (
                match
                and match.group(1)[0] == fence[0]
                and len(match.group(1)) >= len(fence)
                and not stripped[len(match.group(1)) :].strip()
            ):
                fence = None


__all__ = ["MarkerScanner", "MarkerSpan", "SourceLine", "split_lines"]
