"""Core data models shared across markdown_toc components."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class HeadingRecord:
    """A heading found in the token stream, in document order."""

    text: str
    level: int
    source_index: int
    line: Optional[int] = None


@dataclass(frozen=True)
class TocEntry:
    """One rendered line of the table of contents."""

    content: str
    slug: str
    lvl: int
    bullet_index: int
    level: int
    record: HeadingRecord

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "slug": self.slug,
            "lvl": self.lvl,
            "i": self.record.source_index,
        }


@dataclass
class TocResult:
    """Rendered TOC plus the metadata callers use to customise it."""

    content: str
    highest: int
    tokens: List[Any] = field(default_factory=list)
    json: List[TocEntry] = field(default_factory=list)
