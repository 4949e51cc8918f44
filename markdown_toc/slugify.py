"""Anchor slug generation for heading text."""

from __future__ import annotations

import re
from typing import Callable, Dict, Optional, Set
from urllib.parse import quote

_LINK_LABEL = re.compile(r"^\[([^\]]+)\]\(")
_ANSI_COLOR = re.compile(r"\x1b\[[0-9;]*m")
_HTML_TAG = re.compile(r"</?[^>]{1,100}>")
_ASCII_PUNCTUATION = re.compile(r"""[|$&`~=\\/@+*!?({\[\]})<>.,;:'"^]""")
_CJK_PUNCTUATION = re.compile(
    "[。？！，、；：“”【】（）〔〕［］﹃﹄‘’﹁﹂—…－～《》〈〉「」]"
)
# Characters left alone by percent-encoding, on top of letters, digits and "_.-~".
_FRAGMENT_SAFE = "!~*'()"


def link_label(text: str) -> str:
    """Return the label of a heading that is itself a markdown link."""
    match = _LINK_LABEL.match(text)
    if match:
        return match.group(1)
    return text


def default_slug(text: str) -> str:
    """Turn raw heading text into a URL-safe anchor, without deduplication.

    Spaces map one-to-one onto hyphens and tabs onto two hyphens, so
    ``"Some    Article"`` becomes ``"some----article"``. ASCII and CJK
    punctuation is dropped while hyphens, underscores and non-ASCII letters
    survive; whatever remains outside ASCII is percent-encoded as UTF-8.
    """
    slug = link_label(text)
    slug = _ANSI_COLOR.sub("", slug)
    slug = slug.lower()
    slug = slug.replace(" ", "-")
    slug = slug.replace("\t", "--")
    slug = _HTML_TAG.sub("", slug)
    slug = _ASCII_PUNCTUATION.sub("", slug)
    slug = _CJK_PUNCTUATION.sub("", slug)
    # Lone surrogates encode as their raw UTF-8 bytes.
    return quote(slug, safe=_FRAGMENT_SAFE, errors="surrogatepass")


class SlugRegistry:
    """Occurrence counts for the slugs handed out during one TOC build."""

    def __init__(self) -> None:
        self._counts: Dict[str, int] = {}
        self._issued: Set[str] = set()

    def __contains__(self, slug: object) -> bool:
        return slug in self._issued

    def __len__(self) -> int:
        return len(self._issued)

    def claim(self, slug: str) -> str:
        """Register ``slug`` and return the unique form to use for it.

        The first occurrence is returned unchanged; later ones get ``-1``,
        ``-2`` and so on. A suffixed form that an earlier heading already
        owns verbatim is skipped.
        """
        if slug not in self._counts and slug not in self._issued:
            self._counts[slug] = 0
            self._issued.add(slug)
            return slug

        count = self._counts.get(slug, 0)
        candidate = slug
        while candidate in self._issued:
            count += 1
            candidate = f"{slug}-{count}"
        self._counts[slug] = count
        self._issued.add(candidate)
        return candidate


class Slugifier:
    """Pairs a slug function with registry-based deduplication."""

    def __init__(self, func: Optional[Callable[[str], str]] = None) -> None:
        self._func = func or default_slug

    def slug(self, text: str, registry: SlugRegistry) -> str:
        return registry.claim(self._func(text))


def slugify(text: str, registry: Optional[SlugRegistry] = None) -> str:
    """Slugify ``text`` with the default rules, deduplicating against ``registry``."""
    return Slugifier().slug(text, registry if registry is not None else SlugRegistry())


__all__ = ["SlugRegistry", "Slugifier", "default_slug", "link_label", "slugify"]
