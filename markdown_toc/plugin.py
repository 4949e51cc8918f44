"""markdown-it plugin that computes the TOC while a document is parsed."""

from __future__ import annotations

from typing import Any

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore

from .builder import TableOfContentsBuilder
from .config import resolve_options

ENV_KEY = "toc"


def toc_plugin(md: MarkdownIt, **options: Any) -> None:
    """Register a core rule that stores a ``TocResult`` in ``env["toc"]``.

    Usage::

        md = MarkdownIt("commonmark").use(toc_plugin, maxdepth=2)
        env = {}
        md.parse(text, env)
        env["toc"].content
    """
    builder = TableOfContentsBuilder(resolve_options(options))

    def toc_rule(state: StateCore) -> None:
        state.env[ENV_KEY] = builder.build_tokens(state.tokens)

    md.core.ruler.push("toc", toc_rule)


__all__ = ["ENV_KEY", "toc_plugin"]
