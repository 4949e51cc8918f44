"""Tests for the markdown-it plugin."""

from __future__ import annotations

from markdown_it import MarkdownIt

from markdown_toc.plugin import ENV_KEY, toc_plugin
from tests._fixtures.documents import MarkdownDocuments


def test_plugin_stores_toc_in_env(docs: MarkdownDocuments) -> None:
    md = MarkdownIt("commonmark").use(
        toc_plugin, slugify=False, strip=lambda text: "~" + text[4:] + "~"
    )
    env: dict = {}
    md.parse(docs.read("strip-words.md"), env)

    assert env[ENV_KEY].content == "\n".join(
        [
            "- [~aaa~](#foo-aaa)",
            "- [~bbb~](#bar-bbb)",
            "- [~ccc~](#baz-ccc)",
            "- [~ddd~](#fez-ddd)",
        ]
    )


def test_plugin_does_not_change_rendered_html() -> None:
    plain = MarkdownIt("commonmark").render("# AAA\n\ntext\n")
    with_plugin = MarkdownIt("commonmark").use(toc_plugin).render("# AAA\n\ntext\n")

    assert with_plugin == plain


def test_plugin_builds_a_fresh_result_per_parse() -> None:
    md = MarkdownIt("commonmark").use(toc_plugin, maxdepth=1)
    first: dict = {}
    second: dict = {}
    md.parse("# AAA\n## BBB\n", first)
    md.parse("# AAA\n# AAA\n", second)

    assert first[ENV_KEY].content == "- [AAA](#aaa)"
    assert second[ENV_KEY].content == "- [AAA](#aaa)\n- [AAA](#aaa-1)"
