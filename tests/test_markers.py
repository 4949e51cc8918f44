"""Tests for marker scanning."""

from __future__ import annotations

from markdown_toc.markers import MarkerScanner, split_lines


def test_split_lines_tracks_offsets_and_endings() -> None:
    lines = split_lines("a\r\nbb\nc")

    assert [(line.text, line.newline) for line in lines] == [
        ("a", "\r\n"),
        ("bb", "\n"),
        ("c", ""),
    ]
    assert [line.start for line in lines] == [0, 3, 6]
    assert lines[1].end == 6


def test_split_lines_drops_phantom_final_line() -> None:
    assert [line.text for line in split_lines("a\n\n")] == ["a", ""]
    assert split_lines("") == []


def test_scan_finds_start_then_stop() -> None:
    scanner = MarkerScanner("<!-- toc -->", "<!-- tocstop -->")
    span = scanner.scan("# A\n<!-- toc -->\n- x\n<!-- tocstop -->\n")

    assert span is not None
    assert span.start.number == 1
    assert span.stop is not None and span.stop.number == 3


def test_scan_without_stop_marker() -> None:
    scanner = MarkerScanner("<!-- toc -->", "<!-- tocstop -->")
    span = scanner.scan("<!-- TOC -->\n# A\n")

    assert span is not None
    assert span.stop is None


def test_scan_returns_none_without_start_marker() -> None:
    scanner = MarkerScanner("<!-- toc -->", "<!-- tocstop -->")
    assert scanner.scan("# A\n<!-- tocstop -->\n") is None


def test_scan_skips_longer_fences_with_inner_backticks() -> None:
    scanner = MarkerScanner("<!-- toc -->", "<!-- tocstop -->")
    markdown = "````md\n```\n<!-- toc -->\n```\n````\n<!-- toc -->\n"

    span = scanner.scan(markdown)
    assert span is not None
    assert span.start.number == 5


def test_marker_matching_ignores_case_and_whitespace() -> None:
    scanner = MarkerScanner("<!-- toc -->", "<!-- tocstop -->")

    assert scanner.is_open("<!--toc-->")
    assert scanner.is_open("   <!-- TOC -->\t")
    assert scanner.is_close("<!-- toc stop -->")
    assert not scanner.is_open("<!-- toc --> trailing text")
