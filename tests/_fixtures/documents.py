"""Helper for reading markdown fixtures and their expected renderings."""

from __future__ import annotations

from pathlib import Path

_TESTS_ROOT = Path(__file__).resolve().parent.parent


class MarkdownDocuments:
    """Reads ``tests/fixtures`` inputs and ``tests/expected`` outputs."""

    def __init__(self, root: Path = _TESTS_ROOT) -> None:
        self.fixtures = root / "fixtures"
        self.expected_dir = root / "expected"

    def raw(self, name: str) -> str:
        """Return a fixture byte-for-byte, trailing newlines included."""
        return (self.fixtures / name).read_text(encoding="utf-8")

    def read(self, name: str) -> str:
        """Return a fixture with surrounding whitespace trimmed."""
        return self.raw(name).strip()

    def expected_raw(self, name: str) -> str:
        return (self.expected_dir / name).read_text(encoding="utf-8")

    def expected(self, name: str) -> str:
        return self.expected_raw(name).strip()


__all__ = ["MarkdownDocuments"]
