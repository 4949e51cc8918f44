from __future__ import annotations

import pytest

from tests._fixtures.documents import MarkdownDocuments


@pytest.fixture
def docs() -> MarkdownDocuments:
    """Provide access to the markdown fixtures under tests/."""
    return MarkdownDocuments()
