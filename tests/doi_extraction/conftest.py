"""Shared fixtures for DOI extraction tests."""

from __future__ import annotations

from typing import Callable, Optional

import pytest

from DocsToDOI.DoiExtraction.snapshot import DocumentSnapshot

SnapshotFactory = Callable[..., DocumentSnapshot]


@pytest.fixture
def make_snapshot() -> SnapshotFactory:
    def _make(
        html: str,
        host: str = "example.org",
        *,
        title: Optional[str] = None,
        parser: str = "lxml",
    ) -> DocumentSnapshot:
        return DocumentSnapshot.from_html(html, hostname=host, title=title, parser=parser)

    return _make
