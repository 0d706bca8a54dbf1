from __future__ import annotations

import io
from pathlib import Path

import pytest

from sigaudit.diagnostics import Reporter
from tests._fixtures.governance import StubFetcher


@pytest.fixture
def output() -> io.StringIO:
    """Buffer capturing everything the reporter writes."""
    return io.StringIO()


@pytest.fixture
def reporter(output: io.StringIO) -> Reporter:
    return Reporter(output)


@pytest.fixture
def fetcher() -> StubFetcher:
    """A network stub that answers 404 unless a response is registered."""
    return StubFetcher()


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    root = tmp_path / "community"
    root.mkdir()
    return root
