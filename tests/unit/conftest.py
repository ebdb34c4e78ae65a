"""Unit-specific fixtures (filesystem confined to tmp_path, HTTP mocked with respx)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from scpbrowser.cache import CatalogueCache
from scpbrowser.fetcher import Fetcher

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture()
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture()
def cache(workdir: Path) -> CatalogueCache:
    return CatalogueCache()


@pytest.fixture()
async def fetcher():
    async with httpx.AsyncClient() as client:
        yield Fetcher(client)
