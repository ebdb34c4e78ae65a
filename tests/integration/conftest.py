"""Integration fixtures: CLI runner with an isolated cache and mocked scpfoundation.net."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

import httpx
import pytest
import respx
from typer.testing import CliRunner

if TYPE_CHECKING:
    from pathlib import Path

SERIES_URL = "https://scpfoundation.net/scp-series"


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def cli_env(tmp_path: Path) -> dict[str, str]:
    """Environment pointing the cache at tmp_path and keeping logs quiet."""
    return {
        "SCPBROWSER__CACHE__PATH": str(tmp_path / "cache_o.data"),
        "SCPBROWSER__LOGGING__LEVEL": "ERROR",
    }


@pytest.fixture()
def scp_site(single_entry_page: Callable[..., str]) -> Iterator[respx.MockRouter]:
    """All eight series pages, one entry each (series i lists SCP-<i>00)."""
    with respx.mock(assert_all_called=False) as router:
        for i in range(1, 9):
            url = SERIES_URL if i == 1 else f"{SERIES_URL}-{i}"
            router.get(url).mock(
                return_value=httpx.Response(200, text=single_entry_page(f"{i}00", f"Объект {i}"))
            )
        yield router
