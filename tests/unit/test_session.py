"""Unit tests for scpbrowser.session."""

from __future__ import annotations

import asyncio

import pytest

from scpbrowser.errors import ErrorCode, ScpBrowserError
from scpbrowser.models.catalogue import Record
from scpbrowser.models.detail import DetailPage
from scpbrowser.session import BrowserSession
from scpbrowser.state import Phase


class StubLoader:
    def __init__(self, records: list[Record] | None = None, error: Exception | None = None):
        self.records = records or []
        self.error = error
        self.calls: list[bool] = []
        self.release = asyncio.Event()
        self.release.set()

    async def load_all(self, *, refresh: bool = False) -> list[Record]:
        self.calls.append(refresh)
        await self.release.wait()
        if self.error is not None:
            raise self.error
        return self.records


class GatedFetcher:
    """Detail fetcher whose responses are released by the test."""

    def __init__(self) -> None:
        self.gates: dict[str, asyncio.Event] = {}

    async def fetch_detail(self, identifier: str) -> DetailPage | None:
        gate = self.gates.setdefault(identifier, asyncio.Event())
        await gate.wait()
        return DetailPage(page_id=f"scp-{identifier}", source=identifier)


class TestCatalogueHandoff:
    async def test_publishes_loaded_catalogue(self, sample_records: list[Record]) -> None:
        loader = StubLoader(sample_records)
        session = BrowserSession(loader, GatedFetcher())  # type: ignore[arg-type]
        session.start()
        state = await session.await_catalogue()
        assert state.phase is Phase.READY
        assert state.catalogue == sample_records
        assert loader.calls == [False]

    async def test_state_stays_loading_until_published(
        self, sample_records: list[Record]
    ) -> None:
        loader = StubLoader(sample_records)
        loader.release.clear()
        session = BrowserSession(loader, GatedFetcher())  # type: ignore[arg-type]
        session.start()
        await asyncio.sleep(0)
        assert session.state.phase is Phase.LOADING

        loader.release.set()
        await session.await_catalogue()
        assert session.state.phase is Phase.READY

    async def test_load_failure_becomes_failed_phase(self) -> None:
        error = ScpBrowserError(ErrorCode.PAGE_FETCH_FAILED, "boom", recoverable=True)
        session = BrowserSession(StubLoader(error=error), GatedFetcher())  # type: ignore[arg-type]
        session.start()
        state = await session.await_catalogue()
        assert state.phase is Phase.FAILED
        assert state.error is not None
        assert "boom" in state.error

    async def test_unexpected_load_error_becomes_failed_phase(self) -> None:
        session = BrowserSession(
            StubLoader(error=ValueError("bad series url")),
            GatedFetcher(),  # type: ignore[arg-type]
        )
        session.start()
        state = await session.await_catalogue()
        assert state.phase is Phase.FAILED
        assert state.error == "ValueError: bad series url"

    async def test_refresh_is_forwarded(self) -> None:
        loader = StubLoader([])
        session = BrowserSession(loader, GatedFetcher())  # type: ignore[arg-type]
        session.start(refresh=True)
        await session.await_catalogue()
        assert loader.calls == [True]

    async def test_await_twice_returns_same_state(self, sample_records: list[Record]) -> None:
        session = BrowserSession(StubLoader(sample_records), GatedFetcher())  # type: ignore[arg-type]
        session.start()
        first = await session.await_catalogue()
        second = await session.await_catalogue()
        assert first is second

    async def test_start_only_once(self) -> None:
        session = BrowserSession(StubLoader([]), GatedFetcher())  # type: ignore[arg-type]
        session.start()
        with pytest.raises(RuntimeError):
            session.start()
        await session.await_catalogue()

    async def test_await_before_start(self) -> None:
        session = BrowserSession(StubLoader([]), GatedFetcher())  # type: ignore[arg-type]
        with pytest.raises(RuntimeError):
            await session.await_catalogue()


class TestDetailRequests:
    async def test_returns_page(self, sample_records: list[Record]) -> None:
        fetcher = GatedFetcher()
        fetcher.gates["002"] = asyncio.Event()
        fetcher.gates["002"].set()
        session = BrowserSession(StubLoader(), fetcher)  # type: ignore[arg-type]
        page = await session.fetch_detail(sample_records[0])
        assert page is not None
        assert page.page_id == "scp-002"

    async def test_superseded_request_is_dropped(self, sample_records: list[Record]) -> None:
        fetcher = GatedFetcher()
        session = BrowserSession(StubLoader(), fetcher)  # type: ignore[arg-type]

        older = asyncio.create_task(session.fetch_detail(sample_records[0]))
        await asyncio.sleep(0)
        newer = asyncio.create_task(session.fetch_detail(sample_records[1]))
        await asyncio.sleep(0)

        # The newer request finishes first, then the older one arrives late.
        fetcher.gates["682"].set()
        newer_page = await newer
        fetcher.gates["002"].set()
        older_page = await older

        assert newer_page is not None
        assert newer_page.page_id == "scp-682"
        assert older_page is None
