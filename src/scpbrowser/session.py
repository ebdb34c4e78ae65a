"""Background catalogue load and on-demand detail fetches for one browser run.

The catalogue is built once by a background task. The foreground awaits that
task exactly once; the awaited result is the handoff, after which the
catalogue belongs to ``BrowserState`` and is never touched concurrently.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

from scpbrowser.errors import ScpBrowserError
from scpbrowser.state import BrowserState, Phase

if TYPE_CHECKING:
    from scpbrowser.fetcher import Fetcher
    from scpbrowser.loader import CatalogueLoader
    from scpbrowser.models.catalogue import Record
    from scpbrowser.models.detail import DetailPage

log = structlog.get_logger()


class BrowserSession:
    def __init__(self, loader: CatalogueLoader, fetcher: Fetcher) -> None:
        self._loader = loader
        self._fetcher = fetcher
        self._load_task: asyncio.Task[list[Record]] | None = None
        self._detail_seq = 0
        self.state = BrowserState()

    def start(self, *, refresh: bool = False) -> None:
        """Kick off the catalogue load in the background."""
        if self._load_task is not None:
            raise RuntimeError("catalogue load already started")
        self._load_task = asyncio.create_task(
            self._loader.load_all(refresh=refresh), name="catalogue-load"
        )

    async def await_catalogue(self) -> BrowserState:
        """Wait for the background load and publish its outcome to the state."""
        if self._load_task is None:
            raise RuntimeError("catalogue load not started")
        if self.state.phase is not Phase.LOADING:
            return self.state

        try:
            records = await self._load_task
        except ScpBrowserError as exc:
            log.error("catalogue_load_failed", code=exc.code, error=exc.message)
            self.state.fail(str(exc))
        except Exception as exc:
            log.exception("catalogue_load_crashed")
            self.state.fail(f"{type(exc).__name__}: {exc}")
        else:
            self.state.publish(records)
        return self.state

    async def fetch_detail(self, record: Record) -> DetailPage | None:
        """Fetch the detail page for ``record``.

        Only the most recent request's result is returned; a response that
        arrives after a newer request was issued is dropped as ``None``.
        """
        self._detail_seq += 1
        seq = self._detail_seq
        page = await self._fetcher.fetch_detail(record.identifier)
        if seq != self._detail_seq:
            log.debug("detail_superseded", identifier=record.identifier)
            return None
        return page
