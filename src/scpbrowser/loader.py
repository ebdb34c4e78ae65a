"""Catalogue loading: cache first, otherwise scrape every series page."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

from scpbrowser.config import Settings
from scpbrowser.errors import ScpBrowserError
from scpbrowser.extractor import extract_records

if TYPE_CHECKING:
    from scpbrowser.cache import CatalogueCache
    from scpbrowser.fetcher import Fetcher
    from scpbrowser.models.catalogue import Record

log = structlog.get_logger()


class CatalogueLoader:
    def __init__(
        self,
        fetcher: Fetcher,
        cache: CatalogueCache,
        settings: Settings | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._cache = cache
        self._settings = settings or Settings()

    @property
    def series_indexes(self) -> range:
        return range(1, self._settings.source.max_series)

    async def load_all(self, *, refresh: bool = False) -> list[Record]:
        """Return the full catalogue.

        A cached catalogue is returned as-is. On a miss every series is
        fetched, the records are concatenated in series order and written to
        the cache. A failed series fetch propagates and nothing is cached.
        """
        if not refresh:
            cached = self._cache.load()
            if cached is not None:
                return cached

        if self._settings.fetcher.parallel_series:
            pages = await self._scrape_concurrently()
        else:
            pages = [await self._scrape_series(i) for i in self.series_indexes]

        records = [record for page in pages for record in page]
        log.info("catalogue_scraped", series=len(pages), records=len(records))

        try:
            self._cache.save(records)
        except ScpBrowserError as exc:
            # The fetched catalogue is still usable without a cache.
            log.warning("catalogue_not_cached", code=exc.code, error=exc.message)
        return records

    async def _scrape_concurrently(self) -> list[list[Record]]:
        """Scrape every series at once; the first failure cancels the rest."""
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [group.create_task(self._scrape_series(i)) for i in self.series_indexes]
        except ExceptionGroup as eg:
            raise eg.exceptions[0]
        return [task.result() for task in tasks]

    async def _scrape_series(self, index: int) -> list[Record]:
        document = await self._fetcher.fetch_series(index)
        result = extract_records(document)
        log.info(
            "series_extracted",
            index=index,
            records=len(result.records),
            skipped=len(result.skipped),
        )
        return result.records
