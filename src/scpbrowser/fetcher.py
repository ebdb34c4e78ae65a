"""HTTP retrieval of series listing pages and entry detail pages.

Listing fetches are strict: any transport error or non-2xx status raises
``ScpBrowserError`` and the caller aborts the whole catalogue load. Detail
fetches are lenient about transport and status (``None`` means "not
available") but a success response that cannot be decoded is an error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import structlog
from pydantic import ValidationError

from scpbrowser.config import FetcherSettings, SourceSettings
from scpbrowser.errors import ErrorCode, ScpBrowserError
from scpbrowser.extractor import parse_listing
from scpbrowser.models.detail import DetailPage

if TYPE_CHECKING:
    from bs4 import BeautifulSoup

log = structlog.get_logger()


def build_http_client(settings: FetcherSettings | None = None) -> httpx.AsyncClient:
    """Create the shared AsyncClient used for every fetch."""
    settings = settings or FetcherSettings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.timeout_seconds),
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
    )


class Fetcher:
    def __init__(self, client: httpx.AsyncClient, settings: SourceSettings | None = None) -> None:
        self._client = client
        self._settings = settings or SourceSettings()

    # ------------------------------------------------------------------
    # Listing pages
    # ------------------------------------------------------------------

    def series_url(self, index: int) -> str:
        """Series 1 lives at the bare URL, later series at ``<url>-<index>``."""
        if index < 1:
            raise ValueError(f"series index must be >= 1, got {index}")
        if index == 1:
            return self._settings.series_url
        return f"{self._settings.series_url}-{index}"

    async def fetch_series(self, index: int) -> BeautifulSoup:
        """Fetch and parse one series listing page."""
        url = self.series_url(index)
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            log.warning("series_fetch_error", index=index, url=url, exc_info=True)
            raise ScpBrowserError(
                ErrorCode.PAGE_FETCH_FAILED,
                f"Failed to fetch series {index} from {url}: {exc}",
                recoverable=True,
            ) from exc

        if response.status_code == 404:
            raise ScpBrowserError(
                ErrorCode.PAGE_NOT_FOUND,
                f"Series page not found: {url}",
                recoverable=False,
            )
        if not response.is_success:
            raise ScpBrowserError(
                ErrorCode.PAGE_FETCH_FAILED,
                f"Series {index} returned HTTP {response.status_code}: {url}",
                recoverable=True,
            )

        log.info("series_fetched", index=index, url=url, bytes=len(response.content))
        return parse_listing(response.text)

    # ------------------------------------------------------------------
    # Detail pages
    # ------------------------------------------------------------------

    def detail_url(self, identifier: str) -> str:
        return f"{self._settings.detail_url}{identifier}"

    async def fetch_detail(self, identifier: str) -> DetailPage | None:
        """Fetch one entry's full content. Never cached.

        Returns ``None`` on transport failure or a non-2xx status.
        """
        url = self.detail_url(identifier)
        try:
            response = await self._client.get(url)
        except httpx.HTTPError:
            log.warning("detail_fetch_error", identifier=identifier, url=url, exc_info=True)
            return None

        if not response.is_success:
            log.info("detail_unavailable", identifier=identifier, status=response.status_code)
            return None

        if self._settings.detail_format == "html":
            return DetailPage(page_id=f"scp-{identifier}", source=response.text)

        try:
            return DetailPage.model_validate_json(response.content)
        except ValidationError as exc:
            raise ScpBrowserError(
                ErrorCode.DETAIL_DECODE_FAILED,
                f"Malformed detail payload for {identifier} from {url}",
            ) from exc
