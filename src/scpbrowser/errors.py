"""Error types raised across the scrape-parse-cache pipeline.

A cache miss is not an error: ``CatalogueCache.load()`` returns ``None``.
Extraction gaps never surface as exceptions either; they are scoped to a
single anchor and reported through extraction diagnostics.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    PAGE_FETCH_FAILED = "PAGE_FETCH_FAILED"
    PAGE_NOT_FOUND = "PAGE_NOT_FOUND"
    DETAIL_DECODE_FAILED = "DETAIL_DECODE_FAILED"
    CACHE_WRITE_FAILED = "CACHE_WRITE_FAILED"


class ScpBrowserError(Exception):
    """Pipeline failure carrying a machine-readable code.

    ``recoverable`` tells the caller whether retrying the same operation
    later can reasonably succeed (network blip vs. missing page).
    """

    def __init__(self, code: ErrorCode, message: str, *, recoverable: bool = False) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recoverable = recoverable

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"
