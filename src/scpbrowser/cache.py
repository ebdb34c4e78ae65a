"""Whole-catalogue cache file.

The cache is a single blob holding every record plus a schema version. A
readable, decodable file with the current version is authoritative: there
is no freshness check and no partial update. Anything else (missing file,
unreadable file, corrupt payload, older schema) is a cache miss and the
caller rebuilds the catalogue from the network.

Read problems never raise. Write problems raise a recoverable
``ScpBrowserError`` so the caller can decide to keep the fetched records.
"""

from __future__ import annotations

import contextlib
import os
from pathlib import Path
from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError

from scpbrowser.errors import ErrorCode, ScpBrowserError
from scpbrowser.models.catalogue import CacheBlob

if TYPE_CHECKING:
    from collections.abc import Sequence

    from scpbrowser.models.catalogue import Record

log = structlog.get_logger()

# Bump whenever Record's serialized shape changes.
CACHE_SCHEMA_VERSION = 1


class CatalogueCache:
    """File-backed store for the full record set."""

    def __init__(self, path: str | os.PathLike[str] = "cache_o.data") -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        """Absolute cache location. Relative paths follow the current working directory."""
        return Path.cwd() / self._path

    def load(self) -> list[Record] | None:
        """Return the cached records, or ``None`` on cache miss."""
        path = self.path
        try:
            payload = path.read_bytes()
        except FileNotFoundError:
            log.debug("cache_miss", path=str(path))
            return None
        except OSError:
            log.warning("cache_read_error", path=str(path), exc_info=True)
            return None

        try:
            blob = CacheBlob.model_validate_json(payload)
        except ValidationError as exc:
            log.warning("cache_decode_error", path=str(path), errors=exc.error_count())
            return None

        if blob.schema_version != CACHE_SCHEMA_VERSION:
            log.warning(
                "cache_version_mismatch",
                path=str(path),
                found=blob.schema_version,
                expected=CACHE_SCHEMA_VERSION,
            )
            return None

        log.info("cache_hit", path=str(path), records=len(blob.records))
        return blob.records

    def save(self, records: Sequence[Record]) -> None:
        """Overwrite the cache with ``records``."""
        path = self.path
        blob = CacheBlob(schema_version=CACHE_SCHEMA_VERSION, records=list(records))
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(blob.model_dump_json().encode("utf-8"))
            tmp_path.replace(path)
        except OSError as exc:
            log.warning("cache_write_error", path=str(path), exc_info=True)
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise ScpBrowserError(
                ErrorCode.CACHE_WRITE_FAILED,
                f"Could not write catalogue cache to {path}: {exc}",
                recoverable=True,
            ) from exc

        log.info("cache_written", path=str(path), records=len(blob.records))

    def clear(self) -> bool:
        """Delete the cache file. Returns whether a file was removed."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        log.info("cache_cleared", path=str(self.path))
        return True
