from __future__ import annotations

from scpbrowser.models.catalogue import (
    DOCUMENT_PREFIX,
    NAME_NOT_FOUND,
    CacheBlob,
    Classification,
    Record,
)
from scpbrowser.models.detail import DetailPage

__all__ = [
    # catalogue
    "Classification",
    "Record",
    "CacheBlob",
    "DOCUMENT_PREFIX",
    "NAME_NOT_FOUND",
    # detail
    "DetailPage",
]
