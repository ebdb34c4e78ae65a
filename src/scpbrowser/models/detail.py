from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DetailPage(BaseModel):
    """Full content of one catalogue entry, fetched on demand.

    Mirrors the articles API payload::

        {"pageId": "scp-002", "title": "SCP-002 - «Живая» комната",
         "source": "...", "tags": ["класс:евклид"], "parent": null, "locked": false}

    When the raw HTML page is fetched instead, only ``page_id`` and ``source``
    are populated.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    page_id: str = Field(alias="pageId")
    title: str | None = None
    source: str  # Wikidot/FTML markup from the API, or raw page HTML
    tags: list[str] = []
    parent: str | None = None
    locked: bool = False
