"""Shared fixtures: listing page markup and sample records."""

from __future__ import annotations

from collections.abc import Callable

import pytest
import structlog

from scpbrowser.models.catalogue import Classification, Record

LISTING_HTML = """<html><body>
<div id="side-bar"><p><a href="/scp-001">SCP-001</a> — Предложения</p></div>
<div id="page-content">
<h1>Серия I</h1>
<p><img alt="euclid.png" src="/local--files/euclid.png"/> <a href="/scp-002">SCP-002</a> — «Живая» комната<br/>
<img alt="keter.png" src="/local--files/keter.png"/> <a href="/scp-682">SCP-682</a> — <span>Неуязвимая рептилия</span><br/>
<img alt="safe.png" src="/local--files/safe.png"/> <a href="/scp-999">SCP-999</a> — Щекоточный монстр<br/>
</p>
</div>
</body></html>
"""

DETAIL_PAYLOAD = {
    "pageId": "scp-002",
    "title": "SCP-002 - «Живая» комната",
    "source": "**Объект №:** SCP-002\n\n**Класс объекта:** [[[euclid |Евклид]]]",
    "tags": ["класс:евклид", "свойство:локация"],
    "parent": None,
    "locked": False,
}


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture()
def listing_html() -> str:
    return LISTING_HTML


@pytest.fixture()
def detail_payload() -> dict:
    return dict(DETAIL_PAYLOAD)


@pytest.fixture()
def series_page() -> Callable[..., str]:
    """Build a listing page from raw ``<p>`` blocks."""

    def build(*paragraphs: str) -> str:
        body = "\n".join(paragraphs)
        return f'<html><body><div id="page-content">{body}</div></body></html>'

    return build


@pytest.fixture()
def single_entry_page(series_page: Callable[..., str]) -> Callable[..., str]:
    """Build a listing page holding one bare-text entry."""

    def build(identifier: str, name: str, alt: str = "safe.png") -> str:
        return series_page(
            f'<p><img alt="{alt}"/> <a href="/scp-{identifier}">SCP-{identifier}</a>'
            f" — {name}<br/></p>"
        )

    return build


@pytest.fixture()
def sample_records() -> list[Record]:
    return [
        Record(
            classification=Classification.EUCLID,
            identifier="002",
            display_name="«Живая» комната",
        ),
        Record(
            classification=Classification.KETER,
            identifier="682",
            display_name="Неуязвимая рептилия",
        ),
        Record(
            classification=Classification.SAFE,
            identifier="999",
            display_name="Щекоточный монстр",
        ),
        # Duplicate identifiers happen when series overlap; consumers must cope.
        Record(
            classification=Classification.NONE,
            identifier="002",
            display_name="NOT FOUND",
        ),
    ]
