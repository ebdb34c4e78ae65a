"""Record extraction from series listing pages.

A series page renders the catalogue as runs of inline nodes inside the
``#page-content > p`` paragraphs::

    <img alt="euclid.png"/> <a href="/scp-002">SCP-002</a> — «Живая» комната<br/>

or, on some pages, with the name wrapped in a span::

    <img alt="keter.png"/> <a href="/scp-682">SCP-682</a> — <span>Неуязвимая рептилия</span>

The markup is hand-authored wiki content, so every expected node is looked up
defensively. The failure unit is a single anchor: a malformed anchor is
skipped with a diagnostic and never aborts its siblings.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

import structlog
from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import Comment, PageElement

from scpbrowser.classification import classify
from scpbrowser.models.catalogue import NAME_NOT_FOUND, Classification, Record

log = structlog.get_logger()

_PARAGRAPH_SELECTOR = "#page-content > p"
_ANCHOR_PREFIX = "SCP"
_ID_SEPARATOR = "-"
_NAME_MARKER = "—"


@dataclass(frozen=True)
class SkippedAnchor:
    """Diagnostic for an anchor that did not produce a record."""

    anchor_text: str
    reason: str


@dataclass
class ExtractionResult:
    records: list[Record] = field(default_factory=list)
    skipped: list[SkippedAnchor] = field(default_factory=list)


def parse_listing(html: str) -> BeautifulSoup:
    """Parse a listing page body."""
    return BeautifulSoup(html, "html.parser")


def iter_records(
    document: BeautifulSoup, diagnostics: list[SkippedAnchor] | None = None
) -> Iterator[Record]:
    """Yield records in page order.

    Each call returns a fresh generator over the same document. Skipped
    anchors are appended to ``diagnostics`` when a list is supplied.
    """
    for paragraph in document.select(_PARAGRAPH_SELECTOR):
        for anchor in _catalogue_anchors(paragraph):
            outcome = _record_from_anchor(anchor)
            if isinstance(outcome, SkippedAnchor):
                log.warning(
                    "extraction_skipped",
                    anchor=outcome.anchor_text,
                    reason=outcome.reason,
                )
                if diagnostics is not None:
                    diagnostics.append(outcome)
                continue
            yield outcome


def extract_records(document: BeautifulSoup) -> ExtractionResult:
    """Extract every record from a listing page, collecting diagnostics."""
    result = ExtractionResult()
    result.records.extend(iter_records(document, result.skipped))
    return result


# ---------------------------------------------------------------------------
# Node helpers
# ---------------------------------------------------------------------------


def _as_text(node: PageElement | None) -> str | None:
    """Return the string of a text node; comments and elements are not text."""
    if isinstance(node, NavigableString) and not isinstance(node, Comment):
        return str(node)
    return None


def _is_span(node: PageElement | None) -> bool:
    return isinstance(node, Tag) and node.name == "span"


def _first_child(tag: Tag) -> PageElement | None:
    return next(iter(tag.children), None)


def _catalogue_anchors(paragraph: Tag) -> Iterator[Tag]:
    """Direct-child anchors whose leading text starts with the catalogue prefix."""
    for child in paragraph.children:
        if not isinstance(child, Tag) or child.name != "a":
            continue
        text = _as_text(_first_child(child))
        if text is not None and text.startswith(_ANCHOR_PREFIX):
            yield child


# ---------------------------------------------------------------------------
# Per-anchor extraction
# ---------------------------------------------------------------------------


def _record_from_anchor(anchor: Tag) -> Record | SkippedAnchor:
    # _catalogue_anchors guarantees the first child is text.
    anchor_text = _as_text(_first_child(anchor)) or ""

    parts = anchor_text.split(_ID_SEPARATOR)
    if len(parts) < 2:
        return SkippedAnchor(anchor_text, "no identifier")
    identifier = parts[1].strip()

    following = anchor.next_sibling
    if _as_text(following) is None and not _is_span(following):
        return SkippedAnchor(anchor_text, "not a record")

    name = _display_name(following)
    if name is None:
        return SkippedAnchor(anchor_text, "no display name")

    return Record(
        classification=_classification(anchor),
        identifier=identifier,
        display_name=name,
    )


def _span_text(node: PageElement | None) -> str | None:
    if not _is_span(node):
        return None
    return _as_text(_first_child(node))  # type: ignore[arg-type]


def _display_name(following: PageElement) -> str | None:
    """Resolve the entry name next to an anchor.

    A span wrapping text wins, either directly after the anchor or right after
    the separator text. Otherwise the bare text after the anchor is used with
    its leading em dash removed.
    """
    span_text = _span_text(following)
    if span_text is None:
        span_text = _span_text(following.next_sibling)
    if span_text is not None:
        return span_text.strip()

    text = _as_text(following)
    if text is None:
        return None
    text = text.strip()
    if not text.startswith(_NAME_MARKER):
        return NAME_NOT_FOUND
    return text.removeprefix(_NAME_MARKER).strip()


def _classification(anchor: Tag) -> Classification:
    icon = anchor.previous_sibling
    if icon is not None:
        icon = icon.previous_sibling
    if not isinstance(icon, Tag):
        log.debug("classification_icon_missing", anchor=anchor.get_text())
        return classify(None)
    alt = icon.get("alt")
    return classify(alt if isinstance(alt, str) else None)
