"""Interactive browser state.

The session is a product of three small state spaces: load phase, input mode
and visible view. All changes go through ``BrowserState`` transition methods
so combinations like "searching while loading" cannot be reached.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from scpbrowser.models.catalogue import Record


class Phase(StrEnum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class Mode(StrEnum):
    DEFAULT = "default"
    SEARCH = "search"


class View(StrEnum):
    OBJECTS = "objects"
    DETAIL = "detail"


def filter_records(records: Sequence[Record], query: str) -> list[Record]:
    """Case-insensitive substring match on document name and display name."""
    if not query:
        return list(records)
    needle = query.casefold()
    return [
        r
        for r in records
        if needle in r.document_name.casefold() or needle in r.display_name.casefold()
    ]


@dataclass
class Selection:
    """Cursor over a list of records; wraps around at both ends."""

    items: list[Record] = field(default_factory=list)
    index: int | None = None

    @property
    def current(self) -> Record | None:
        if self.index is None or not self.items:
            return None
        return self.items[self.index]

    def next(self) -> None:
        if not self.items:
            return
        if self.index is None or self.index >= len(self.items) - 1:
            self.index = 0
        else:
            self.index += 1

    def previous(self) -> None:
        if not self.items:
            return
        if self.index is None:
            self.index = 0
        elif self.index == 0:
            self.index = len(self.items) - 1
        else:
            self.index -= 1

    def clear(self) -> None:
        self.index = None


@dataclass
class BrowserState:
    phase: Phase = Phase.LOADING
    mode: Mode = Mode.DEFAULT
    view: View = View.OBJECTS
    query: str = ""
    error: str | None = None
    catalogue: list[Record] = field(default_factory=list)
    selection: Selection = field(default_factory=Selection)

    @property
    def accepts_input(self) -> bool:
        return self.phase is Phase.READY

    # ------------------------------------------------------------------
    # Load lifecycle
    # ------------------------------------------------------------------

    def publish(self, records: Sequence[Record]) -> None:
        """LOADING → READY. The catalogue is read-only from here on."""
        if self.phase is not Phase.LOADING:
            raise RuntimeError(f"catalogue already settled ({self.phase})")
        self.catalogue = list(records)
        self.phase = Phase.READY
        self._apply_filter()

    def fail(self, message: str) -> None:
        """LOADING → FAILED."""
        if self.phase is not Phase.LOADING:
            raise RuntimeError(f"catalogue already settled ({self.phase})")
        self.phase = Phase.FAILED
        self.error = message

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def type_text(self, text: str) -> None:
        if not self.accepts_input or self.view is View.DETAIL:
            return
        self.mode = Mode.SEARCH
        self.query += text
        self._apply_filter()

    def set_query(self, query: str) -> None:
        """Replace the whole search query (line-oriented input)."""
        if not self.accepts_input or self.view is View.DETAIL:
            return
        self.mode = Mode.SEARCH
        self.query = query
        self._apply_filter()

    def backspace(self) -> None:
        if not self.accepts_input or self.view is View.DETAIL:
            return
        self.mode = Mode.SEARCH
        self.query = self.query[:-1]
        self._apply_filter()

    def submit_search(self) -> None:
        """Leave search mode and select the first match."""
        if self.mode is not Mode.SEARCH:
            return
        self.mode = Mode.DEFAULT
        self.selection.next()

    def cancel_search(self) -> None:
        if self.mode is not Mode.SEARCH:
            return
        self.mode = Mode.DEFAULT

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def next(self) -> None:
        if not self.accepts_input or self.view is View.DETAIL:
            return
        self.mode = Mode.DEFAULT
        self.selection.next()

    def previous(self) -> None:
        if not self.accepts_input or self.view is View.DETAIL:
            return
        self.mode = Mode.DEFAULT
        self.selection.previous()

    def open_detail(self) -> Record | None:
        """OBJECTS → DETAIL for the selected record, if any."""
        if not self.accepts_input or self.mode is Mode.SEARCH:
            return None
        record = self.selection.current
        if record is not None:
            self.view = View.DETAIL
        return record

    def close_detail(self) -> None:
        self.view = View.OBJECTS

    def _apply_filter(self) -> None:
        self.selection = Selection(items=filter_records(self.catalogue, self.query))
