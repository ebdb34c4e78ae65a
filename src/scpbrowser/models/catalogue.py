from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

DOCUMENT_PREFIX = "SCP-"
NAME_NOT_FOUND = "NOT FOUND"


class Classification(StrEnum):
    """Object class shown next to every catalogue entry."""

    NONE = "None"
    SAFE = "Safe"
    EUCLID = "Euclid"
    KETER = "Keter"
    THAUMIEL = "Thaumiel"
    NEUTRALIZED = "Neutralized"
    NON_STANDARD = "NonStandard"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS: dict[Classification, str] = {
    Classification.NONE: "Отсутствует",
    Classification.SAFE: "Безопасный",
    Classification.EUCLID: "Евклид",
    Classification.KETER: "Кетер",
    Classification.THAUMIEL: "Таумиэль",
    Classification.NEUTRALIZED: "Нейтрализован",
    Classification.NON_STANDARD: "Нестандартный класс",
}


class Record(BaseModel):
    """Single catalogue entry scraped from a series listing page."""

    model_config = ConfigDict(frozen=True)

    classification: Classification
    identifier: str  # e.g. "002"; not guaranteed unique across series
    display_name: str  # may be empty or NAME_NOT_FOUND

    @property
    def document_name(self) -> str:
        return f"{DOCUMENT_PREFIX}{self.identifier}"


class CacheBlob(BaseModel):
    """On-disk snapshot of the whole catalogue."""

    schema_version: int
    records: list[Record]
