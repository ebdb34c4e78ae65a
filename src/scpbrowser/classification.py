"""Object-class lookup from the listing page's class icon alt text."""

from __future__ import annotations

from scpbrowser.models.catalogue import Classification

# Exact alt-text values of the class icons on the series pages.
_ALT_TO_CLASS: dict[str, Classification] = {
    "na.png": Classification.NEUTRALIZED,
    "safe.png": Classification.SAFE,
    "euclid.png": Classification.EUCLID,
    "keter.png": Classification.KETER,
    "thaumiel.png": Classification.THAUMIEL,
    "nonstandard.png": Classification.NON_STANDARD,
}


def classify(token: str | None) -> Classification:
    """Map an icon alt text to a classification. Unknown or missing → NONE."""
    if token is None:
        return Classification.NONE
    return _ALT_TO_CLASS.get(token, Classification.NONE)
