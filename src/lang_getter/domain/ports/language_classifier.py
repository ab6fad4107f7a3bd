"""Port: filename → language classifier."""

from __future__ import annotations

from typing import Protocol


class LanguageClassifier(Protocol):
    """Maps a file path to a human-readable language name."""

    def classify(self, filename: str) -> str | None:
        """Return the language of *filename*, or ``None`` if unrecognised."""
        ...
