"""Pygments-backed filename → language classifier."""

from __future__ import annotations

from functools import lru_cache

from pygments.lexers import get_lexer_for_filename
from pygments.util import ClassNotFound


class PygmentsClassifier:
    """Concrete LanguageClassifier using pygments' filename patterns."""

    def classify(self, filename: str) -> str | None:
        return _lexer_name(filename)


@lru_cache(maxsize=4096)
def _lexer_name(filename: str) -> str | None:
    if not filename:
        return None
    try:
        lexer = get_lexer_for_filename(filename)
    except ClassNotFound:
        return None
    return lexer.name
