"""Port: unified-diff parser."""

from __future__ import annotations

from typing import Protocol, Sequence


class DiffHunk(Protocol):
    """One ``@@`` hunk of a unified diff."""

    @property
    def additions(self) -> Sequence[str]:
        """Added lines, without the ``+`` marker or line terminator."""
        ...


class DiffParser(Protocol):
    """Parses the patch fragment GitHub attaches to each changed file."""

    def parse(self, filename: str, patch: str) -> list[DiffHunk]:
        """Return the hunks of *patch*.

        Raises :class:`ValueError` when the patch cannot be parsed.
        """
        ...
