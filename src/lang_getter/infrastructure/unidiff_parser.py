"""unidiff-backed parser for GitHub per-file patch fragments."""

from __future__ import annotations

from dataclasses import dataclass

from unidiff import PatchSet
from unidiff.errors import UnidiffParseError


@dataclass(frozen=True, slots=True)
class ParsedHunk:
    """Added lines of one hunk, stripped of marker and line terminator."""

    additions: tuple[str, ...]


class UnidiffParser:
    """Concrete DiffParser.

    GitHub's ``patch`` field starts directly at the first ``@@`` header, so
    synthetic ``---``/``+++`` file headers are prepended before parsing.
    """

    def parse(self, filename: str, patch: str) -> list[ParsedHunk]:
        if not patch.endswith("\n"):
            patch += "\n"
        text = f"--- a/{filename}\n+++ b/{filename}\n{patch}"
        try:
            patch_set = PatchSet(text)
        except UnidiffParseError as exc:
            raise ValueError(f"Unparseable patch for {filename}: {exc}") from exc

        hunks: list[ParsedHunk] = []
        for patched_file in patch_set:
            for hunk in patched_file:
                hunks.append(
                    ParsedHunk(
                        additions=tuple(
                            _strip_eol(line.value) for line in hunk if line.is_added
                        )
                    )
                )
        return hunks


def _strip_eol(value: str) -> str:
    return value[:-1] if value.endswith("\n") else value
