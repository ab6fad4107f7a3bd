"""Pydantic response DTOs for the API boundary."""

from __future__ import annotations

from pydantic import BaseModel

from lang_getter.domain.entities import LanguageUsage


class LanguageUsageResponse(BaseModel):
    """Bytes added and distinct commits touched for one language."""

    bytes: int
    commits: int

    @classmethod
    def from_usage(cls, usage: LanguageUsage) -> LanguageUsageResponse:
        return cls(bytes=usage.bytes, commits=usage.commits)


RepoLanguagesResponse = dict[str, int]
CommitLanguagesResponse = dict[str, LanguageUsageResponse]


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
