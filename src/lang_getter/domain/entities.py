"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Visibility(str, Enum):
    """Which of the authenticated user's repositories to list."""

    ALL = "all"
    PUBLIC = "public"
    PRIVATE = "private"


class Affiliation(str, Enum):
    """How the authenticated user relates to a listed repository."""

    OWNER = "owner"
    COLLABORATOR = "collaborator"
    ORGANIZATION_MEMBER = "organization_member"


@dataclass(frozen=True, slots=True)
class Repository:
    """A repository as returned by the repository listing endpoints."""

    url: str
    languages_url: str
    full_name: str = ""

    @property
    def commits_url(self) -> str:
        return f"{self.url}/commits"


@dataclass(frozen=True, slots=True)
class PageLink:
    """Page numbers parsed from a response's ``Link`` header."""

    next_page: int | None = None
    last_page: int | None = None

    @property
    def has_more(self) -> bool:
        return self.next_page is not None


@dataclass(frozen=True, slots=True)
class Page:
    """One decoded page of a collection endpoint."""

    items: list[Any]
    link: PageLink = field(default_factory=PageLink)


@dataclass(frozen=True, slots=True)
class CommitSummary:
    """A commit as listed by ``GET /repos/{owner}/{repo}/commits``."""

    url: str
    author_login: str | None = None


@dataclass(frozen=True, slots=True)
class ChangedFile:
    """A file touched by a commit.  ``patch`` is absent for binary files."""

    filename: str
    patch: str | None = None


@dataclass(frozen=True, slots=True)
class CommitDetail:
    """A single commit with its per-file patches."""

    url: str
    files: list[ChangedFile] = field(default_factory=list)


@dataclass(slots=True)
class LanguageUsage:
    """Bytes added and distinct commits touched for one language."""

    bytes: int = 0
    commits: int = 0
