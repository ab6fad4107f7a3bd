"""API routes — thin controllers that delegate to the use case."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from lang_getter.domain.entities import LanguageUsage
from lang_getter.interface.dependencies import get_use_case
from lang_getter.interface.schemas import (
    CommitLanguagesResponse,
    ErrorResponse,
    LanguageUsageResponse,
    RepoLanguagesResponse,
)
from lang_getter.services.language_usage import LanguageUsageUseCase

router = APIRouter(prefix="/languages", tags=["languages"])

_ERRORS = {
    401: {"model": ErrorResponse, "description": "Missing or bad credentials"},
    403: {"model": ErrorResponse, "description": "Access denied"},
    404: {"model": ErrorResponse, "description": "User not found"},
    422: {"model": ErrorResponse, "description": "Invalid username or options"},
    429: {"model": ErrorResponse, "description": "GitHub API rate limit exceeded"},
    502: {"model": ErrorResponse, "description": "GitHub API error"},
}


def _options(visibility: str | None, affiliation: str | None) -> dict[str, str | None]:
    return {"visibility": visibility, "affiliation": affiliation}


def _usage_response(totals: dict[str, LanguageUsage]) -> CommitLanguagesResponse:
    return {lang: LanguageUsageResponse.from_usage(u) for lang, u in totals.items()}


@router.get("/repos", response_model=RepoLanguagesResponse, responses=_ERRORS)
async def repo_languages(
    visibility: str | None = Query(default=None, description="all, public or private"),
    affiliation: str | None = Query(
        default=None, description="Comma-separated owner, collaborator, organization_member"
    ),
    use_case: LanguageUsageUseCase = Depends(get_use_case),
) -> RepoLanguagesResponse:
    """Bytes per language across the token owner's repositories."""
    return await use_case.repo_languages(_options(visibility, affiliation))


@router.get("/repos/{username}", response_model=RepoLanguagesResponse, responses=_ERRORS)
async def repo_languages_by_username(
    username: str,
    use_case: LanguageUsageUseCase = Depends(get_use_case),
) -> RepoLanguagesResponse:
    """Bytes per language across a user's public repositories."""
    return await use_case.repo_languages_by_username(username)


@router.get("/commits", response_model=CommitLanguagesResponse, responses=_ERRORS)
async def commit_languages(
    visibility: str | None = Query(default=None, description="all, public or private"),
    affiliation: str | None = Query(
        default=None, description="Comma-separated owner, collaborator, organization_member"
    ),
    use_case: LanguageUsageUseCase = Depends(get_use_case),
) -> CommitLanguagesResponse:
    """Bytes added and commits touched per language, for the token owner."""
    return _usage_response(await use_case.commit_languages(_options(visibility, affiliation)))


@router.get("/commits/{username}", response_model=CommitLanguagesResponse, responses=_ERRORS)
async def commit_languages_by_username(
    username: str,
    use_case: LanguageUsageUseCase = Depends(get_use_case),
) -> CommitLanguagesResponse:
    """Bytes added and commits touched per language, for a user."""
    return _usage_response(await use_case.commit_languages_by_username(username))
