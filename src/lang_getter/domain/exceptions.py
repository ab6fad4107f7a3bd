"""Domain exception hierarchy.

Validation errors are raised before any request is issued.  Remote errors
carry the HTTP status code and the message GitHub returned, so the
interface layer can pass them through unchanged.
"""

from __future__ import annotations


class LangGetterError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class ValidationError(LangGetterError):
    """A credential, username or options value has the wrong shape."""


class InvalidCredentialError(ValidationError):
    """The access token is missing, empty or not a string."""


class InvalidUsernameError(ValidationError):
    """The username is not a valid GitHub login."""


class InvalidOptionsError(ValidationError):
    """The repository query options are malformed."""


# ── GitHub API errors ───────────────────────────────────────────────────────


class RemoteRequestError(LangGetterError):
    """A single GitHub API request failed.

    ``status_code`` is ``None`` when the request never got a response
    (DNS failure, connection reset, timeout).
    """

    def __init__(self, message: str, status_code: int | None = None, url: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.url = url

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.status_code} {self.message}"


class BadCredentialsError(RemoteRequestError):
    """The token was rejected (401)."""


class ResourceNotFoundError(RemoteRequestError):
    """The user, repository or commit does not exist (404)."""


class AccessDeniedError(RemoteRequestError):
    """The token lacks access to the resource (403)."""


class GitHubRateLimitError(RemoteRequestError):
    """GitHub API rate limit exceeded (429 / 403 with rate-limit header)."""


# ── Tolerated failures ──────────────────────────────────────────────────────


class PartialCollectionFailure(LangGetterError):
    """One repository's commit listing failed and was skipped."""

    def __init__(self, repo_url: str, cause: Exception) -> None:
        super().__init__(f"Commit listing failed for {repo_url}: {cause}")
        self.repo_url = repo_url
        self.cause = cause
