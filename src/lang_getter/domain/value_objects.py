"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as PydanticValidationError

from lang_getter.domain.entities import Affiliation, Visibility
from lang_getter.domain.exceptions import (
    InvalidCredentialError,
    InvalidOptionsError,
    InvalidUsernameError,
)

# GitHub logins: alphanumerics, hyphens and (managed users) underscores, at most 39 characters.
_USERNAME_RE = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9_-]{0,38})$")


@dataclass(frozen=True, slots=True)
class AccessToken:
    """A non-empty GitHub personal access token."""

    value: str

    @classmethod
    def from_string(cls, token: object) -> AccessToken:
        if not isinstance(token, str):
            raise InvalidCredentialError(
                f"Access token must be a string, got {type(token).__name__}."
            )
        token = token.strip()
        if not token:
            raise InvalidCredentialError("Access token must not be empty.")
        if any(ch.isspace() for ch in token):
            raise InvalidCredentialError("Access token must not contain whitespace.")
        return cls(value=token)

    def __repr__(self) -> str:
        return "AccessToken('**********')"


@dataclass(frozen=True, slots=True)
class Username:
    """Validated GitHub login, safe to interpolate into an API path."""

    value: str

    @classmethod
    def from_string(cls, username: object) -> Username:
        if not isinstance(username, str):
            raise InvalidUsernameError(
                f"Username must be a string, got {type(username).__name__}."
            )
        username = username.strip()
        if not username:
            raise InvalidUsernameError("Username must not be empty.")
        if not _USERNAME_RE.match(username):
            raise InvalidUsernameError(f"Invalid GitHub username: '{username}'.")
        return cls(value=username)

    def __str__(self) -> str:
        return self.value


_DEFAULT_AFFILIATION: tuple[Affiliation, ...] = (
    Affiliation.OWNER,
    Affiliation.COLLABORATOR,
    Affiliation.ORGANIZATION_MEMBER,
)


class RepoQueryOptions(BaseModel):
    """Filters for listing the authenticated user's repositories.

    ``visibility`` defaults to ``public`` and ``affiliation`` to all three
    relationships.  Fields that are absent (or ``None``) keep their default.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    visibility: Visibility = Visibility.PUBLIC
    affiliation: tuple[Affiliation, ...] = _DEFAULT_AFFILIATION

    @field_validator("visibility", mode="before")
    @classmethod
    def _normalise_visibility(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("affiliation", mode="before")
    @classmethod
    def _normalise_affiliation(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.split(",")
        if not isinstance(v, (list, tuple, set, frozenset)):
            return v
        items: list[Any] = []
        for item in v:
            if isinstance(item, str):
                item = item.strip().lower()
                if not item:
                    msg = "affiliation entries must not be empty."
                    raise ValueError(msg)
            if item not in items:
                items.append(item)
        if not items:
            msg = "affiliation must name at least one relationship."
            raise ValueError(msg)
        return tuple(items)

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | RepoQueryOptions | None) -> RepoQueryOptions:
        """Build options from a plain mapping, applying defaults per field."""
        if options is None:
            return cls()
        if isinstance(options, RepoQueryOptions):
            return options
        if not isinstance(options, Mapping):
            raise InvalidOptionsError(
                f"Options must be a mapping, got {type(options).__name__}."
            )
        overrides = {key: value for key, value in options.items() if value is not None}
        try:
            return cls.model_validate(overrides)
        except PydanticValidationError as exc:
            messages = []
            for err in exc.errors():
                loc = ".".join(str(p) for p in err.get("loc", []))
                messages.append(f"{loc}: {err.get('msg', 'invalid value')}")
            raise InvalidOptionsError("; ".join(messages)) from exc

    def query_params(self) -> dict[str, str]:
        """Query string parameters for ``GET /user/repos``."""
        return {
            "visibility": self.visibility.value,
            "affiliation": ",".join(a.value for a in self.affiliation),
        }
