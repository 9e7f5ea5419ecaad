"""Data models for canary-release.

These Pydantic models represent the forge records the release workflows read
(releases and pull requests) and the one record they write (a release draft).
Forge payloads are converted with the ``from_github`` constructors so the rest
of the package never touches raw JSON.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .versions import Bump, VersionTag

# Draft releases have no publication time; they sort before everything.
EPOCH = datetime.min.replace(tzinfo=timezone.utc)

GHOST_USER = "ghost"


class Release(BaseModel):
    """A release as listed by the forge.

    Attributes:
        tag_name: Raw tag string, e.g. "v1.2.0-canary.3".
        published_at: Publication time, or None for drafts.
        prerelease: Whether the forge marks the release as a pre-release.
    """

    model_config = ConfigDict(frozen=True)

    tag_name: str
    published_at: datetime | None = None
    prerelease: bool = False

    @classmethod
    def from_github(cls, payload: dict[str, Any]) -> Release:
        return cls(
            tag_name=payload["tag_name"],
            published_at=payload.get("published_at"),
            prerelease=bool(payload.get("prerelease", False)),
        )

    @property
    def tag(self) -> VersionTag:
        """The parsed tag. Raises ParseError for non-version tags."""
        return VersionTag.parse(self.tag_name)

    @property
    def published_or_epoch(self) -> datetime:
        return self.published_at or EPOCH


class ChangeRequest(BaseModel):
    """A pull request merged into the repository.

    Attributes:
        number: Pull request number, rendered as ``#number`` in notes.
        title: Pull request title.
        merged_at: Merge time, or None if the request was closed unmerged.
        author: Login of the pull request author.
        labels: Label names attached to the pull request.
    """

    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    merged_at: datetime | None = None
    author: str = GHOST_USER
    labels: frozenset[str] = Field(default_factory=frozenset)

    @classmethod
    def from_github(cls, payload: dict[str, Any]) -> ChangeRequest:
        user = payload.get("user") or {}
        return cls(
            number=payload["number"],
            title=payload["title"],
            merged_at=payload.get("merged_at"),
            author=user.get("login") or GHOST_USER,
            labels=frozenset(label["name"] for label in payload.get("labels", [])),
        )


class ChangeBuckets(BaseModel):
    """Merged changes grouped by area, each list in input order."""

    model_config = ConfigDict(frozen=True)

    core: list[ChangeRequest] = Field(default_factory=list)
    docs: list[ChangeRequest] = Field(default_factory=list)
    misc: list[ChangeRequest] = Field(default_factory=list)


class ReleaseDraft(BaseModel):
    """Arguments of a create-release call.

    Attributes:
        tag_name: Tag to create, e.g. "v2.0.0-canary.0".
        name: Display name of the release.
        body: Markdown release notes.
        prerelease: Whether to mark the release as a pre-release.
    """

    model_config = ConfigDict(frozen=True)

    tag_name: str
    name: str
    body: str
    prerelease: bool

    def to_github(self) -> dict[str, Any]:
        return self.model_dump()


class DispatchEvent(BaseModel):
    """The fields of a ``repository_dispatch`` event the handler needs."""

    model_config = ConfigDict(frozen=True)

    action: str
    release_type: Bump = "patch"
    owner: str
    repo: str

    @classmethod
    def from_github(cls, payload: dict[str, Any]) -> DispatchEvent:
        client_payload = payload.get("client_payload") or {}
        repository = payload.get("repository") or {}
        fields: dict[str, Any] = {
            "action": payload.get("action"),
            "owner": (repository.get("owner") or {}).get("login"),
            "repo": repository.get("name"),
        }
        if client_payload.get("release_type") is not None:
            fields["release_type"] = client_payload["release_type"]
        return cls.model_validate(fields)
