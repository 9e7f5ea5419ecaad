"""Test helpers: timestamps, record factories and an in-memory forge."""

from __future__ import annotations

from datetime import datetime, timezone

from canary_release.models import ChangeRequest, Release, ReleaseDraft


def ts(day: int, month: int = 1, year: int = 2022) -> datetime:
    """UTC midnight on the given date."""
    return datetime(year, month, day, tzinfo=timezone.utc)


def make_release(tag: str, day: int, prerelease: bool | None = None) -> Release:
    """Create a release; canary tags default to pre-release."""
    if prerelease is None:
        prerelease = "-canary." in tag
    return Release(tag_name=tag, published_at=ts(day), prerelease=prerelease)


def make_change(
    number: int,
    title: str = "Change",
    author: str = "contributor1",
    labels: tuple[str, ...] = (),
    day: int = 2,
) -> ChangeRequest:
    return ChangeRequest(
        number=number,
        title=title,
        merged_at=ts(day),
        author=author,
        labels=frozenset(labels),
    )


class FakeForge:
    """In-memory forge recording the releases it is asked to create."""

    def __init__(
        self,
        releases: list[Release] | None = None,
        changes: list[ChangeRequest] | None = None,
    ) -> None:
        self.releases = releases or []
        self.changes = changes or []
        self.created: list[ReleaseDraft] = []
        self.since: list[datetime] = []

    async def list_releases(self, owner: str, repo: str) -> list[Release]:
        return list(self.releases)

    async def list_merged_change_requests(
        self, owner: str, repo: str, since: datetime
    ) -> list[ChangeRequest]:
        self.since.append(since)
        return [c for c in self.changes if c.merged_at and c.merged_at > since]

    async def create_release(self, owner: str, repo: str, draft: ReleaseDraft) -> None:
        self.created.append(draft)
