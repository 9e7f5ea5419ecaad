"""Tests for canary_release.selector."""

from __future__ import annotations

import pytest

from canary_release.models import Release
from canary_release.selector import canary_family, first_canary, latest, latest_stable
from canary_release.versions import VersionTag
from helpers import make_release


@pytest.fixture
def releases() -> list[Release]:
    """Newest-first history with two canary families."""
    return [
        make_release("v1.1.0-canary.1", 6),
        make_release("v1.1.0-canary.0", 5),
        make_release("v1.0.0", 4),
        make_release("v1.0.0-canary.1", 3),
        make_release("nightly", 2, prerelease=True),
        make_release("v1.0.0-canary.0", 1),
    ]


class TestLatest:
    def test_first_release(self, releases: list[Release]) -> None:
        assert latest(releases) == releases[0]

    def test_empty(self) -> None:
        assert latest([]) is None


class TestLatestStable:
    def test_skips_prereleases(self, releases: list[Release]) -> None:
        result = latest_stable(releases)
        assert result is not None
        assert result.tag_name == "v1.0.0"

    def test_none_when_only_prereleases(self) -> None:
        assert latest_stable([make_release("v1.0.0-canary.0", 1)]) is None

    def test_empty(self) -> None:
        assert latest_stable([]) is None


class TestCanaryFamily:
    def test_includes_stable_and_canaries_in_order(self, releases: list[Release]) -> None:
        family = canary_family(releases, VersionTag.parse("v1.0.0"))
        assert [r.tag_name for r in family] == [
            "v1.0.0",
            "v1.0.0-canary.1",
            "v1.0.0-canary.0",
        ]

    def test_base_may_be_a_canary(self, releases: list[Release]) -> None:
        family = canary_family(releases, VersionTag.parse("v1.1.0-canary.1"))
        assert [r.tag_name for r in family] == ["v1.1.0-canary.1", "v1.1.0-canary.0"]

    def test_no_members(self, releases: list[Release]) -> None:
        assert canary_family(releases, VersionTag.parse("v9.0.0")) == []

    def test_first_canary_is_oldest(self, releases: list[Release]) -> None:
        first = first_canary(releases, VersionTag.parse("v1.1.0"))
        assert first is not None
        assert first.tag_name == "v1.1.0-canary.0"

    def test_first_canary_none(self) -> None:
        assert first_canary([], VersionTag.parse("v1.0.0")) is None
