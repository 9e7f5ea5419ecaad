"""Tests for canary_release.versions."""

from __future__ import annotations

import pytest

from canary_release.versions import ParseError, VersionTag, seed_canary_tag


class TestParse:
    def test_stable_tag(self) -> None:
        tag = VersionTag.parse("v1.2.3")
        assert (tag.major, tag.minor, tag.patch) == (1, 2, 3)
        assert tag.canary is None
        assert not tag.is_canary

    def test_canary_tag(self) -> None:
        tag = VersionTag.parse("v1.2.3-canary.4")
        assert (tag.major, tag.minor, tag.patch, tag.canary) == (1, 2, 3, 4)
        assert tag.is_canary

    def test_other_suffix_is_ignored(self) -> None:
        """Only the canary suffix is recognised after the version."""
        assert VersionTag.parse("v1.2.3-rc.1") == VersionTag(major=1, minor=2, patch=3)

    @pytest.mark.parametrize("tag", ["1.2.3", "v1.2", "release-1", "", "vX.Y.Z"])
    def test_rejects_non_version_tags(self, tag: str) -> None:
        with pytest.raises(ParseError):
            VersionTag.parse(tag)

    def test_parse_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            VersionTag.parse("nightly")

    @pytest.mark.parametrize("tag", ["v0.0.0", "v10.20.30", "v1.0.0-canary.0", "v2.3.4-canary.17"])
    def test_format_round_trips(self, tag: str) -> None:
        parsed = VersionTag.parse(tag)
        assert parsed.format() == tag
        assert VersionTag.parse(parsed.format()) == parsed
        assert str(parsed) == tag


class TestNextCanary:
    def test_canary_increments_counter_only(self) -> None:
        """A canary ignores the requested bump."""
        tag = VersionTag(major=1, minor=0, patch=0, canary=0)
        for bump in ("major", "minor", "patch"):
            assert tag.next_canary(bump) == VersionTag(major=1, minor=0, patch=0, canary=1)

    def test_major_resets_minor_and_patch(self) -> None:
        tag = VersionTag(major=1, minor=2, patch=3)
        assert tag.next_canary("major") == VersionTag(major=2, minor=0, patch=0, canary=0)

    def test_minor_resets_patch(self) -> None:
        tag = VersionTag(major=1, minor=2, patch=3)
        assert tag.next_canary("minor") == VersionTag(major=1, minor=3, patch=0, canary=0)

    def test_patch(self) -> None:
        tag = VersionTag(major=1, minor=2, patch=3)
        assert tag.next_canary("patch") == VersionTag(major=1, minor=2, patch=4, canary=0)

    def test_rejects_unknown_bump(self) -> None:
        with pytest.raises(ValueError):
            VersionTag(major=1, minor=0, patch=0).next_canary("huge")  # type: ignore[arg-type]

    def test_does_not_mutate(self) -> None:
        tag = VersionTag.parse("v1.0.0-canary.3")
        tag.next_canary("patch")
        assert tag.canary == 3


class TestToStable:
    def test_strips_canary(self) -> None:
        assert VersionTag.parse("v1.4.0-canary.2").to_stable().format() == "v1.4.0"

    def test_stable_is_unchanged(self) -> None:
        tag = VersionTag.parse("v1.4.0")
        assert tag.to_stable() == tag


class TestSeedCanaryTag:
    @pytest.mark.parametrize(
        ("bump", "expected"),
        [
            ("major", "v1.0.0-canary.0"),
            ("minor", "v0.1.0-canary.0"),
            ("patch", "v0.0.1-canary.0"),
        ],
    )
    def test_seed_per_bump(self, bump: str, expected: str) -> None:
        assert seed_canary_tag(bump).format() == expected  # type: ignore[arg-type]
