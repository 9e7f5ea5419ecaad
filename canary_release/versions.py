"""Version tag parsing and canary bumping.

Release tags look like ``v1.2.3`` (stable) or ``v1.2.3-canary.4`` (canary
pre-release). Bump arithmetic is delegated to ``semver`` so the reset rules
(a major bump zeroes minor and patch, a minor bump zeroes patch) come from
the library rather than being re-derived here.
"""

from __future__ import annotations

import re
from typing import Literal

import semver
from pydantic import BaseModel, ConfigDict, Field

Bump = Literal["major", "minor", "patch"]

_TAG_RE = re.compile(r"^v(\d+)\.(\d+)\.(\d+)(?:-canary\.(\d+))?")

CANARY_PREFIX = "canary"


class ParseError(ValueError):
    """Raised when a tag does not start with ``v<major>.<minor>.<patch>``."""


class VersionTag(BaseModel):
    """A semantic version with an optional canary counter.

    Attributes:
        major: Major version component.
        minor: Minor version component.
        patch: Patch version component.
        canary: Canary counter, or None for a stable tag.
    """

    model_config = ConfigDict(frozen=True)

    major: int = Field(ge=0)
    minor: int = Field(ge=0)
    patch: int = Field(ge=0)
    canary: int | None = Field(default=None, ge=0)

    @classmethod
    def parse(cls, tag: str) -> VersionTag:
        """Parse a tag string such as ``v1.2.3`` or ``v1.2.3-canary.0``.

        Anything after the matched prefix that is not a canary suffix is
        ignored, so ``v1.2.3-rc.1`` parses as the stable ``v1.2.3``.

        Raises:
            ParseError: If the tag does not start with ``v<M>.<m>.<p>``.
        """
        m = _TAG_RE.match(tag)
        if m is None:
            raise ParseError(f"not a version tag: {tag!r}")
        canary = int(m.group(4)) if m.group(4) is not None else None
        return cls(
            major=int(m.group(1)),
            minor=int(m.group(2)),
            patch=int(m.group(3)),
            canary=canary,
        )

    @property
    def is_canary(self) -> bool:
        return self.canary is not None

    def to_semver(self) -> semver.Version:
        prerelease = f"{CANARY_PREFIX}.{self.canary}" if self.is_canary else None
        return semver.Version(self.major, self.minor, self.patch, prerelease)

    def next_canary(self, bump: Bump) -> VersionTag:
        """Return the tag of the next canary release.

        A canary tag only increments its own counter and ignores ``bump``.
        A stable tag is bumped by ``bump`` and starts a new family at
        ``canary.0``.

        Examples:
            v1.0.0-canary.0, "major" → v1.0.0-canary.1
            v1.2.3, "major" → v2.0.0-canary.0
            v1.2.3, "minor" → v1.3.0-canary.0
        """
        if self.canary is not None:
            return self.model_copy(update={"canary": self.canary + 1})
        base = self.to_semver()
        if bump == "major":
            bumped = base.bump_major()
        elif bump == "minor":
            bumped = base.bump_minor()
        elif bump == "patch":
            bumped = base.bump_patch()
        else:
            raise ValueError(f"unexpected bump kind: {bump}")
        return VersionTag(
            major=bumped.major, minor=bumped.minor, patch=bumped.patch, canary=0
        )

    def to_stable(self) -> VersionTag:
        """Strip the canary counter: v1.2.3-canary.4 → v1.2.3."""
        return self.model_copy(update={"canary": None})

    def format(self) -> str:
        return f"v{self.to_semver()}"

    def __str__(self) -> str:
        return self.format()


SEED_TAG = VersionTag(major=0, minor=0, patch=0, canary=0)


def seed_canary_tag(bump: Bump) -> VersionTag:
    """Return the first canary tag of a repository with no releases.

    Starts from ``v0.0.0-canary.0`` and applies ``bump`` to it:
    major → v1.0.0-canary.0, minor → v0.1.0-canary.0, patch → v0.0.1-canary.0.
    """
    return SEED_TAG.to_stable().next_canary(bump)
