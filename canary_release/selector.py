"""Release selection over a newest-first release list.

The forge lists releases in reverse-chronological order; every function here
relies on that ordering rather than sorting by version.
"""

from __future__ import annotations

from collections.abc import Sequence

from .models import Release
from .versions import ParseError, VersionTag


def latest(releases: Sequence[Release]) -> Release | None:
    """Return the most recent release, or None if there are none."""
    return releases[0] if releases else None


def latest_stable(releases: Sequence[Release]) -> Release | None:
    """Return the most recent release not marked as a pre-release."""
    for release in releases:
        if not release.prerelease:
            return release
    return None


def canary_family(releases: Sequence[Release], base: VersionTag) -> list[Release]:
    """Return the releases of ``base`` and all its canaries, newest first.

    A release belongs to the family when its tag, stripped of any canary
    suffix, equals ``base`` stripped of its own. Releases whose tags do not
    parse are skipped.

    Example:
        base v1.2.0 over [v1.2.0-canary.1, v1.1.0, v1.2.0-canary.0]
        → [v1.2.0-canary.1, v1.2.0-canary.0]
    """
    stable = base.to_stable()
    family: list[Release] = []
    for release in releases:
        try:
            tag = release.tag
        except ParseError:
            continue
        if tag.to_stable() == stable:
            family.append(release)
    return family


def first_canary(releases: Sequence[Release], base: VersionTag) -> Release | None:
    """Return the oldest release of the ``base`` family, or None."""
    family = canary_family(releases, base)
    return family[-1] if family else None
