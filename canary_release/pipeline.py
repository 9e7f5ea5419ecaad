"""Release workflows: select baseline → collect changes → compose → publish.

Two workflows share the same tail:

Canary release
    1. List releases; with none, publish the seed canary tag right away
    2. Compute the next canary tag from the latest release
    3. Collect pull requests merged since the latest release
    4. Classify, compose notes and publish a pre-release

Stable release
    1. Require the latest release to be a canary
    2. Strip its canary suffix to get the stable tag
    3. Collect pull requests merged since the first canary of that version
    4. Classify, compose notes and publish a full release

Both return the published ``ReleaseDraft``, or None when there is nothing to
release. Forge errors are not caught.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from .classify import classify
from .console import detail, step
from .forge import Forge
from .models import ChangeRequest, Release, ReleaseDraft
from .notes import compose
from .selector import first_canary, latest
from .versions import Bump, ParseError, VersionTag, seed_canary_tag


def next_canary_tag(latest_release: Release | None, bump: Bump) -> VersionTag:
    """Compute the tag of the next canary release.

    Falls back to the seed tag when there is no release yet or when the
    latest tag is not a version tag.
    """
    if latest_release is None:
        return seed_canary_tag(bump)
    try:
        return latest_release.tag.next_canary(bump)
    except ParseError:
        detail(f"Cannot parse {latest_release.tag_name!r}; using seed tag")
        return seed_canary_tag(bump)


def build_notes(changes: Sequence[ChangeRequest]) -> str:
    """Classify changes and render their release notes."""
    buckets = classify(changes)
    detail(
        f"{len(buckets.core)} core, {len(buckets.docs)} documentation, "
        f"{len(buckets.misc)} miscellaneous"
    )
    return compose(buckets, changes)


async def collect_changes(
    forge: Forge, owner: str, repo: str, since: datetime
) -> list[ChangeRequest]:
    step(f"Collecting pull requests merged since {since.isoformat()}")
    changes = await forge.list_merged_change_requests(owner, repo, since)
    for change in changes:
        detail(f"#{change.number} {change.title} (@{change.author})")
    return changes


async def publish(
    forge: Forge, owner: str, repo: str, draft: ReleaseDraft
) -> ReleaseDraft:
    kind = "pre-release" if draft.prerelease else "release"
    step(f"Creating {kind} {draft.tag_name}")
    await forge.create_release(owner, repo, draft)
    detail("Published")
    return draft


async def create_canary_release(
    forge: Forge, owner: str, repo: str, bump: Bump
) -> ReleaseDraft | None:
    """Publish the next canary release of ``owner/repo``.

    Args:
        forge: Forge client.
        owner: Repository owner.
        repo: Repository name.
        bump: Version component to bump when the latest release is stable.
            Ignored when the latest release is already a canary.

    Returns:
        The published draft, or None if nothing was merged since the latest
        release.
    """
    step(f"Finding latest release of {owner}/{repo}")
    releases = await forge.list_releases(owner, repo)
    latest_release = latest(releases)
    tag = next_canary_tag(latest_release, bump)

    if latest_release is None:
        detail("No releases found; starting from the seed tag")
        draft = ReleaseDraft(
            tag_name=tag.format(),
            name=tag.format(),
            body="New canary release with no prior releases\n\n",
            prerelease=True,
        )
        return await publish(forge, owner, repo, draft)

    detail(f"Latest: {latest_release.tag_name} → next: {tag}")
    changes = await collect_changes(
        forge, owner, repo, latest_release.published_or_epoch
    )
    if not changes:
        detail(
            "No merged pull requests found between latest release and new canary release"
        )
        return None

    notes = build_notes(changes)
    draft = ReleaseDraft(
        tag_name=tag.format(),
        name=tag.format(),
        body=f"New canary release based on {latest_release.tag_name}\n\n{notes}",
        prerelease=True,
    )
    return await publish(forge, owner, repo, draft)


async def create_stable_release(
    forge: Forge, owner: str, repo: str
) -> ReleaseDraft | None:
    """Promote the latest canary of ``owner/repo`` to a stable release.

    The notes cover everything merged since the first canary of the version,
    so a stable release lists the changes of all its canaries.

    Returns:
        The published draft, or None if the latest release is not a canary
        or nothing was merged since the first canary.
    """
    step(f"Finding latest canary release of {owner}/{repo}")
    releases = await forge.list_releases(owner, repo)
    latest_canary = latest(releases)
    if latest_canary is None or not latest_canary.prerelease:
        detail("No canary releases found for repository")
        return None

    try:
        canary_tag = latest_canary.tag
    except ParseError:
        detail(f"Cannot parse {latest_canary.tag_name!r}; no canary to promote")
        return None
    if not canary_tag.is_canary:
        detail("No canary releases found for repository")
        return None
    stable = canary_tag.to_stable()

    baseline = first_canary(releases, stable)
    if baseline is None:
        detail(f"No canary releases found for {stable}")
        return None
    detail(f"Latest canary: {latest_canary.tag_name}, first canary: {baseline.tag_name}")

    changes = await collect_changes(forge, owner, repo, baseline.published_or_epoch)
    if not changes:
        detail(
            "No merged pull requests found between first canary release and new release"
        )
        return None

    notes = build_notes(changes)
    draft = ReleaseDraft(
        tag_name=stable.format(),
        name=stable.format(),
        body=f"New release based on {latest_canary.tag_name}\n\n{notes}",
        prerelease=False,
    )
    return await publish(forge, owner, repo, draft)
