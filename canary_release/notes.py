"""Markdown release notes.

Notes are assembled as a list of sections, each a list of lines, and joined
once at the end. Empty sections are dropped entirely, heading included.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .classify import Bucket
from .models import ChangeBuckets, ChangeRequest

SECTION_TITLES: dict[Bucket, str] = {
    Bucket.CORE: "Core Changes",
    Bucket.DOCS: "Documentation Changes",
    Bucket.MISC: "Miscellaneous Changes",
}


def change_line(change: ChangeRequest) -> str:
    return f"- {change.title}: #{change.number}"


def changes_section(title: str, changes: Sequence[ChangeRequest]) -> str:
    """Render one ``## title`` section, or "" when there are no changes."""
    if not changes:
        return ""
    return "\n".join([f"## {title}", *(change_line(c) for c in changes)])


def contributors(changes: Iterable[ChangeRequest]) -> list[str]:
    """Distinct authors in first-seen order."""
    return list(dict.fromkeys(c.author for c in changes))


def thank_you_line(names: Sequence[str]) -> str:
    """Render the contributor thank-you sentence.

    Examples:
        ["a"] → "A big thank you to our contributor @a."
        ["a", "b", "c"] → "A big thank you to our contributors @a, @b, and @c."
    """
    if len(names) == 1:
        return f"A big thank you to our contributor @{names[0]}."
    listed = "".join(f"@{name}, " for name in names[:-1])
    return f"A big thank you to our contributors {listed}and @{names[-1]}."


def contributors_section(changes: Iterable[ChangeRequest]) -> str:
    """Render the ``## Contributors`` section, or "" with no changes."""
    names = contributors(changes)
    if not names:
        return ""
    return f"## Contributors\n{thank_you_line(names)}"


def compose(buckets: ChangeBuckets, changes: Sequence[ChangeRequest]) -> str:
    """Render the release notes for classified changes.

    Args:
        buckets: Changes grouped by area.
        changes: The flat change list, used for the contributor list.

    Returns:
        Markdown with sections separated by a blank line and a trailing
        newline, or "" if every section is empty.
    """
    per_bucket = {
        Bucket.CORE: buckets.core,
        Bucket.DOCS: buckets.docs,
        Bucket.MISC: buckets.misc,
    }
    sections = [
        changes_section(SECTION_TITLES[bucket], per_bucket[bucket]) for bucket in Bucket
    ]
    sections.append(contributors_section(changes))
    rendered = [s for s in sections if s]
    return "\n\n".join(rendered) + "\n" if rendered else ""
