"""Group merged pull requests by area label."""

from __future__ import annotations

import enum
from collections.abc import Iterable

from .models import ChangeBuckets, ChangeRequest


class Bucket(enum.Enum):
    """Note sections, declared in match priority order.

    Each member's value is the label that selects it; MISC has no label and
    catches everything else.
    """

    CORE = "area:core"
    DOCS = "area:documentation"
    MISC = None


def bucket_for(change: ChangeRequest) -> Bucket:
    """Return the first bucket whose label the change carries."""
    for bucket in Bucket:
        if bucket.value is None or bucket.value in change.labels:
            return bucket
    raise AssertionError("unreachable: MISC matches every change")


def classify(changes: Iterable[ChangeRequest]) -> ChangeBuckets:
    """Partition changes into core, docs and misc buckets.

    A change labelled both ``area:core`` and ``area:documentation`` is core.
    Order within each bucket follows the input order.
    """
    grouped: dict[Bucket, list[ChangeRequest]] = {b: [] for b in Bucket}
    for change in changes:
        grouped[bucket_for(change)].append(change)
    return ChangeBuckets(
        core=grouped[Bucket.CORE],
        docs=grouped[Bucket.DOCS],
        misc=grouped[Bucket.MISC],
    )
