"""Predecessor/successor links between a category's entries across keyframes.

The renderers use these to start an entering bar where it was on the previous
frame and to send an exiting bar where it will be on the next one.
"""

from __future__ import annotations

from collections import defaultdict
from itertools import pairwise
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from src.visuals.anims.keyframes import Keyframe, RankedEntry


class IdentityMaps:
    """Identity-keyed ``prev`` and ``next`` lookups for ranked entries."""

    def __init__(
        self,
        prev: dict[RankedEntry, RankedEntry],
        next: dict[RankedEntry, RankedEntry],
    ) -> None:
        self.prev = prev
        self.next = next

    def prev_of(self, entry: RankedEntry) -> RankedEntry:
        return self.prev.get(entry, entry)

    def next_of(self, entry: RankedEntry) -> RankedEntry:
        return self.next.get(entry, entry)


def group_by_category(
    keyframes: Iterable[Keyframe],
) -> dict[str, list[RankedEntry]]:
    """Group every entry by category, keeping temporal order within a group."""
    groups: dict[str, list[RankedEntry]] = defaultdict(list)
    for _, entries in keyframes:
        for entry in entries:
            groups[entry.category].append(entry)
    return dict(groups)


def build_identity_maps(keyframes: Iterable[Keyframe]) -> IdentityMaps:
    prev: dict[RankedEntry, RankedEntry] = {}
    nxt: dict[RankedEntry, RankedEntry] = {}
    for occurrences in group_by_category(keyframes).values():
        for earlier, later in pairwise(occurrences):
            nxt[earlier] = later
            prev[later] = earlier
    return IdentityMaps(prev, nxt)
