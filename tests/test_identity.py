"""Tests for the prev/next identity maps."""

import pandas as pd

from src.data.aggregate import CumulativeSnapshot
from src.visuals.anims.identity import build_identity_maps, group_by_category
from src.visuals.anims.keyframes import Ranker, build_keyframes


def _keyframes():
    snapshots = [
        CumulativeSnapshot(pd.Timestamp("2015-01-31"), {"a": 1, "b": 0}),
        CumulativeSnapshot(pd.Timestamp("2015-02-28"), {"a": 1, "b": 3}),
        CumulativeSnapshot(pd.Timestamp("2015-03-31"), {"a": 4, "b": 3}),
    ]
    return build_keyframes(snapshots, Ranker(["a", "b"], top_n=1), sub_steps=2)


class TestGroupByCategory:
    def test_temporal_order(self):
        keyframes = _keyframes()
        groups = group_by_category(keyframes)
        assert set(groups) == {"a", "b"}
        assert len(groups["a"]) == len(keyframes)
        expected = [next(e for e in entries if e.category == "a") for _, entries in keyframes]
        assert all(x is y for x, y in zip(groups["a"], expected))


class TestBuildIdentityMaps:
    def test_chain_links_consecutive_occurrences(self):
        keyframes = _keyframes()
        identity = build_identity_maps(keyframes)
        for category in ("a", "b"):
            chain = group_by_category(keyframes)[category]
            for earlier, later in zip(chain, chain[1:]):
                assert identity.next[earlier] is later
                assert identity.prev[later] is earlier

    def test_map_sizes(self):
        keyframes = _keyframes()
        identity = build_identity_maps(keyframes)
        links = 2 * (len(keyframes) - 1)
        assert len(identity.next) == links
        assert len(identity.prev) == links

    def test_boundaries_fall_back_to_self(self):
        keyframes = _keyframes()
        identity = build_identity_maps(keyframes)
        first = keyframes[0].entries[0]
        last = keyframes[-1].entries[0]
        assert first not in identity.prev
        assert identity.prev_of(first) is first
        assert last not in identity.next
        assert identity.next_of(last) is last

    def test_equal_looking_entries_stay_distinct(self):
        snapshots = [
            CumulativeSnapshot(pd.Timestamp("2015-01-31"), {"a": 1}),
            CumulativeSnapshot(pd.Timestamp("2015-02-28"), {"a": 1}),
        ]
        keyframes = build_keyframes(snapshots, Ranker(["a"]), sub_steps=1)
        identity = build_identity_maps(keyframes)
        (a0,), (a1,) = (k.entries for k in keyframes)
        assert (a0.value, a0.rank) == (a1.value, a1.rank)
        assert identity.next_of(a0) is a1

    def test_no_keyframes(self):
        identity = build_identity_maps([])
        assert identity.prev == {}
        assert identity.next == {}
