"""Ranking and keyframe interpolation for the bar-chart race.

Turns monthly cumulative snapshots into a dense, time-ordered sequence of
ranked frames by linearly blending each pair of neighbouring months.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import pairwise
from typing import Callable, Iterable, Mapping, NamedTuple, Sequence

import numpy as np
import pandas as pd

from src.data.aggregate import (
    CumulativeSnapshot,
    aggregate_cumulative,
    known_categories,
)
from src.visuals.anims.identity import IdentityMaps, build_identity_maps
from src.visuals.core import constants

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class RankedEntry:
    """One category's value and rank within a single keyframe.

    Entries compare and hash by identity so that each occurrence can key the
    prev/next maps independently.
    """

    category: str
    value: float
    rank: int


class Keyframe(NamedTuple):
    instant: pd.Timestamp
    entries: tuple[RankedEntry, ...]


class Ranker:
    """Rank a fixed category set by an arbitrary value function.

    Args:
        categories: Known categories; iteration order breaks ties.
        top_n: Rank ceiling. Every position at or beyond ``top_n`` shares
            rank ``top_n`` so the position scale has ``top_n + 1`` bands.
    """

    def __init__(self, categories: Iterable[str], top_n: int = constants.top_n) -> None:
        if top_n < 0:
            raise ValueError(f"top_n must be non-negative, got {top_n}")
        self.categories: tuple[str, ...] = tuple(dict.fromkeys(categories))
        self.top_n = top_n

    def __call__(self, value: Callable[[str], float]) -> tuple[RankedEntry, ...]:
        values = np.fromiter(
            (value(c) for c in self.categories),
            dtype=float,
            count=len(self.categories),
        )
        order = np.argsort(-values, kind="stable")
        return tuple(
            RankedEntry(self.categories[i], float(values[i]), min(self.top_n, pos))
            for pos, i in enumerate(order)
        )


def _blend(
    a: Mapping[str, float], b: Mapping[str, float], t: float
) -> Callable[[str], float]:
    def value(category: str) -> float:
        return a.get(category, 0) * (1 - t) + b.get(category, 0) * t

    return value


def build_keyframes(
    snapshots: Sequence[CumulativeSnapshot],
    ranker: Ranker,
    sub_steps: int = constants.sub_steps,
) -> list[Keyframe]:
    """Interpolate ``sub_steps`` keyframes per snapshot pair plus a terminal one.

    Returns ``sub_steps * (len(snapshots) - 1) + 1`` keyframes, or an empty
    list when there are no snapshots.
    """
    if sub_steps < 1:
        raise ValueError(f"sub_steps must be at least 1, got {sub_steps}")
    if not snapshots:
        return []

    keyframes: list[Keyframe] = []
    for (ka, a), (kb, b) in pairwise(snapshots):
        for i in range(sub_steps):
            t = i / sub_steps
            keyframes.append(Keyframe(ka + (kb - ka) * t, ranker(_blend(a, b, t))))

    last_period, last_totals = snapshots[-1]
    keyframes.append(
        Keyframe(last_period, ranker(lambda c: last_totals.get(c, 0)))
    )
    return keyframes


@dataclass(frozen=True)
class RaceTimeline:
    """Everything derived from one event log under one configuration."""

    snapshots: list[CumulativeSnapshot]
    keyframes: list[Keyframe]
    identity: IdentityMaps
    top_n: int


def build_race_timeline(
    events: pd.DataFrame,
    top_n: int = constants.top_n,
    sub_steps: int = constants.sub_steps,
    start: str | pd.Timestamp = constants.start_date,
    cutoff: str | pd.Timestamp = constants.cutoff_date,
) -> RaceTimeline:
    """Run aggregation, ranking, interpolation and identity tracking in one go."""
    snapshots = aggregate_cumulative(events, start, cutoff)
    ranker = Ranker(known_categories(events), top_n)
    keyframes = build_keyframes(snapshots, ranker, sub_steps)
    identity = build_identity_maps(keyframes)
    logger.info(
        "race timeline: %d categories, %d snapshots, %d keyframes (top_n=%d, sub_steps=%d)",
        len(ranker.categories),
        len(snapshots),
        len(keyframes),
        top_n,
        sub_steps,
    )
    return RaceTimeline(snapshots, keyframes, identity, top_n)
