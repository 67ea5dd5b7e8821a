"""Monthly cumulative aggregation of the accident event log.

Buckets events into calendar months and keeps a running total per
category, producing one snapshot per month with no gaps.
"""

from __future__ import annotations

import logging
from typing import NamedTuple

import pandas as pd

from src.visuals.core.constants import (
    CATEGORY_COLUMN,
    DATE_COLUMN,
    cutoff_date,
    start_date,
)

logger = logging.getLogger(__name__)


class CumulativeSnapshot(NamedTuple):
    """Cumulative totals per category as of the end of ``period``."""

    period: pd.Timestamp
    totals: dict[str, int]


def known_categories(
    events: pd.DataFrame, category_col: str = CATEGORY_COLUMN
) -> list[str]:
    """Return the distinct categories in order of first appearance."""
    if events.empty:
        return []
    return [str(c) for c in events[category_col].dropna().unique()]


def aggregate_cumulative(
    events: pd.DataFrame,
    start: str | pd.Timestamp = start_date,
    cutoff: str | pd.Timestamp = cutoff_date,
    *,
    category_col: str = CATEGORY_COLUMN,
    date_col: str = DATE_COLUMN,
) -> list[CumulativeSnapshot]:
    """Build one cumulative snapshot per month in ``[start, min(max date, cutoff)]``.

    Args:
        events: Event log with a category and a date column.
        start: First month to include (any day within it).
        cutoff: Hard upper bound; later events never extend the range.
        category_col: Column holding the category label.
        date_col: Column holding the event timestamp.

    Returns:
        Snapshots ordered by period. Each ``totals`` mapping holds every known
        category, including ones with no events yet (at 0). Empty when
        ``start > cutoff`` or there are no dated events.
    """
    start = pd.Timestamp(start)
    cutoff = pd.Timestamp(cutoff)
    if events.empty or start > cutoff:
        return []

    # Zoned timestamps are compared as UTC wall time against naive bounds.
    dates = pd.to_datetime(events[date_col], errors="coerce", utc=True).dt.tz_localize(None)
    if dates.isna().all():
        return []
    end = min(dates.max(), cutoff)

    first_month = start.to_period("M")
    last_month = end.to_period("M")
    if first_month > last_month:
        return []
    months = pd.period_range(first_month, last_month, freq="M")
    categories = known_categories(events, category_col)

    frame = pd.DataFrame(
        {"category": events[category_col], "month": dates.dt.to_period("M")}
    ).dropna()
    frame = frame[frame["month"].isin(months)].astype({"category": str})

    if frame.empty:
        monthly = pd.DataFrame(0, index=months, columns=categories)
    else:
        monthly = (
            frame.groupby(["month", "category"])
            .size()
            .unstack(fill_value=0)
            .reindex(index=months, columns=categories, fill_value=0)
        )
    cumulative = monthly.cumsum()

    snapshots = [
        CumulativeSnapshot(
            month.to_timestamp(how="end").normalize(),
            {str(name): int(count) for name, count in row.items()},
        )
        for month, row in cumulative.iterrows()
    ]
    logger.debug(
        "aggregated %d events into %d monthly snapshots (%s..%s)",
        len(frame),
        len(snapshots),
        first_month,
        last_month,
    )
    return snapshots
