"""Input normalization for user-selected options.

Provides mappings from UI labels to the internal mode names used by the
histogram, resolves the comparison years, and fills race parameters with
their defaults.
"""

import pandas as pd

from src.visuals.core import constants

MODE_MAP = {
    "Total": "total",
    "Compare": "compare",
}


def normalize_inputs(
    mode: str | None,
    year1: int | str | None,
    year2: int | str | None,
    years: list[int],
) -> tuple[str, int | None, int | None]:
    """Normalize mode and years to internal identifiers.

    Args:
        mode: UI label like "Total" or "Compare", or an internal name.
        year1: First comparison year; defaults to the earliest available.
        year2: Second comparison year; defaults to the latest available.
        years: Available years, ascending.

    Returns:
        A triple (mode, year1, year2), for example ("compare", 2015, 2024).
        Years are None in total mode.

    Raises:
        ValueError: If the two years are equal or not available.
    """
    norm_mode = MODE_MAP.get(mode, mode) if mode else "total"
    if norm_mode != "compare":
        return norm_mode, None, None
    if not years:
        raise ValueError("No years available to compare")

    first = int(year1) if year1 is not None else years[0]
    second = int(year2) if year2 is not None else years[-1]
    for year in (first, second):
        if year not in years:
            raise ValueError(f"Year {year} is not available")
    if first == second:
        raise ValueError("Choose two different years to compare")
    return norm_mode, first, second


def normalize_race_inputs(data: dict) -> dict:
    """Fill race parameters from a request body, applying defaults.

    Args:
        data: Parsed JSON body; every key is optional.

    Returns:
        Dict with ``top_n``, ``sub_steps``, ``duration_ms``, ``start_date`` and
        ``cutoff_date``, for example ``{"top_n": 10, "sub_steps": 4, ...}``.

    Raises:
        ValueError: If a number or date does not parse, or is out of range.
    """
    params = {
        "top_n": int(data.get("top_n", constants.top_n)),
        "sub_steps": int(data.get("sub_steps", constants.sub_steps)),
        "duration_ms": int(data.get("duration_ms", constants.duration_ms)),
        "start_date": pd.Timestamp(data.get("start_date") or constants.start_date),
        "cutoff_date": pd.Timestamp(data.get("cutoff_date") or constants.cutoff_date),
    }
    if params["top_n"] < 1:
        raise ValueError("top_n must be at least 1")
    if params["sub_steps"] < 1:
        raise ValueError("sub_steps must be at least 1")
    if params["duration_ms"] < 0:
        raise ValueError("duration_ms must be non-negative")
    return params
