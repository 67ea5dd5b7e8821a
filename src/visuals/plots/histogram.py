"""Speed-limit histogram with an optional two-year comparison."""

import numpy as np
import pandas as pd
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from src.visuals.core.constants import FIRST_YEAR, LAST_YEAR

MODES = ("total", "compare")
COMPARE_COLORS = ("steelblue", "orange")


def available_years(df: pd.DataFrame) -> list[int]:
    """Distinct years in the data window, ascending."""
    years = pd.to_numeric(df["year"], errors="coerce").dropna().astype(int)
    years = years[(years >= FIRST_YEAR) & (years <= LAST_YEAR)]
    return sorted(years.unique().tolist())


def speed_limit_counts(df: pd.DataFrame) -> pd.Series:
    """Number of incidents per exact speed limit, ordered by speed."""
    return df.groupby("speed_limit").size().sort_index().rename("count")


def compare_speed_limits(df: pd.DataFrame, year1: int, year2: int) -> pd.DataFrame:
    """Per-speed counts for two years side by side.

    Args:
        df: Rows with integer ``year`` and ``speed_limit`` columns.

    Returns:
        DataFrame indexed by speed limit over the union of both years' speeds,
        with one zero-filled count column per year (labelled by year string).
    """
    labels = [str(year1), str(year2)]
    subset = df[df["year"].isin([year1, year2])]
    if subset.empty:
        return pd.DataFrame({label: pd.Series(dtype=int) for label in labels})
    counts = (
        subset.groupby(["year", "speed_limit"])
        .size()
        .unstack(level=0, fill_value=0)
        .reindex(columns=[year1, year2], fill_value=0)
        .sort_index()
    )
    counts.columns = labels
    return counts


def _finish_axes(ax, title: str) -> None:
    ax.set_title(title, fontsize=16, fontweight="bold")
    ax.set_xlabel("Speed Limit (mph) →", loc="right")
    ax.set_ylabel("↑ Frequency", loc="top")
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.spines["left"].set_visible(False)


def plot_speed_histogram(
    df: pd.DataFrame,
    mode: str = "total",
    year1: int | None = None,
    year2: int | None = None,
    figsize: tuple[float, float] = (9.6, 5.0),
    dpi: int = 100,
) -> Figure:
    """Bar chart of incident counts per speed limit.

    Args:
        df: Rows with ``year`` and ``speed_limit`` columns.
        mode: "total" for all years, "compare" for two grouped years.
        year1, year2: Years to compare; required in compare mode.

    Returns:
        matplotlib.figure.Figure: The generated figure.
    """
    if mode not in MODES:
        raise ValueError(f"Unknown histogram mode: {mode!r}")

    fig = Figure(figsize=figsize, dpi=dpi)
    FigureCanvasAgg(fig)
    ax = fig.add_subplot()

    if mode == "total":
        counts = speed_limit_counts(df)
        positions = np.arange(len(counts))
        bars = ax.bar(positions, counts.to_numpy(), width=0.9, color="steelblue")
        ax.bar_label(bars, fontsize=8)
        ax.set_xticks(positions, [str(s) for s in counts.index])
        _finish_axes(ax, "Speed Limit Distribution (All Years)")
        return fig

    if year1 is None or year2 is None:
        raise ValueError("compare mode needs two years")
    counts = compare_speed_limits(df, year1, year2)
    positions = np.arange(len(counts))
    width = 0.9 / 2
    for offset, (label, color) in enumerate(zip(counts.columns, COMPARE_COLORS)):
        bars = ax.bar(
            positions + (offset - 0.5) * width,
            counts[label].to_numpy(),
            width=width * 0.95,
            color=color,
            label=label,
        )
        ax.bar_label(bars, fontsize=6)
    ax.set_xticks(positions, [str(s) for s in counts.index])
    ax.legend(loc="upper right", frameon=False)
    _finish_axes(ax, f"Speed Limit Comparison: {year1} vs {year2}")
    return fig
