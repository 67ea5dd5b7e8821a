"""Tests for the speed-limit histogram."""

import pandas as pd
import pytest

from src.visuals.plots.histogram import (
    available_years,
    compare_speed_limits,
    plot_speed_histogram,
    speed_limit_counts,
)


@pytest.fixture()
def speeds():
    return pd.DataFrame(
        {
            "year": [2014, 2015, 2015, 2015, 2016, 2016, 2025],
            "speed_limit": [55, 35, 35, 45, 25, 35, 65],
        }
    )


class TestAggregations:
    def test_available_years_within_window(self, speeds):
        assert available_years(speeds) == [2015, 2016]

    def test_counts_by_speed(self, speeds):
        counts = speed_limit_counts(speeds)
        assert counts.to_dict() == {25: 1, 35: 3, 45: 1, 55: 1, 65: 1}

    def test_compare_union_of_speeds(self, speeds):
        counts = compare_speed_limits(speeds, 2015, 2016)
        assert list(counts.columns) == ["2015", "2016"]
        assert counts.to_dict(orient="index") == {
            25: {"2015": 0, "2016": 1},
            35: {"2015": 2, "2016": 1},
            45: {"2015": 1, "2016": 0},
        }

    def test_compare_missing_years(self, speeds):
        counts = compare_speed_limits(speeds, 2019, 2020)
        assert counts.empty
        assert list(counts.columns) == ["2019", "2020"]


class TestPlotSpeedHistogram:
    def test_total(self, speeds):
        fig = plot_speed_histogram(speeds, "total")
        ax = fig.axes[0]
        assert ax.get_title() == "Speed Limit Distribution (All Years)"
        assert len(ax.patches) == 5

    def test_compare(self, speeds):
        fig = plot_speed_histogram(speeds, "compare", 2015, 2016)
        ax = fig.axes[0]
        assert ax.get_title() == "Speed Limit Comparison: 2015 vs 2016"
        assert len(ax.patches) == 6
        assert [t.get_text() for t in ax.get_legend().get_texts()] == ["2015", "2016"]

    def test_unknown_mode(self, speeds):
        with pytest.raises(ValueError):
            plot_speed_histogram(speeds, "stacked")

    def test_compare_needs_years(self, speeds):
        with pytest.raises(ValueError):
            plot_speed_histogram(speeds, "compare", 2015, None)
