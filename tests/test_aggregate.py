"""Tests for monthly cumulative aggregation."""

import pandas as pd

from src.data.aggregate import aggregate_cumulative, known_categories


class TestKnownCategories:
    def test_first_appearance_order(self, quarter_events):
        assert known_categories(quarter_events) == ["Speeding", "Distraction", "Weather"]

    def test_empty(self):
        empty = pd.DataFrame({"circumstance": [], "crash_date_time": []})
        assert known_categories(empty) == []


class TestAggregateCumulative:
    def test_one_snapshot_per_month(self, quarter_events):
        snapshots = aggregate_cumulative(quarter_events, "2015-01-31", "2015-12-31")
        assert [s.period for s in snapshots] == [
            pd.Timestamp("2015-01-31"),
            pd.Timestamp("2015-02-28"),
            pd.Timestamp("2015-03-31"),
        ]

    def test_running_totals(self, quarter_events):
        snapshots = aggregate_cumulative(quarter_events, "2015-01-31", "2015-12-31")
        assert snapshots[0].totals == {"Speeding": 2, "Distraction": 1, "Weather": 0}
        assert snapshots[1].totals == {"Speeding": 2, "Distraction": 1, "Weather": 1}
        assert snapshots[2].totals == {"Speeding": 2, "Distraction": 4, "Weather": 1}

    def test_totals_never_decrease(self, quarter_events):
        snapshots = aggregate_cumulative(quarter_events, "2015-01-31", "2015-12-31")
        for earlier, later in zip(snapshots, snapshots[1:]):
            for category, count in earlier.totals.items():
                assert later.totals[category] >= count

    def test_gap_months_carry_forward(self):
        events = pd.DataFrame(
            {
                "circumstance": ["Speeding", "Speeding"],
                "crash_date_time": pd.to_datetime(["2015-01-05", "2015-04-05"]),
            }
        )
        snapshots = aggregate_cumulative(events, "2015-01-31", "2015-12-31")
        assert len(snapshots) == 4
        assert [s.totals["Speeding"] for s in snapshots] == [1, 1, 1, 2]

    def test_cutoff_bounds_range(self, quarter_events):
        snapshots = aggregate_cumulative(quarter_events, "2015-01-31", "2015-02-28")
        assert len(snapshots) == 2
        assert snapshots[-1].totals["Distraction"] == 1

    def test_events_before_start_not_counted(self, quarter_events):
        snapshots = aggregate_cumulative(quarter_events, "2015-02-28", "2015-12-31")
        assert snapshots[0].period == pd.Timestamp("2015-02-28")
        assert snapshots[0].totals == {"Speeding": 0, "Distraction": 0, "Weather": 1}

    def test_start_after_cutoff(self, quarter_events):
        assert aggregate_cumulative(quarter_events, "2015-03-31", "2015-01-31") == []

    def test_start_after_cutoff_same_month(self, quarter_events):
        assert aggregate_cumulative(quarter_events, "2015-02-20", "2015-02-10") == []

    def test_no_events(self):
        empty = pd.DataFrame({"circumstance": [], "crash_date_time": []})
        assert aggregate_cumulative(empty) == []

    def test_unparseable_dates_ignored(self):
        events = pd.DataFrame(
            {
                "circumstance": ["Speeding", "Weather"],
                "crash_date_time": ["2015-01-05", "not a date"],
            }
        )
        snapshots = aggregate_cumulative(events, "2015-01-31", "2015-12-31")
        assert len(snapshots) == 1
        assert snapshots[0].totals == {"Speeding": 1, "Weather": 0}

    def test_zoned_timestamps(self):
        events = pd.DataFrame(
            {
                "circumstance": ["Speeding", "Speeding", "Distraction"],
                "crash_date_time": [
                    "2015-01-15T08:00:00Z",
                    "2015-02-15T08:00:00Z",
                    "2015-03-01T01:00:00+02:00",
                ],
            }
        )
        snapshots = aggregate_cumulative(events, "2015-01-31", "2015-02-28")
        assert [s.period for s in snapshots] == [
            pd.Timestamp("2015-01-31"),
            pd.Timestamp("2015-02-28"),
        ]
        assert snapshots[-1].totals == {"Speeding": 2, "Distraction": 1}
