"""Tests for the duckdb-backed CSV loaders."""

import pandas as pd

from backend.services.db import load_accident_events, load_speed_limits


class TestLoadAccidentEvents:
    def test_filters_and_parses(self, accidents_csv):
        df = load_accident_events(accidents_csv)
        assert list(df.columns) == ["circumstance", "crash_date_time"]
        assert df["circumstance"].tolist() == ["Speeding", "Speeding", "Distraction", "Weather"]
        assert pd.api.types.is_datetime64_any_dtype(df["crash_date_time"])
        assert df["crash_date_time"].iloc[0] == pd.Timestamp("2015-01-15 08:30:00")

    def test_zoned_dates_become_naive(self, tmp_path):
        path = tmp_path / "zoned.csv"
        path.write_text(
            "circumstance,crash_date_time\n"
            "Speeding,2015-01-15T08:00:00Z\n"
            "Weather,2015-01-16 09:30:00\n"
        )
        df = load_accident_events(str(path))
        assert df["crash_date_time"].dt.tz is None
        assert df["crash_date_time"].tolist() == [
            pd.Timestamp("2015-01-15 08:00:00"),
            pd.Timestamp("2015-01-16 09:30:00"),
        ]

    def test_missing_file(self, tmp_path):
        assert load_accident_events(str(tmp_path / "nope.csv")) is None


class TestLoadSpeedLimits:
    def test_numeric_non_zero(self, accidents_csv):
        df = load_speed_limits(accidents_csv)
        assert df["year"].tolist() == [2015, 2015, 2015, 2016, 2015, 2016]
        assert df["speed_limit"].tolist() == [35, 35, 45, 25, 40, 25]

    def test_missing_file(self, tmp_path):
        assert load_speed_limits(str(tmp_path / "nope.csv")) is None
