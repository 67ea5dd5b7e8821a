"""Shared test fixtures for the race engine and the backend routes."""

import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest

from backend.core import config


def make_events(rows):
    """Build an event log from (circumstance, date) pairs."""
    return pd.DataFrame(
        {
            "circumstance": [c for c, _ in rows],
            "crash_date_time": pd.to_datetime([d for _, d in rows]),
        }
    )


@pytest.fixture()
def small_events():
    """Three events across two months: Speeding leads, Distraction trails."""
    return make_events(
        [
            ("Speeding", "2015-01-15"),
            ("Speeding", "2015-02-15"),
            ("Distraction", "2015-02-20"),
        ]
    )


@pytest.fixture()
def quarter_events():
    """Events across Jan-Mar 2015 with a lead change in March."""
    return make_events(
        [
            ("Speeding", "2015-01-03"),
            ("Speeding", "2015-01-09"),
            ("Distraction", "2015-01-20"),
            ("Weather", "2015-02-11"),
            ("Distraction", "2015-03-02"),
            ("Distraction", "2015-03-05"),
            ("Distraction", "2015-03-28"),
        ]
    )


@pytest.fixture()
def accidents_csv(tmp_path):
    """Accidents export with sentinel categories and a broken date."""
    path = tmp_path / "accidents.csv"
    path.write_text(
        "circumstance,crash_date_time,year,speed_limit\n"
        "Speeding,2015-01-15 08:30:00,2015,35\n"
        "Speeding,2015-02-15 17:45:00,2015,35\n"
        "Distraction,2015-02-20 12:00:00,2015,45\n"
        " Weather ,2016-03-01 09:00:00,2016,25\n"
        "Unknown,2015-01-10 10:00:00,2015,40\n"
        "Not Applicable,2015-01-11 10:00:00,2015,0\n"
        ",2015-01-12 10:00:00,2016,25\n"
        "Speeding,not a date,2016,\n"
    )
    return str(path)


@pytest.fixture()
def client(accidents_csv, monkeypatch):
    """Flask test client reading the temp accidents export."""
    monkeypatch.setattr(config, "ACCIDENTS_CSV", accidents_csv)
    monkeypatch.setattr(config, "SPEED_LIMIT_CSV", accidents_csv)
    from backend.app import app

    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client
