import logging
import os

import duckdb
import pandas as pd

from src.visuals.core.constants import (
    CATEGORY_COLUMN,
    DATE_COLUMN,
    EXCLUDED_CATEGORIES,
)

logger = logging.getLogger(__name__)


def _csv_source(csv_path: str) -> str:
    escaped = csv_path.replace("'", "''")
    return f"read_csv_auto('{escaped}', header=true, all_varchar=true)"


def load_accident_events(csv_path: str) -> pd.DataFrame | None:
    """Load circumstance/date pairs for the bar-chart race.

    Drops rows with an empty or sentinel circumstance ("Not Applicable",
    "Unknown") and rows whose date does not parse.

    Args:
        csv_path: Path to the accidents CSV export.

    Returns:
        DataFrame with ``circumstance`` (str) and ``crash_date_time``
        (datetime64) columns in file order, or None if the file is missing.
    """
    if not os.path.exists(csv_path):
        logger.warning("accidents CSV not found: %s", csv_path)
        return None

    placeholders = ",".join(["?"] * len(EXCLUDED_CATEGORIES))
    query = f"""
        SELECT
            trim({CATEGORY_COLUMN}) AS {CATEGORY_COLUMN},
            {DATE_COLUMN}
        FROM {_csv_source(csv_path)}
        WHERE {CATEGORY_COLUMN} IS NOT NULL
          AND trim({CATEGORY_COLUMN}) <> ''
          AND trim({CATEGORY_COLUMN}) NOT IN ({placeholders})
    """
    con = duckdb.connect()
    try:
        df = con.execute(query, list(EXCLUDED_CATEGORIES)).df()
    finally:
        con.close()

    df[DATE_COLUMN] = pd.to_datetime(
        df[DATE_COLUMN], errors="coerce", format="mixed", utc=True
    ).dt.tz_localize(None)
    dropped = int(df[DATE_COLUMN].isna().sum())
    if dropped:
        logger.info("dropped %d rows with unparseable %s", dropped, DATE_COLUMN)
    return df.dropna(subset=[DATE_COLUMN]).reset_index(drop=True)


def load_speed_limits(csv_path: str) -> pd.DataFrame | None:
    """Load year/speed-limit pairs for the histogram.

    Keeps rows with a numeric year and a non-zero numeric speed limit.

    Returns:
        DataFrame with integer ``year`` and ``speed_limit`` columns, or None
        if the file is missing.
    """
    if not os.path.exists(csv_path):
        logger.warning("speed limit CSV not found: %s", csv_path)
        return None

    query = f"""
        SELECT
            TRY_CAST(TRY_CAST(trim("year") AS DOUBLE) AS INTEGER) AS "year",
            TRY_CAST(TRY_CAST(trim("speed_limit") AS DOUBLE) AS INTEGER) AS "speed_limit"
        FROM {_csv_source(csv_path)}
    """
    con = duckdb.connect()
    try:
        df = con.execute(query).df()
    finally:
        con.close()

    df = df.dropna(subset=["year", "speed_limit"])
    df = df[df["speed_limit"] != 0]
    return df.astype({"year": int, "speed_limit": int}).reset_index(drop=True)
