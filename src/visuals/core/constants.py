"""Common visualization constants used across modules."""

import pandas as pd

# Race timeline defaults
top_n: int = 10
sub_steps: int = 4
duration_ms: int = 100
start_date: pd.Timestamp = pd.Timestamp("2015-01-31")
cutoff_date: pd.Timestamp = pd.Timestamp("2024-12-31")

# Layout defaults
dpi: int = 60
figsize: tuple[float, float] = (16, 10)
bar_height: float = 0.8
tick_interval: float = 1 / 30

# Dataset columns and sentinel categories dropped at load time
CATEGORY_COLUMN = "circumstance"
DATE_COLUMN = "crash_date_time"
EXCLUDED_CATEGORIES: tuple[str, ...] = ("Not Applicable", "Unknown")

# Histogram year window
FIRST_YEAR: int = 2015
LAST_YEAR: int = 2024
