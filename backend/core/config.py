"""Centralized configuration for the backend.

Loads environment variables, sets defaults, and exposes constants
used across services and routes.
"""

import os

from dotenv import load_dotenv

load_dotenv("env/.env")

ENV = os.getenv("ENV", "local")

# Data sources; both charts read the same modified accidents export by default
ACCIDENTS_CSV = os.getenv("ACCIDENTS_CSV", "files/final_modified_file.csv")
SPEED_LIMIT_CSV = os.getenv("SPEED_LIMIT_CSV", ACCIDENTS_CSV)

# Offline animation rendering
GIF_FPS = int(os.getenv("GIF_FPS", "10"))
MAX_ANIMATION_KEYFRAMES = int(os.getenv("MAX_ANIMATION_KEYFRAMES", "600"))
