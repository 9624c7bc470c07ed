"""
Configuration.

Loads overrides from .env and exposes the CLI defaults. Only the CLI imports
this module; the scoring engine carries its own fixed constants and never
reads the environment.
"""

from __future__ import annotations

import os
from dotenv import load_dotenv

load_dotenv()


def int_env(name: str, default: int) -> int:
    """Integer setting from the environment; unset, blank or malformed values give ``default``."""
    raw = os.getenv(name, "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------
OUTPUT_DIR = os.getenv("BALLOT_OUTPUT_DIR", "./output")
CONSOLE_WIDTH = int_env("BALLOT_CONSOLE_WIDTH", 120)
