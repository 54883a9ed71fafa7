"""
Environment-driven settings.

Values are read once at import time after loading a local .env file.
Components receive these values as constructor defaults so tests can
override them without touching the environment.
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


# LLM
OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY")
LLM_MODEL = os.environ.get("JOURNEYX_MODEL", "gpt-4.1-mini")
LLM_TIMEOUT_SECONDS = _env_float("JOURNEYX_LLM_TIMEOUT", 60.0)

# Travel book sync
SYNC_TIMEOUT_SECONDS = _env_float("JOURNEYX_SYNC_TIMEOUT", 30.0)
TRAVEL_BOOK_APP_URL = os.environ.get(
    "JOURNEYX_BOOK_URL", "https://journeyxbook.vercel.app"
)
SUPABASE_URL = os.environ.get("SUPABASE_URL")
SUPABASE_KEY = os.environ.get("SUPABASE_KEY")
SYNC_TABLE = os.environ.get("JOURNEYX_SYNC_TABLE", "itineraries")

# Local history
STORAGE_DIR = os.environ.get("JOURNEYX_STORAGE_DIR", "data")
SAVED_TRIPS_KEY = "journeyx_trips"

# Logging
LOG_LEVEL = os.environ.get("JOURNEYX_LOG_LEVEL", "INFO")
# "text" for the pipe-delimited console format, "json" for StructuredFormatter
LOG_FORMAT = os.environ.get("JOURNEYX_LOG_FORMAT", "text").strip().lower()
