import os
import re

from dotenv import find_dotenv, load_dotenv


# Load environment variables with .env, .env.dev/.env.prod support
def _load_env_files() -> None:
    """
    Load .env files with this precedence:
    1) Base .env (if present)
    2) Explicit file via ENV_FILE (e.g., .env.dev or ./config/.env.prod)
    3) Environment-specific file inferred from ENVIRONMENT
    Note: Existing OS environment variables are never overridden.
    """
    base_path = find_dotenv(".env", usecwd=True)
    if base_path:
        load_dotenv(base_path, override=False)

    explicit = os.environ.get("ENV_FILE")
    if explicit:
        explicit_path = explicit if os.path.isabs(explicit) else find_dotenv(explicit, usecwd=True)
        if explicit_path:
            load_dotenv(explicit_path, override=False)
            return

    env_name = os.environ.get("ENVIRONMENT")
    if env_name:
        slug = str(env_name).strip().lower()
        alias = {"dev": "development", "prod": "production", "stg": "staging"}
        resolved = alias.get(slug, slug)
        for candidate in (f".env.{resolved}", f".env.{slug}"):
            path = find_dotenv(candidate, usecwd=True)
            if path:
                load_dotenv(path, override=False)
                break


_load_env_files()


def _get_int_env(var_name: str, default_value: int) -> int:
    """
    Parse an integer environment variable robustly.
    Falls back to the first integer found in the string, then to the default.
    """
    raw = os.environ.get(var_name, str(default_value))
    text = str(raw).strip().rstrip(";")
    try:
        return int(text)
    except ValueError:
        match = re.search(r"[-+]?\d+", text or "")
        if match:
            return int(match.group(0))
    return int(default_value)


def _get_bool_env(var_name: str, default_value: bool) -> bool:
    raw = os.environ.get(var_name)
    if raw is None:
        return default_value
    return raw.strip().lower() in ("1", "true", "yes", "on")


# === Database Configuration ===
DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./trip_planner.db")
SQL_ECHO = _get_bool_env("SQL_ECHO", False)

# === Logging ===
LOG_PATH = os.environ.get("LOG_PATH")  # None -> ./logs/api.log
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# === Voting rules ===
DEFAULT_VOTING_DURATION_DAYS = _get_int_env("DEFAULT_VOTING_DURATION_DAYS", 7)
MAX_VOTING_DURATION_DAYS = _get_int_env("MAX_VOTING_DURATION_DAYS", 365)
# Longest pitched range, in days; bounds the best-range scan
MAX_PITCH_RANGE_DAYS = _get_int_env("MAX_PITCH_RANGE_DAYS", 366)
JOIN_TOKEN_LENGTH = _get_int_env("JOIN_TOKEN_LENGTH", 16)
ACTIVITY_FEED_LIMIT = _get_int_env("ACTIVITY_FEED_LIMIT", 50)

# === Geocoding (destination pitches) ===
GEOCODING_ENABLED = _get_bool_env("GEOCODING_ENABLED", False)
NOMINATIM_URL = os.environ.get("NOMINATIM_URL", "https://nominatim.openstreetmap.org")

# === Application Settings ===
APP_NAME = "Trip Planner API (Trips, Pitches, Votes, Travel)"
APP_VERSION = "1.0.0"
