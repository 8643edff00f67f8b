"""Application configuration and constants."""
import os
from pathlib import Path


def _parse_int_env(name: str, default: int) -> int:
    """Parse integer from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_bool_env(name: str, default: bool) -> bool:
    """Parse boolean flag from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


# Database
DB_DIR = Path(os.environ.get("DB_DIR", Path.cwd() / "data"))
DB_DIR.mkdir(parents=True, exist_ok=True)
DATABASE_URL = os.environ.get(
    "DATABASE_URL", f"sqlite:///{DB_DIR / 'quiz.db'}"
)

# Fill an empty database with the bundled sample categories, tests and questions
SEED_SAMPLE_DATA = _parse_bool_env("SEED_SAMPLE_DATA", True)

# Server
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
HOST = os.environ.get("HOST", "127.0.0.1")
PORT = _parse_int_env("PORT", 8000)

# Quiz sessions
SESSION_TICK_SECONDS = 1.0
# Completed sessions stay readable this long before the registry drops them
SESSION_COMPLETED_TTL_SECONDS = _parse_int_env("SESSION_COMPLETED_TTL_SECONDS", 300)
# Untouched sessions without a running timer are dropped after this long
SESSION_IDLE_TTL_SECONDS = _parse_int_env("SESSION_IDLE_TTL_SECONDS", 2 * 60 * 60)
