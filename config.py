"""
config.py
---------
Settings for DashBot, read once from the environment (and a local .env
file when present). Every other module imports the constants below
instead of calling os.getenv itself.
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


def _env_ids(name: str) -> list[int]:
    """Comma-separated Telegram user IDs; blank entries are ignored."""
    return [int(part) for part in os.getenv(name, "").replace(" ", "").split(",") if part]


# ── Bot ───────────────────────────────────────────────────
TELEGRAM_BOT_TOKEN: str = os.getenv("TELEGRAM_BOT_TOKEN", "")
# Only 'telegram' is wired up in main.py
BOT_PLATFORM: str = os.getenv("BOT_PLATFORM", "telegram").strip().lower()

# ── Database ──────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = _env_int("DB_PORT", 5432)
DB_NAME: str = os.getenv("DB_NAME", "dashbot")
DB_USER: str = os.getenv("DB_USER", "dashbot_user")
DB_PASS: str = os.getenv("DB_PASS", "")
DB_POOL_MIN: int = _env_int("DB_POOL_MIN", 1)
DB_POOL_MAX: int = _env_int("DB_POOL_MAX", 5)

DATABASE_URL: str = os.getenv(
    "DATABASE_URL",
    f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}",
)

# ── Access control ────────────────────────────────────────
# Empty list = bot open to everyone
ALLOWED_USER_IDS: list[int] = _env_ids("ALLOWED_USER_IDS")
RATE_LIMIT_MESSAGES: int = _env_int("RATE_LIMIT_MESSAGES", 30)
RATE_LIMIT_WINDOW_SECONDS: int = _env_int("RATE_LIMIT_WINDOW_SECONDS", 60)

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# ── Race listings ─────────────────────────────────────────
RACE_LIST_LIMIT: int = _env_int("RACE_LIST_LIMIT", 10)
RACE_PAGE_SIZE: int = _env_int("RACE_PAGE_SIZE", 5)
