"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import transaction
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Users table: every Telegram user who talked to the bot
CREATE TABLE IF NOT EXISTS users (
    id              SERIAL PRIMARY KEY,
    telegram_id     VARCHAR(32) UNIQUE NOT NULL,
    name            VARCHAR(100) NOT NULL,
    username        VARCHAR(100),
    is_active       BOOLEAN DEFAULT TRUE,
    created_at      TIMESTAMPTZ DEFAULT NOW()
);

-- Preferences set through /config
CREATE TABLE IF NOT EXISTS user_preferences (
    id                      SERIAL PRIMARY KEY,
    user_id                 INT UNIQUE NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    preferred_distances     INT[] DEFAULT '{}',
    notifications_enabled   BOOLEAN DEFAULT TRUE,
    reminder_days           INT DEFAULT 3
);

-- Races listed by the bot
CREATE TABLE IF NOT EXISTS races (
    id                  SERIAL PRIMARY KEY,
    title               VARCHAR(200) NOT NULL,
    organization        VARCHAR(200) NOT NULL,
    distances           TEXT[] DEFAULT '{}',
    distances_numbers   INT[] DEFAULT '{}',
    date                DATE NOT NULL,
    location            VARCHAR(255) DEFAULT '',
    link                VARCHAR(500) DEFAULT '',
    time                VARCHAR(10) DEFAULT '',
    status              VARCHAR(20) NOT NULL DEFAULT 'open'
                        CHECK (status IN ('open', 'closed', 'coming_soon', 'cancelled')),
    created_at          TIMESTAMPTZ DEFAULT NOW(),
    updated_at          TIMESTAMPTZ DEFAULT NOW()
);

-- Favorite races per user
CREATE TABLE IF NOT EXISTS favorite_races (
    id              SERIAL PRIMARY KEY,
    user_id         INT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    race_id         INT NOT NULL REFERENCES races(id) ON DELETE CASCADE,
    created_at      TIMESTAMPTZ DEFAULT NOW(),
    UNIQUE(user_id, race_id)
);

-- Chats and message history written by the message interceptor
CREATE TABLE IF NOT EXISTS chats (
    id              SERIAL PRIMARY KEY,
    telegram_id     VARCHAR(32) UNIQUE NOT NULL,
    type            VARCHAR(20) NOT NULL DEFAULT 'PRIVATE',
    title           VARCHAR(255),
    username        VARCHAR(100),
    member_count    INT,
    created_at      TIMESTAMPTZ DEFAULT NOW()
);

CREATE TABLE IF NOT EXISTS messages (
    id              SERIAL PRIMARY KEY,
    telegram_id     BIGINT NOT NULL,
    text            TEXT,
    direction       VARCHAR(10) NOT NULL CHECK (direction IN ('INCOMING', 'OUTGOING')),
    type            VARCHAR(20) NOT NULL,
    chat_id         INT NOT NULL REFERENCES chats(id) ON DELETE CASCADE,
    user_id         INT REFERENCES users(id) ON DELETE SET NULL,
    reply_to_id     VARCHAR(32),
    edited_at       TIMESTAMPTZ,
    is_deleted      BOOLEAN DEFAULT FALSE,
    created_at      TIMESTAMPTZ DEFAULT NOW()
);

-- Indexes for faster queries
CREATE INDEX IF NOT EXISTS idx_races_date ON races(date);
CREATE INDEX IF NOT EXISTS idx_messages_chat ON messages(chat_id, created_at);
"""


def create_tables() -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    try:
        with transaction() as conn, conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        logger.error(f"Failed to initialize schema: {e}")
        raise


if __name__ == "__main__":
    from db.connection import init_pool
    init_pool()
    create_tables()
    logger.info("Database schema created.")
