"""
repositories/message_repo.py
----------------------------
Data access layer for chat/message history (`chats` and `messages` tables).
"""

from typing import Optional

from psycopg2.extras import RealDictCursor

from db.connection import transaction
from models.message import Chat, Message
from utils.logger import get_logger

logger = get_logger(__name__)


class MessageRepository:
    """Repository for the chats and messages tables."""

    # ── CHATS ─────────────────────────────────────────────

    def get_chat_by_telegram_id(self, telegram_id: str) -> Optional[Chat]:
        sql = """
            SELECT id, telegram_id, type, title, username, member_count, created_at
            FROM chats WHERE telegram_id = %s;
        """
        with transaction() as conn, conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(sql, (telegram_id,))
            row = cur.fetchone()
        return Chat(**row) if row else None

    def add_chat(self, chat: Chat) -> Chat:
        """Insert a chat; if it already exists, return the stored row."""
        sql = """
            INSERT INTO chats (telegram_id, type, title, username, member_count)
            VALUES (%s, %s, %s, %s, %s)
            ON CONFLICT (telegram_id) DO UPDATE SET type = EXCLUDED.type
            RETURNING id, created_at;
        """
        with transaction() as conn, conn.cursor() as cur:
            cur.execute(sql, (chat.telegram_id, chat.type, chat.title, chat.username, chat.member_count))
            chat.id, chat.created_at = cur.fetchone()
        return chat

    # ── MESSAGES ──────────────────────────────────────────

    def add_message(self, message: Message) -> Message:
        sql = """
            INSERT INTO messages
                (telegram_id, text, direction, type, chat_id, user_id, reply_to_id, edited_at, is_deleted)
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING id, created_at;
        """
        try:
            with transaction() as conn, conn.cursor() as cur:
                cur.execute(sql, (
                    message.telegram_id, message.text, message.direction, message.type,
                    message.chat_id, message.user_id, message.reply_to_id,
                    message.edited_at, message.is_deleted,
                ))
                message.id, message.created_at = cur.fetchone()
            return message
        except Exception as e:
            logger.error(f"Failed to store message {message.telegram_id}: {e}")
            raise

    def delete_all(self) -> int:
        """Remove the whole history (messages, then chats). Returns messages deleted."""
        with transaction() as conn, conn.cursor() as cur:
            cur.execute("DELETE FROM messages;")
            deleted = cur.rowcount
            cur.execute("DELETE FROM chats;")
        return deleted
