"""
models/message.py
-----------------
Domain models for the chat/message history written by the interceptor.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


class ChatType:
    PRIVATE = "PRIVATE"
    GROUP = "GROUP"
    SUPERGROUP = "SUPERGROUP"
    CHANNEL = "CHANNEL"
    BOT = "BOT"


class MessageDirection:
    INCOMING = "INCOMING"
    OUTGOING = "OUTGOING"


class MessageType:
    TEXT = "TEXT"
    PHOTO = "PHOTO"
    VIDEO = "VIDEO"
    DOCUMENT = "DOCUMENT"
    AUDIO = "AUDIO"
    VOICE = "VOICE"
    LOCATION = "LOCATION"
    CONTACT = "CONTACT"
    POLL = "POLL"
    OTHER = "OTHER"


@dataclass
class Chat:
    """A Telegram chat (private, group, channel...)."""
    telegram_id: str
    type: str = ChatType.PRIVATE
    title: Optional[str] = None
    username: Optional[str] = None
    member_count: Optional[int] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None


@dataclass
class Message:
    """
    A single message exchanged with the bot.

    Attributes:
        telegram_id: Platform message ID (outgoing messages use a timestamp).
        direction: MessageDirection value.
        type: MessageType value.
        chat_id: Internal chat ID (chats.id).
        user_id: Internal user ID (users.id), if the sender is known.
        reply_to_id: Platform ID of the message being replied to.
        edited_at: When the message was last edited on the platform.
    """
    telegram_id: int
    direction: str
    type: str
    chat_id: int
    text: Optional[str] = None
    user_id: Optional[int] = None
    reply_to_id: Optional[str] = None
    edited_at: Optional[datetime] = None
    is_deleted: bool = False
    id: Optional[int] = None
    created_at: Optional[datetime] = None
