"""
middleware/message_interceptor.py
---------------------------------
Persists the chat history around command handling.

`intercept_incoming_message` runs before a handler and stores the user's
message; `intercept_outgoing_message` runs after and stores the reply.
Both are audit-only: every error is logged and swallowed so they can
never block or change the response.
"""

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from models.command import CommandInput, CommandOutput
from models.message import ChatType, Message, MessageDirection, MessageType
from services.message_service import MessageService
from services.user_service import UserService
from utils.logger import get_logger

logger = get_logger(__name__)

_TELEGRAM_CHAT_TYPES = {
    "private": ChatType.PRIVATE,
    "group": ChatType.GROUP,
    "supergroup": ChatType.SUPERGROUP,
    "channel": ChatType.CHANNEL,
}

# Checked in order; the first key present in the message wins.
_TELEGRAM_MESSAGE_TYPES = [
    ("text", MessageType.TEXT),
    ("photo", MessageType.PHOTO),
    ("video", MessageType.VIDEO),
    ("document", MessageType.DOCUMENT),
    ("audio", MessageType.AUDIO),
    ("voice", MessageType.VOICE),
    ("location", MessageType.LOCATION),
    ("contact", MessageType.CONTACT),
    ("poll", MessageType.POLL),
]


@dataclass
class MessageData:
    """Platform-neutral fields extracted from a raw inbound message."""
    message_id: int
    chat_id: str
    chat_type: str
    message_type: str
    chat_title: Optional[str] = None
    chat_username: Optional[str] = None
    text: Optional[str] = None
    telegram_user_id: Optional[str] = None
    user_name: Optional[str] = None
    user_username: Optional[str] = None
    reply_to_id: Optional[str] = None
    edited_at: Optional[datetime] = None


class MessageInterceptor:
    """Stores inbound and outbound messages through MessageService."""

    def __init__(
        self,
        message_service: Optional[MessageService] = None,
        user_service: Optional[UserService] = None,
    ):
        self.message_service = message_service or MessageService()
        self.user_service = user_service or UserService()

    async def intercept_incoming_message(self, command_input: CommandInput) -> None:
        """Save the user's message (and register the user and chat if new)."""
        try:
            if not command_input.raw or not command_input.platform:
                return

            data = self.extract_message_data(command_input)
            if data is None:
                logger.warning("Could not extract data from incoming message.")
                return

            user_id = None
            if data.telegram_user_id:
                try:
                    user = self.user_service.register_user(
                        data.telegram_user_id,
                        data.user_name or f"User {data.telegram_user_id}",
                        data.user_username,
                    )
                    user_id = user.id
                except Exception as e:
                    logger.warning(f"Could not register user {data.telegram_user_id}: {e}")

            chat = self.message_service.get_or_create_chat(
                data.chat_id,
                data.chat_type,
                title=data.chat_title,
                username=data.chat_username,
            )

            self.message_service.create_message(Message(
                telegram_id=data.message_id,
                text=data.text,
                direction=MessageDirection.INCOMING,
                type=data.message_type,
                chat_id=chat.id,
                user_id=user_id,
                reply_to_id=data.reply_to_id,
                edited_at=data.edited_at,
            ))
            logger.info(
                f"📥 [{command_input.platform}] Message {data.message_id} saved "
                f"from {data.telegram_user_id} (user #{user_id})"
            )
        except Exception as e:
            logger.error(f"Failed to intercept incoming message: {e}")

    async def intercept_outgoing_message(self, command_input: CommandInput, output: CommandOutput) -> None:
        """Save the bot's reply to the chat the command came from."""
        try:
            if not command_input.raw or not command_input.platform or not output.text:
                return

            data = self.extract_message_data(command_input)
            if data is None:
                return

            chat = self.message_service.get_or_create_chat(data.chat_id, ChatType.PRIVATE)

            # Replies are stored before Telegram assigns them an ID
            temporary_id = int(time.time() * 1000)
            self.message_service.create_message(Message(
                telegram_id=temporary_id,
                text=output.text,
                direction=MessageDirection.OUTGOING,
                type=MessageType.TEXT,
                chat_id=chat.id,
            ))
            logger.info(f"📤 [{command_input.platform}] Reply {temporary_id} saved for chat {data.chat_id}")
        except Exception as e:
            logger.error(f"Failed to intercept outgoing message: {e}")

    # ── EXTRACTION ────────────────────────────────────────

    def extract_message_data(self, command_input: CommandInput) -> Optional[MessageData]:
        """Dispatch on platform; None if unsupported or unparseable."""
        try:
            if command_input.platform == "telegram":
                return self._extract_telegram(command_input.raw)
            if command_input.platform == "whatsapp":
                logger.warning("WhatsApp message extraction is not implemented.")
                return None
            logger.warning(f"Unsupported platform: {command_input.platform}")
            return None
        except Exception as e:
            logger.error(f"Failed to extract message data: {e}")
            return None

    @staticmethod
    def _extract_telegram(msg: dict[str, Any]) -> Optional[MessageData]:
        """Fields from a Telegram message dict (as produced by `Message.to_dict()`)."""
        if not isinstance(msg, dict) or not msg.get("chat") or not msg.get("message_id"):
            return None

        chat = msg["chat"]
        sender = msg.get("from") or {}
        reply_to = msg.get("reply_to_message") or {}
        edit_date = msg.get("edit_date")

        return MessageData(
            message_id=msg["message_id"],
            chat_id=str(chat["id"]),
            chat_type=_TELEGRAM_CHAT_TYPES.get(chat.get("type"), ChatType.PRIVATE),
            chat_title=chat.get("title"),
            chat_username=chat.get("username"),
            text=msg.get("text"),
            message_type=next(
                (mtype for key, mtype in _TELEGRAM_MESSAGE_TYPES if msg.get(key)),
                MessageType.OTHER,
            ),
            telegram_user_id=str(sender["id"]) if sender.get("id") else None,
            user_name=sender.get("first_name"),
            user_username=sender.get("username"),
            reply_to_id=str(reply_to["message_id"]) if reply_to.get("message_id") else None,
            edited_at=(
                datetime.fromtimestamp(edit_date, tz=timezone.utc)
                if isinstance(edit_date, (int, float)) else None
            ),
        )
