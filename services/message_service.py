"""
services/message_service.py
---------------------------
Chat/message history used by the message interceptor.
"""

from typing import Optional

from models.message import Chat, ChatType, Message
from repositories.message_repo import MessageRepository


class MessageService:
    """Thin orchestration over MessageRepository."""

    def __init__(self, repo: Optional[MessageRepository] = None):
        self.repo = repo or MessageRepository()

    def get_chat_by_telegram_id(self, telegram_id: str) -> Optional[Chat]:
        return self.repo.get_chat_by_telegram_id(str(telegram_id))

    def create_chat(
        self,
        telegram_id: str,
        chat_type: str = ChatType.PRIVATE,
        title: Optional[str] = None,
        username: Optional[str] = None,
        member_count: Optional[int] = None,
    ) -> Chat:
        return self.repo.add_chat(Chat(
            telegram_id=str(telegram_id),
            type=chat_type,
            title=title,
            username=username,
            member_count=member_count,
        ))

    def get_or_create_chat(self, telegram_id: str, chat_type: str = ChatType.PRIVATE, **kwargs) -> Chat:
        return self.get_chat_by_telegram_id(telegram_id) or self.create_chat(telegram_id, chat_type, **kwargs)

    def create_message(self, message: Message) -> Message:
        return self.repo.add_message(message)
