"""
adapters/base.py
----------------
Contract every platform adapter implements.
"""

from abc import ABC, abstractmethod
from typing import Optional, Union

from models.command import CommandOutput

ChatId = Union[int, str]


class PlatformAdapter(ABC):
    """Renders outputs and feeds button presses into the callback dispatcher."""

    @abstractmethod
    async def send_message(self, chat_id: ChatId, output: CommandOutput) -> None:
        """
        Send `output.messages` (or `output.text`) with its keyboard.
        A failed formatted send is retried once as plain text.
        """

    @abstractmethod
    async def edit_message(self, chat_id: ChatId, message_id: ChatId, output: CommandOutput) -> None:
        """Edit a message in place; falls back to `send_message` when editing fails."""

    @abstractmethod
    async def handle_callback(
        self,
        raw_data: str,
        chat_id: ChatId,
        message_id: ChatId,
        user_id: ChatId,
        user_name: Optional[str] = None,
    ) -> None:
        """Decode a button payload, dispatch it and render the result."""
