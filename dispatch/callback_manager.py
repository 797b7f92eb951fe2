"""
dispatch/callback_manager.py
----------------------------
Routes a decoded callback payload to the first handler that claims it.

Handlers are scanned in registration order and asked `can_handle(data)`.
This lets one handler own several related callback types, or add runtime
conditions beyond the `type` tag.
"""

from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Optional

from models.callbacks import CallbackData
from models.command import CommandInput, CommandOutput
from utils.logger import get_logger

logger = get_logger(__name__)

NOT_FOUND_TEXT = "❌ Ação não encontrada ou expirada."
INTERNAL_ERROR_TEXT = "❌ Erro ao processar ação."


class CallbackHandler(ABC):
    """Contract for callback handlers registered with the CallbackManager."""

    @property
    def name(self) -> str:
        """Identity used for idempotent registration and diagnostics."""
        return type(self).__name__

    @abstractmethod
    def can_handle(self, data: CallbackData) -> bool:
        """True if this handler claims `data`."""

    @abstractmethod
    async def handle(self, command_input: CommandInput) -> Optional[CommandOutput]:
        """Process the callback found in `command_input.callback_data`."""


class CallbackManager:
    """Ordered list of callback handlers plus first-match dispatch."""

    def __init__(self):
        self._handlers: list[CallbackHandler] = []

    def register_handler(self, handler: CallbackHandler) -> None:
        self._handlers.append(handler)

    def clear(self) -> None:
        self._handlers.clear()

    @property
    def handlers(self) -> list[CallbackHandler]:
        return list(self._handlers)

    def find_handler(self, data: CallbackData) -> Optional[CallbackHandler]:
        """First registered handler whose `can_handle` returns True."""
        for handler in self._handlers:
            if handler.can_handle(data):
                return handler
        return None

    async def handle_callback(
        self, data: CallbackData, command_input: CommandInput
    ) -> Optional[CommandOutput]:
        """
        Dispatch `data` to its handler.

        Returns:
            The handler's output. None means "do nothing" and is a valid result.
            A fixed "not found or expired" output if no handler claims `data`,
            and a fixed error output if the handler raises.
        """
        handler = self.find_handler(data)
        if handler is None:
            logger.warning(f"No handler found for callback type: {data.type}")
            return CommandOutput(text=NOT_FOUND_TEXT, format="HTML")

        try:
            return await handler.handle(replace(command_input, callback_data=data))
        except Exception as e:
            logger.error(
                f"Callback handler {handler.name} failed for {data!r} "
                f"(user {command_input.user_id}): {e}",
                exc_info=True,
            )
            return CommandOutput(text=INTERNAL_ERROR_TEXT, format="HTML")
