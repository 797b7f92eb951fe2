"""
handlers/base_callback.py
-------------------------
Common helpers for callback handler classes.
"""

from typing import Optional

from dispatch.callback_manager import CallbackHandler
from models.callbacks import CallbackData, RaceDetailsCallback
from models.command import Button, CommandOutput
from models.race import Race
from utils.logger import get_logger
from utils.race_formatter import button_label

logger = get_logger(__name__)


class BaseCallbackHandler(CallbackHandler):
    """
    Base class for the bot's callback handlers.

    Subclasses set `callback_type` (or override `can_handle`) and
    implement `handle`.
    """

    callback_type: Optional[str] = None

    def can_handle(self, data: CallbackData) -> bool:
        return self.callback_type is not None and data.type == self.callback_type

    @staticmethod
    def create_error_response(message: str) -> CommandOutput:
        return CommandOutput(text=f"❌ {message}", format="HTML", edit_message=True)

    @staticmethod
    def create_success_response(message: str) -> CommandOutput:
        return CommandOutput(text=f"✅ {message}", format="HTML", edit_message=True)

    @staticmethod
    def create_back_button(data: CallbackData) -> Button:
        return Button(text="⬅️ Voltar", callback_data=data)

    @staticmethod
    def race_buttons(races: list[Race], limit: Optional[int] = None) -> list[list[Button]]:
        """One row per race, each opening the race details."""
        selected = races if limit is None else races[:limit]
        return [
            [Button(text=button_label(race), callback_data=RaceDetailsCallback(race_id=race.id))]
            for race in selected
        ]

    def log_error(self, error: Exception, context: str = "") -> None:
        logger.error(f"Error in {context or self.name}: {error}", exc_info=True)
