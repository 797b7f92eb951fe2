"""
models/command.py
-----------------
Platform-independent input/output model shared by the dispatcher,
the handlers and the platform adapters.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from models.callbacks import CallbackData


@dataclass(frozen=True)
class UserIdentity:
    """Who sent the event. `id` is the platform user ID."""
    id: Optional[Union[int, str]] = None
    name: Optional[str] = None


@dataclass(frozen=True)
class CommandInput:
    """
    Normalized inbound event, built per-event by a platform adapter.

    Attributes:
        user: Sender identity, if the platform provided one.
        args: Positional arguments that followed the command name.
        platform: Platform tag, e.g. 'telegram'.
        raw: Platform-specific payload (opaque to the dispatcher).
        callback_data: Decoded button payload for callback events.
        message_id: ID of the originating message (needed for edits).
    """
    user: Optional[UserIdentity] = None
    args: tuple[str, ...] = ()
    platform: Optional[str] = None
    raw: Any = None
    callback_data: Optional[CallbackData] = None
    message_id: Optional[Union[int, str]] = None

    @property
    def user_id(self) -> Optional[str]:
        """The sender ID as a string, or None when unknown."""
        if self.user is None or self.user.id is None:
            return None
        return str(self.user.id)


@dataclass
class Button:
    """An inline button: either a callback payload or a URL."""
    text: str
    callback_data: Optional[CallbackData] = None
    url: Optional[str] = None


@dataclass
class Keyboard:
    """Ordered rows of buttons. `inline=False` renders a reply keyboard."""
    buttons: list[list[Button]] = field(default_factory=list)
    inline: bool = True


@dataclass
class CommandOutput:
    """
    Normalized handler result, rendered by a platform adapter.

    Attributes:
        text: Display text.
        format: How the platform should render `text` ('HTML', 'Markdown', ...).
        messages: Several messages to send in sequence instead of `text`.
        keyboard: Optional buttons attached to the message.
        edit_message: Edit the originating message instead of sending a new one.
    """
    text: str = ""
    format: Optional[str] = None
    messages: Optional[list[str]] = None
    keyboard: Optional[Keyboard] = None
    edit_message: bool = False
