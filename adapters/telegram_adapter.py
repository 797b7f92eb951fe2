"""
adapters/telegram_adapter.py
----------------------------
python-telegram-bot binding.

`on_message` and `on_callback_query` are the Application entry points
(see main.py); everything below them works on plain Bot calls so it can
be exercised with a mocked Bot.
"""

from typing import Optional, Union

from telegram import (
    Bot,
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    KeyboardButton,
    Message,
    ReplyKeyboardMarkup,
    Update,
)
from telegram.constants import ParseMode
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from adapters.base import ChatId, PlatformAdapter
from dispatch import callback_codec
from dispatch.callback_manager import CallbackManager
from dispatch.command_router import CommandRouter
from dispatch.errors import CallbackCodecError
from models.command import CommandInput, CommandOutput, Keyboard, UserIdentity
from utils.logger import get_logger
from utils.text import is_command, parse_command, strip_formatting

logger = get_logger(__name__)

PLATFORM = "telegram"
CALLBACK_ERROR_TEXT = "❌ Erro ao processar ação."

_PARSE_MODES = {
    "HTML": ParseMode.HTML,
    "Markdown": ParseMode.MARKDOWN,
    "MarkdownV2": ParseMode.MARKDOWN_V2,
}

Markup = Union[InlineKeyboardMarkup, ReplyKeyboardMarkup]


def build_markup(keyboard: Optional[Keyboard]) -> Optional[Markup]:
    """
    Convert a Keyboard into Telegram reply markup.

    Inline buttons carry either a URL or an encoded callback payload.
    Reply keyboards only render button text.

    Raises:
        CallbackCodecError: If a button's payload cannot be encoded.
    """
    if keyboard is None:
        return None

    if not keyboard.inline:
        return ReplyKeyboardMarkup(
            [[KeyboardButton(button.text) for button in row] for row in keyboard.buttons],
            resize_keyboard=True,
            one_time_keyboard=True,
        )

    rows = []
    for row in keyboard.buttons:
        buttons = []
        for button in row:
            if button.url:
                buttons.append(InlineKeyboardButton(button.text, url=button.url))
                continue
            payload = callback_codec.serialize(button.callback_data)
            if not callback_codec.validate_size(button.callback_data):
                logger.warning(f"Callback payload over {callback_codec.MAX_CALLBACK_BYTES} bytes: {payload}")
            buttons.append(InlineKeyboardButton(button.text, callback_data=payload))
        rows.append(buttons)
    return InlineKeyboardMarkup(rows)


class TelegramPlatformAdapter(PlatformAdapter):
    """
    Renders CommandOutput through a python-telegram-bot `Bot`.

    Args:
        bot: The Application's bot.
        command_router: Router for slash commands.
        callback_manager: Dispatcher for button presses.
    """

    def __init__(self, bot: Bot, command_router: CommandRouter, callback_manager: CallbackManager):
        self.bot = bot
        self.command_router = command_router
        self.callback_manager = callback_manager

    # ── RENDERING ─────────────────────────────────────────

    async def send_message(self, chat_id: ChatId, output: CommandOutput) -> None:
        texts = output.messages or [output.text]
        try:
            markup = build_markup(output.keyboard)
        except CallbackCodecError as e:
            logger.error(f"Failed to build keyboard for chat {chat_id}: {e}")
            markup = None

        for text in texts:
            try:
                await self.bot.send_message(
                    chat_id=chat_id,
                    text=text,
                    parse_mode=_PARSE_MODES.get(output.format),
                    reply_markup=markup,
                )
            except TelegramError as e:
                logger.error(f"Failed to send formatted message to chat {chat_id}: {e}")
                try:
                    await self.bot.send_message(chat_id=chat_id, text=strip_formatting(text))
                except TelegramError as retry_error:
                    logger.error(f"Failed to send plain message to chat {chat_id}: {retry_error}")

    async def edit_message(self, chat_id: ChatId, message_id: ChatId, output: CommandOutput) -> None:
        if output.messages or (output.keyboard and not output.keyboard.inline):
            # Only a single message with an inline keyboard can be edited in place
            await self.send_message(chat_id, output)
            return

        try:
            markup = build_markup(output.keyboard)
            await self.bot.edit_message_text(
                text=output.text,
                chat_id=chat_id,
                message_id=int(message_id),
                parse_mode=_PARSE_MODES.get(output.format),
                reply_markup=markup,
            )
        except (TelegramError, CallbackCodecError) as e:
            logger.warning(f"Failed to edit message {message_id} in chat {chat_id}, sending instead: {e}")
            await self.send_message(chat_id, output)

    # ── DISPATCH ──────────────────────────────────────────

    async def handle_callback(
        self,
        raw_data: str,
        chat_id: ChatId,
        message_id: ChatId,
        user_id: ChatId,
        user_name: Optional[str] = None,
    ) -> None:
        try:
            data = callback_codec.deserialize(raw_data)
            command_input = CommandInput(
                user=UserIdentity(id=user_id, name=user_name),
                platform=PLATFORM,
                callback_data=data,
                message_id=message_id,
            )

            output = await self.callback_manager.handle_callback(data, command_input)
            if output is None:
                return

            if output.edit_message:
                await self.edit_message(chat_id, message_id, output)
            else:
                await self.send_message(chat_id, output)

        except Exception as e:
            logger.error(f"Error handling callback '{raw_data}' from user {user_id}: {e}", exc_info=True)
            await self.send_message(chat_id, CommandOutput(text=CALLBACK_ERROR_TEXT, format="HTML"))

    async def handle_message(self, message: Message) -> None:
        """Route a `/command args...` message and send the reply."""
        if not message.text or not is_command(message.text):
            return

        command, args = parse_command(message.text)
        if not command:
            return

        sender = message.from_user
        command_input = CommandInput(
            user=UserIdentity(id=sender.id, name=sender.first_name) if sender else None,
            args=tuple(args),
            platform=PLATFORM,
            raw=message.to_dict(),
            message_id=message.message_id,
        )
        logger.info(f"Received /{command} {args} from user {command_input.user_id}")

        output = await self.command_router.route_command(command, command_input)
        if output is None or not output.text:
            logger.warning(f"No output text for /{command} from user {command_input.user_id}, skipping.")
            return

        await self.send_message(message.chat_id, output)

    # ── APPLICATION ENTRY POINTS ──────────────────────────

    async def on_message(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        if update.message:
            await self.handle_message(update.message)

    async def on_callback_query(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        query = update.callback_query
        if query is None:
            return

        try:
            if query.data and query.message:
                logger.info(f"Received callback '{query.data}' from user {query.from_user.id}")
                await self.handle_callback(
                    query.data,
                    query.message.chat.id,
                    query.message.message_id,
                    query.from_user.id,
                    query.from_user.first_name,
                )
        finally:
            try:
                await query.answer()
            except TelegramError as e:
                logger.warning(f"Failed to answer callback query {query.id}: {e}")
