"""
security/auth.py
----------------
Allow-list guard for inbound Telegram updates (messages and button presses).
"""

from functools import wraps
from typing import Callable

from telegram import Update
from telegram.ext import ContextTypes

from config import ALLOWED_USER_IDS
from utils.logger import get_logger

logger = get_logger(__name__)

UNAUTHORIZED_TEXT = "⛔ Desculpe, este bot é privado e não está disponível para uso público."


def is_allowed(user_id: int) -> bool:
    """An empty ALLOWED_USER_IDS opens the bot to everyone (dev mode)."""
    return not ALLOWED_USER_IDS or user_id in ALLOWED_USER_IDS


async def reject(update: Update, text: str) -> None:
    """Tell the sender why the update was dropped."""
    if update.callback_query:
        await update.callback_query.answer(text, show_alert=True)
    elif update.effective_message:
        await update.effective_message.reply_text(text)


def authorized_only(func: Callable):
    """
    Wrap an update callback so only allow-listed users reach it.

    Usage:
        app.add_handler(CallbackQueryHandler(authorized_only(adapter.on_callback_query)))

    Updates without a sender are dropped silently; refused users get
    UNAUTHORIZED_TEXT and a warning is logged.
    """
    @wraps(func)
    async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE, *args, **kwargs):
        user = update.effective_user
        if user is None:
            return None

        if is_allowed(user.id):
            return await func(update, context, *args, **kwargs)

        logger.warning(f"🚫 Blocked user {user.id} (@{user.username}, {user.first_name})")
        await reject(update, UNAUTHORIZED_TEXT)
        return None

    return wrapper
