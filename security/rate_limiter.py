"""
security/rate_limiter.py
------------------------
Per-user sliding-window rate limit for inbound updates.
Messages and button presses share the same allowance.
"""

import time
from collections import defaultdict
from functools import wraps
from typing import Callable

from telegram import Update
from telegram.ext import ContextTypes

from config import RATE_LIMIT_MESSAGES, RATE_LIMIT_WINDOW_SECONDS
from security.auth import reject
from utils.logger import get_logger

logger = get_logger(__name__)

RATE_LIMITED_TEXT = "⚠️ Você está enviando muitas mensagens. Aguarde um pouco e tente novamente."

# {user_id: [timestamp1, timestamp2, ...]}
_user_timestamps: dict[int, list[float]] = defaultdict(list)


def _cleanup(user_id: int, now: float) -> None:
    cutoff = now - RATE_LIMIT_WINDOW_SECONDS
    _user_timestamps[user_id] = [t for t in _user_timestamps[user_id] if t > cutoff]


def is_rate_limited(user_id: int) -> bool:
    """Record one update for `user_id`; True if it exceeds the window allowance."""
    now = time.time()
    _cleanup(user_id, now)
    if len(_user_timestamps[user_id]) >= RATE_LIMIT_MESSAGES:
        return True
    _user_timestamps[user_id].append(now)
    return False


def reset() -> None:
    _user_timestamps.clear()


def rate_limited(func: Callable):
    """
    Enforce RATE_LIMIT_MESSAGES updates per RATE_LIMIT_WINDOW_SECONDS per user.
    Over-limit updates get a warning and never reach the handler.
    """
    @wraps(func)
    async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE, *args, **kwargs):
        user = update.effective_user
        if not user:
            return

        if is_rate_limited(user.id):
            logger.warning(f"⚠️ Rate limit hit for user {user.id}")
            await reject(update, RATE_LIMITED_TEXT)
            return

        return await func(update, context, *args, **kwargs)

    return wrapper
