"""
🧪 test_security.py - allow-list and rate-limit decorators
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from security import rate_limiter
from security.auth import UNAUTHORIZED_TEXT, authorized_only
from security.rate_limiter import RATE_LIMITED_TEXT, rate_limited


def _message_update(user_id=42):
    update = MagicMock()
    update.effective_user.id = user_id
    update.callback_query = None
    update.effective_message.reply_text = AsyncMock()
    return update


@pytest.fixture(autouse=True)
def _reset_rate_limiter():
    rate_limiter.reset()
    yield
    rate_limiter.reset()


@pytest.mark.asyncio
async def test_everyone_allowed_without_whitelist():
    handler = AsyncMock()
    with patch("security.auth.ALLOWED_USER_IDS", []):
        await authorized_only(handler)(_message_update(), MagicMock())
    handler.assert_awaited_once()


@pytest.mark.asyncio
async def test_unknown_user_is_rejected():
    handler = AsyncMock()
    update = _message_update(user_id=7)
    with patch("security.auth.ALLOWED_USER_IDS", [42]):
        await authorized_only(handler)(update, MagicMock())

    handler.assert_not_awaited()
    update.effective_message.reply_text.assert_awaited_once_with(UNAUTHORIZED_TEXT)


@pytest.mark.asyncio
async def test_rejected_callback_gets_alert():
    update = MagicMock()
    update.effective_user.id = 7
    update.callback_query.answer = AsyncMock()
    with patch("security.auth.ALLOWED_USER_IDS", [42]):
        await authorized_only(AsyncMock())(update, MagicMock())

    update.callback_query.answer.assert_awaited_once_with(UNAUTHORIZED_TEXT, show_alert=True)


@pytest.mark.asyncio
async def test_rate_limit_blocks_after_allowance():
    handler = AsyncMock()
    wrapped = rate_limited(handler)
    update = _message_update()
    with patch.object(rate_limiter, "RATE_LIMIT_MESSAGES", 2):
        for _ in range(3):
            await wrapped(update, MagicMock())

    assert handler.await_count == 2
    update.effective_message.reply_text.assert_awaited_once_with(RATE_LIMITED_TEXT)


@pytest.mark.asyncio
async def test_rate_limit_is_per_user():
    handler = AsyncMock()
    wrapped = rate_limited(handler)
    with patch.object(rate_limiter, "RATE_LIMIT_MESSAGES", 1):
        await wrapped(_message_update(1), MagicMock())
        await wrapped(_message_update(2), MagicMock())

    assert handler.await_count == 2
