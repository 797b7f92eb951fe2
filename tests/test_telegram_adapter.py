"""
🧪 test_telegram_adapter.py - unit tests for TelegramPlatformAdapter

Checks:
- keyboard conversion (inline payloads, URLs, reply keyboards)
- plain-text retry when a formatted send fails
- edit falls back to send
- callback dispatch: edit vs send, None result, decode errors
- the callback query is always answered
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from telegram import InlineKeyboardMarkup, ReplyKeyboardMarkup
from telegram.constants import ParseMode
from telegram.error import BadRequest

from adapters.telegram_adapter import CALLBACK_ERROR_TEXT, TelegramPlatformAdapter, build_markup
from models.callbacks import RaceDetailsCallback, RacesSearchCallback
from models.command import Button, CommandOutput, Keyboard


@pytest.fixture
def bot():
    return AsyncMock()


@pytest.fixture
def router():
    mock = MagicMock()
    mock.route_command = AsyncMock(return_value=CommandOutput(text="<b>ok</b>", format="HTML"))
    return mock


@pytest.fixture
def manager():
    mock = MagicMock()
    mock.handle_callback = AsyncMock()
    return mock


@pytest.fixture
def adapter(bot, router, manager):
    return TelegramPlatformAdapter(bot, router, manager)


def _message(text, user_id=42):
    msg = MagicMock()
    msg.text = text
    msg.chat_id = 100
    msg.message_id = 7
    msg.from_user.id = user_id
    msg.from_user.first_name = "Ana"
    msg.to_dict.return_value = {"message_id": 7, "chat": {"id": 100}}
    return msg


def test_build_inline_markup():
    markup = build_markup(Keyboard(buttons=[
        [Button("Detalhes", RaceDetailsCallback("123"))],
        [Button("Site", url="https://example.com"), Button("Busca", RacesSearchCallback(21, 42))],
    ]))

    assert isinstance(markup, InlineKeyboardMarkup)
    rows = markup.inline_keyboard
    assert rows[0][0].callback_data == "rd:123"
    assert rows[1][0].url == "https://example.com"
    assert rows[1][0].callback_data is None
    assert rows[1][1].callback_data == "rs:21:42"


def test_build_reply_markup():
    markup = build_markup(Keyboard(buttons=[[Button("Sim"), Button("Não")]], inline=False))

    assert isinstance(markup, ReplyKeyboardMarkup)
    assert [b.text for b in markup.keyboard[0]] == ["Sim", "Não"]
    assert markup.resize_keyboard is True
    assert markup.one_time_keyboard is True


def test_build_markup_none():
    assert build_markup(None) is None


@pytest.mark.asyncio
async def test_send_message_uses_parse_mode(adapter, bot):
    await adapter.send_message(100, CommandOutput(text="<b>oi</b>", format="HTML"))

    bot.send_message.assert_awaited_once()
    kwargs = bot.send_message.await_args.kwargs
    assert kwargs["chat_id"] == 100
    assert kwargs["text"] == "<b>oi</b>"
    assert kwargs["parse_mode"] == ParseMode.HTML


@pytest.mark.asyncio
async def test_send_message_sends_each_message(adapter, bot):
    await adapter.send_message(100, CommandOutput(text="all", messages=["one", "two"], format="HTML"))

    sent = [c.kwargs["text"] for c in bot.send_message.await_args_list]
    assert sent == ["one", "two"]


@pytest.mark.asyncio
async def test_send_message_falls_back_to_plain_text(adapter, bot):
    bot.send_message.side_effect = [BadRequest("can't parse entities"), None]

    await adapter.send_message(100, CommandOutput(text="<b>Olá</b> &amp; tchau", format="HTML"))

    assert bot.send_message.await_count == 2
    retry = bot.send_message.await_args_list[1].kwargs
    assert retry == {"chat_id": 100, "text": "Olá & tchau"}


@pytest.mark.asyncio
async def test_failed_plain_retry_keeps_sending_remaining_messages(adapter, bot):
    bot.send_message.side_effect = [
        BadRequest("can't parse entities"),
        BadRequest("message is too long"),
        None,
    ]

    await adapter.send_message(100, CommandOutput(text="all", messages=["<b>one</b>", "two"], format="HTML"))

    sent = [c.kwargs["text"] for c in bot.send_message.await_args_list]
    assert sent == ["<b>one</b>", "one", "two"]


@pytest.mark.asyncio
async def test_edit_message(adapter, bot):
    output = CommandOutput(
        text="detalhes",
        format="HTML",
        keyboard=Keyboard(buttons=[[Button("Voltar", RaceDetailsCallback("1"))]]),
        edit_message=True,
    )

    await adapter.edit_message(100, "7", output)

    kwargs = bot.edit_message_text.await_args.kwargs
    assert kwargs["message_id"] == 7
    assert isinstance(kwargs["reply_markup"], InlineKeyboardMarkup)
    bot.send_message.assert_not_awaited()


@pytest.mark.asyncio
async def test_edit_message_falls_back_to_send(adapter, bot):
    bot.edit_message_text.side_effect = BadRequest("message can't be edited")

    await adapter.edit_message(100, 7, CommandOutput(text="novo", format="HTML"))

    bot.send_message.assert_awaited_once()
    assert bot.send_message.await_args.kwargs["text"] == "novo"


@pytest.mark.asyncio
async def test_handle_callback_edits_when_requested(adapter, bot, manager):
    manager.handle_callback.return_value = CommandOutput(text="x", format="HTML", edit_message=True)

    await adapter.handle_callback("rd:123", 100, 7, 42)

    data, command_input = manager.handle_callback.await_args.args
    assert data == RaceDetailsCallback("123")
    assert command_input.callback_data == data
    assert command_input.user_id == "42"
    assert command_input.message_id == 7
    bot.edit_message_text.assert_awaited_once()
    bot.send_message.assert_not_awaited()


@pytest.mark.asyncio
async def test_handle_callback_sends_when_not_editing(adapter, bot, manager):
    manager.handle_callback.return_value = CommandOutput(text="x", format="HTML")

    await adapter.handle_callback("rd:123", 100, 7, 42)

    bot.send_message.assert_awaited_once()
    bot.edit_message_text.assert_not_awaited()


@pytest.mark.asyncio
async def test_handle_callback_none_does_nothing(adapter, bot, manager):
    manager.handle_callback.return_value = None

    await adapter.handle_callback("rd:123", 100, 7, 42)

    bot.send_message.assert_not_awaited()
    bot.edit_message_text.assert_not_awaited()


@pytest.mark.asyncio
async def test_handle_callback_unknown_prefix_sends_error(adapter, bot, manager):
    await adapter.handle_callback("zz:1", 100, 7, 42)

    manager.handle_callback.assert_not_awaited()
    assert bot.send_message.await_args.kwargs["text"] == CALLBACK_ERROR_TEXT


@pytest.mark.asyncio
async def test_handle_message_routes_command(adapter, bot, router):
    await adapter.handle_message(_message("/Corridas 5km,10km"))

    command, command_input = router.route_command.await_args.args
    assert command == "corridas"
    assert command_input.args == ("5km,10km",)
    assert command_input.platform == "telegram"
    assert command_input.raw == {"message_id": 7, "chat": {"id": 100}}
    assert command_input.user.name == "Ana"
    assert bot.send_message.await_args.kwargs["chat_id"] == 100


@pytest.mark.asyncio
async def test_handle_message_ignores_plain_text(adapter, router):
    await adapter.handle_message(_message("olá"))
    router.route_command.assert_not_awaited()


@pytest.mark.asyncio
async def test_handle_message_skips_empty_output(adapter, bot, router):
    router.route_command.return_value = CommandOutput(text="")

    await adapter.handle_message(_message("/start"))

    bot.send_message.assert_not_awaited()


@pytest.mark.asyncio
async def test_callback_query_is_always_answered(adapter, manager):
    manager.handle_callback.side_effect = RuntimeError("boom")
    update = MagicMock()
    update.callback_query.data = "rd:1"
    update.callback_query.message.chat.id = 100
    update.callback_query.message.message_id = 7
    update.callback_query.from_user.id = 42
    update.callback_query.answer = AsyncMock()

    await adapter.on_callback_query(update, MagicMock())

    update.callback_query.answer.assert_awaited_once_with()
