"""
🧪 test_command_router.py - unit tests for CommandRouter

Checks:
- unknown commands resolve to the fixed "not recognized" output
- the corridas_<distances> family goes to the distance handler
- interception hooks run around handlers and never break dispatch
- handler exceptions become a fixed internal-error output
- lazy registry initialisation happens once
"""

import asyncio
import logging

import pytest
from unittest.mock import AsyncMock, MagicMock

from dispatch.command_registry import CommandRegistry
from dispatch.command_router import (
    INTERNAL_ERROR_TEXT,
    NOT_RECOGNIZED_TEXT,
    CommandRouter,
    match_distance_command,
    parse_distances,
)
from models.command import CommandOutput


def _router(commands=None, distance_handler=None, interceptor=None):
    registry = CommandRegistry({"test": lambda: dict(commands or {})})
    return CommandRouter(
        registry,
        distance_handler or AsyncMock(return_value=CommandOutput(text="by distance")),
        interceptor=interceptor,
    )


def test_parse_distances():
    assert parse_distances("5km,10km") == [5, 10]
    assert parse_distances("21, 42km") == [21, 42]
    assert parse_distances("abc,10") == [10]
    assert parse_distances("abc") == []


def test_match_distance_command():
    assert match_distance_command("corridas_5km,10km") == [5, 10]
    assert match_distance_command("corridas_abc") == []
    assert match_distance_command("corridas") == []
    assert match_distance_command("xcorridas_5") == []


@pytest.mark.asyncio
async def test_unknown_command_is_not_recognized(command_input, caplog):
    router = _router()

    with caplog.at_level(logging.WARNING):
        output = await router.route_command("nonexistent", command_input())

    assert output.text == NOT_RECOGNIZED_TEXT
    assert output.format == "HTML"
    assert "Command not found: /nonexistent" in caplog.text


@pytest.mark.asyncio
async def test_registered_command_runs(command_input):
    handler = AsyncMock(return_value=CommandOutput(text="hi", format="HTML"))
    router = _router({"start": handler})
    cmd = command_input()

    output = await router.route_command("start", cmd)

    assert output.text == "hi"
    handler.assert_awaited_once_with(cmd)


@pytest.mark.asyncio
async def test_distance_command_uses_distance_handler(command_input):
    distance_handler = AsyncMock(return_value=CommandOutput(text="by distance"))
    static = AsyncMock()
    router = _router({"corridas_5km,10km": static}, distance_handler=distance_handler)
    cmd = command_input()

    output = await router.route_command("corridas_5km,10km", cmd)

    assert output.text == "by distance"
    distance_handler.assert_awaited_once_with(cmd, [5, 10])
    static.assert_not_awaited()


@pytest.mark.asyncio
async def test_distance_command_without_numbers_falls_through(command_input):
    distance_handler = AsyncMock()
    static = AsyncMock(return_value=CommandOutput(text="static"))
    router = _router({"corridas_abc": static}, distance_handler=distance_handler)

    output = await router.route_command("corridas_abc", command_input())

    assert output.text == "static"
    distance_handler.assert_not_awaited()


@pytest.mark.asyncio
async def test_unmatched_distance_command_is_not_recognized(command_input):
    output = await _router().route_command("corridas_abc", command_input())
    assert output.text == NOT_RECOGNIZED_TEXT


@pytest.mark.asyncio
async def test_handler_exception_becomes_internal_error(command_input):
    router = _router({"boom": AsyncMock(side_effect=RuntimeError("db down"))})

    output = await router.route_command("boom", command_input())

    assert output.text == INTERNAL_ERROR_TEXT
    assert output.format == "HTML"


@pytest.mark.asyncio
async def test_interceptor_hooks_wrap_handler(command_input):
    interceptor = MagicMock()
    interceptor.intercept_incoming_message = AsyncMock()
    interceptor.intercept_outgoing_message = AsyncMock()
    result = CommandOutput(text="hi")
    router = _router({"start": AsyncMock(return_value=result)}, interceptor=interceptor)
    cmd = command_input()

    await router.route_command("start", cmd)

    interceptor.intercept_incoming_message.assert_awaited_once_with(cmd)
    interceptor.intercept_outgoing_message.assert_awaited_once_with(cmd, result)


@pytest.mark.asyncio
async def test_outgoing_hook_skipped_for_unknown_command(command_input):
    interceptor = MagicMock()
    interceptor.intercept_incoming_message = AsyncMock()
    interceptor.intercept_outgoing_message = AsyncMock()
    router = _router(interceptor=interceptor)

    await router.route_command("nonexistent", command_input())

    interceptor.intercept_incoming_message.assert_awaited_once()
    interceptor.intercept_outgoing_message.assert_not_awaited()


@pytest.mark.asyncio
async def test_interceptor_failures_do_not_block_dispatch(command_input):
    interceptor = MagicMock()
    interceptor.intercept_incoming_message = AsyncMock(side_effect=RuntimeError("db down"))
    interceptor.intercept_outgoing_message = AsyncMock(side_effect=RuntimeError("db down"))
    router = _router({"start": AsyncMock(return_value=CommandOutput(text="hi"))}, interceptor=interceptor)

    output = await router.route_command("start", command_input())

    assert output.text == "hi"


@pytest.mark.asyncio
async def test_concurrent_first_use_initialises_once(command_input):
    registry = MagicMock(spec=CommandRegistry)
    registry.get_handler.return_value = AsyncMock(return_value=CommandOutput(text="ok"))
    router = CommandRouter(registry, AsyncMock())

    await asyncio.gather(*(router.route_command("start", command_input()) for _ in range(5)))

    registry.auto_register_commands.assert_called_once_with()


@pytest.mark.asyncio
async def test_get_available_commands_sorted():
    router = _router({"start": AsyncMock(), "ajuda": AsyncMock(), "corridas": AsyncMock()})
    assert await router.get_available_commands() == ["ajuda", "corridas", "start"]
