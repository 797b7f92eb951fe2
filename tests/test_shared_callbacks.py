"""
🧪 test_shared_callbacks.py - navigation and pagination buttons
"""

from datetime import date

import pytest
from unittest.mock import patch

from handlers import shared_callbacks
from models.callbacks import NavigationCallback, PaginationCallback, RaceDetailsCallback
from models.race import Race


def _races(n):
    return [
        Race(id=str(i), title=f"Corrida {i}", organization="Org", date=date(2030, 1, 1), distances=["5km"])
        for i in range(1, n + 1)
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("action, expected", [
    ("back", "⬅️ Voltando para: races"),
    ("next", "➡️ Navegando para: races"),
    ("close", "❌ <i>Navegação encerrada</i>"),
])
async def test_navigation(command_input, action, expected):
    handler = shared_callbacks.NavigationCallbackHandler()
    output = await handler.handle(command_input(callback_data=NavigationCallback(action, "races")))

    assert output.text == expected
    assert output.edit_message is True


def test_target_page_clamps():
    target = shared_callbacks.PaginationCallbackHandler.target_page
    assert target("next", 1, 3) == 2
    assert target("prev", 1, 3) == 1
    assert target("next", 3, 3) == 3
    assert target("goto", 99, 3) == 3


@pytest.mark.asyncio
async def test_pagination_second_page(command_input):
    handler = shared_callbacks.PaginationCallbackHandler()
    with patch.object(shared_callbacks, "race_service") as service, \
            patch.object(shared_callbacks, "RACE_PAGE_SIZE", 5):
        service.get_available_races.return_value = _races(12)
        output = await handler.handle(command_input(callback_data=PaginationCallback("next", 1, "races")))

    rows = output.keyboard.buttons
    assert "Página 2 de 3" in output.text
    assert [r[0].callback_data for r in rows[:5]] == [RaceDetailsCallback(str(i)) for i in range(6, 11)]
    assert [b.callback_data for b in rows[5]] == [
        PaginationCallback("prev", 2, "races"),
        PaginationCallback("next", 2, "races"),
    ]


@pytest.mark.asyncio
async def test_pagination_unknown_target(command_input):
    handler = shared_callbacks.PaginationCallbackHandler()
    output = await handler.handle(command_input(callback_data=PaginationCallback("goto", 1, "users")))

    assert output.text == "❌ Lista não encontrada."
