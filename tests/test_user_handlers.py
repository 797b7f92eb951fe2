"""
🧪 test_user_handlers.py - /start, /ajuda, /config and the config buttons
"""

import pytest
from unittest.mock import patch

from handlers import user_callbacks, user_handler
from models.callbacks import UserConfigCallback
from models.command import CommandInput
from models.user import UserPreferences
from services.user_service import UserNotFoundError


@pytest.mark.asyncio
async def test_start_registers_and_welcomes(command_input):
    with patch.object(user_handler, "user_service") as service:
        output = await user_handler.start_command(command_input())

    service.register_user.assert_called_once_with("42", "Ana")
    assert "Bem-vindo ao DashBot, Ana!" in output.text
    assert output.format == "HTML"


@pytest.mark.asyncio
async def test_start_still_welcomes_when_registration_fails(command_input):
    with patch.object(user_handler, "user_service") as service:
        service.register_user.side_effect = RuntimeError("db down")
        output = await user_handler.start_command(command_input())

    assert "Bem-vindo ao DashBot, Ana!" in output.text


@pytest.mark.asyncio
async def test_start_without_user_uses_default_name():
    with patch.object(user_handler, "user_service") as service:
        output = await user_handler.start_command(CommandInput())

    service.register_user.assert_not_called()
    assert "Bem-vindo ao DashBot, Corredor!" in output.text


@pytest.mark.asyncio
async def test_help(command_input):
    output = await user_handler.help_command(command_input())
    assert output.text == user_handler.HELP_TEXT


@pytest.mark.asyncio
async def test_config_without_args_lists_options(command_input):
    output = await user_handler.config_command(command_input())

    assert output.text == user_handler.CONFIG_TEXT
    assert output.keyboard.buttons[0][0].callback_data == UserConfigCallback("distances")


@pytest.mark.asyncio
async def test_config_distances(command_input):
    with patch.object(user_handler, "user_service") as service:
        output = await user_handler.config_command(command_input("distancias", "5,10km,21"))

    service.update_user_preferences.assert_called_once_with("42", preferred_distances=[5, 10, 21])
    assert "5, 10, 21km" in output.text


@pytest.mark.asyncio
async def test_config_notifications_off(command_input):
    with patch.object(user_handler, "user_service") as service:
        output = await user_handler.config_command(command_input("notificacoes", "off"))

    service.update_user_preferences.assert_called_once_with("42", notifications_enabled=False)
    assert "desativadas" in output.text


@pytest.mark.asyncio
async def test_config_reminder_invalid(command_input):
    with patch.object(user_handler, "user_service") as service:
        output = await user_handler.config_command(command_input("lembrete", "amanhã"))

    service.update_user_preferences.assert_not_called()
    assert output.text == "❌ Número de dias inválido. Use: /config lembrete 3"


@pytest.mark.asyncio
async def test_config_reminder(command_input):
    with patch.object(user_handler, "user_service") as service:
        output = await user_handler.config_command(command_input("LEMBRETE", "5"))

    service.update_user_preferences.assert_called_once_with("42", reminder_days=5)
    assert "5 dia(s)" in output.text


@pytest.mark.asyncio
async def test_config_unknown_setting(command_input):
    output = await user_handler.config_command(command_input("tema", "escuro"))
    assert output.text.startswith("❌ Configuração não reconhecida")


@pytest.mark.asyncio
async def test_config_unregistered_user(command_input):
    with patch.object(user_handler, "user_service") as service:
        service.update_user_preferences.side_effect = UserNotFoundError("42")
        output = await user_handler.config_command(command_input("lembrete", "3"))

    assert output.text == user_handler.NOT_REGISTERED_TEXT


# ── CALLBACKS ─────────────────────────────────────────────

@pytest.mark.asyncio
async def test_config_callback_distance_menu(command_input):
    handler = user_callbacks.UserConfigCallbackHandler()
    output = await handler.handle(command_input(callback_data=UserConfigCallback("distances")))

    values = [b.callback_data.value for row in output.keyboard.buttons for b in row]
    assert values == ["5", "10", "21", "42"]
    assert output.edit_message is True


@pytest.mark.asyncio
async def test_config_callback_adds_distance(command_input):
    handler = user_callbacks.UserConfigCallbackHandler()
    with patch.object(user_callbacks, "user_service") as service:
        service.get_user_preferences.return_value = UserPreferences(user_id=1, preferred_distances=[21, 5])
        output = await handler.handle(command_input(callback_data=UserConfigCallback("distances", "10")))

    service.update_user_preferences.assert_called_once_with("42", preferred_distances=[5, 10, 21])
    assert output.text == "✅ Distância 10km adicionada às suas preferências!"


@pytest.mark.asyncio
async def test_config_callback_notifications(command_input):
    handler = user_callbacks.UserConfigCallbackHandler()
    with patch.object(user_callbacks, "user_service") as service:
        output = await handler.handle(command_input(callback_data=UserConfigCallback("notifications", "on")))

    service.update_user_preferences.assert_called_once_with("42", notifications_enabled=True)
    assert output.text == "✅ Notificações ativadas com sucesso!"


@pytest.mark.asyncio
async def test_config_callback_reminder_invalid(command_input):
    handler = user_callbacks.UserConfigCallbackHandler()
    output = await handler.handle(command_input(callback_data=UserConfigCallback("reminder")))

    assert output.text == "❌ Número de dias inválido para lembretes."


@pytest.mark.asyncio
async def test_config_callback_unregistered_user(command_input):
    handler = user_callbacks.UserConfigCallbackHandler()
    with patch.object(user_callbacks, "user_service") as service:
        service.update_user_preferences.side_effect = UserNotFoundError("42")
        output = await handler.handle(command_input(callback_data=UserConfigCallback("reminder", "3")))

    assert output.text.startswith("❌ Usuário não encontrado")
