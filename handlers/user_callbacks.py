"""
handlers/user_callbacks.py
--------------------------
Callback handler for the /config buttons.
"""

from handlers.base_callback import BaseCallbackHandler
from models.callbacks import UserConfigCallback
from models.command import Button, CommandInput, CommandOutput, Keyboard
from services.user_service import UserNotFoundError, UserService

user_service = UserService()

DISTANCE_CHOICES = [[5, 10], [21, 42]]


class UserConfigCallbackHandler(BaseCallbackHandler):
    """Applies one preference change per button press."""

    callback_type = UserConfigCallback.type

    async def handle(self, command_input: CommandInput) -> CommandOutput:
        data = command_input.callback_data
        telegram_id = command_input.user_id
        try:
            if data.action == "distances":
                return self._distances(telegram_id, data.value)
            if data.action == "notifications":
                return self._notifications(telegram_id, data.value)
            if data.action == "reminder":
                return self._reminder(telegram_id, data.value)
            return self.create_error_response("Ação de configuração não reconhecida.")
        except UserNotFoundError:
            return self.create_error_response("Usuário não encontrado. Use /start para se cadastrar.")
        except Exception as e:
            self.log_error(e)
            return self.create_error_response("Erro ao processar configuração.")

    def _distances(self, telegram_id: str, value) -> CommandOutput:
        if not value:
            return CommandOutput(
                text=(
                    "📏 <b>Configurar Distâncias Favoritas</b>\n\n"
                    "Escolha suas distâncias preferidas para receber recomendações personalizadas:"
                ),
                format="HTML",
                edit_message=True,
                keyboard=Keyboard(buttons=[
                    [Button(f"{km}km", UserConfigCallback("distances", str(km))) for km in row]
                    for row in DISTANCE_CHOICES
                ]),
            )

        try:
            distance = int(value)
        except ValueError:
            return self.create_error_response("Distância inválida.")

        prefs = user_service.get_user_preferences(telegram_id)
        current = list(prefs.preferred_distances) if prefs else []
        if distance not in current:
            current.append(distance)
        user_service.update_user_preferences(telegram_id, preferred_distances=sorted(current))
        return self.create_success_response(f"Distância {distance}km adicionada às suas preferências!")

    def _notifications(self, telegram_id: str, value) -> CommandOutput:
        enabled = value == "on"
        user_service.update_user_preferences(telegram_id, notifications_enabled=enabled)
        return self.create_success_response(
            f"Notificações {'ativadas' if enabled else 'desativadas'} com sucesso!"
        )

    def _reminder(self, telegram_id: str, value) -> CommandOutput:
        try:
            days = int(value or "")
        except ValueError:
            return self.create_error_response("Número de dias inválido para lembretes.")

        user_service.update_user_preferences(telegram_id, reminder_days=days)
        return self.create_success_response(f"Lembretes configurados para {days} dia(s) de antecedência!")


def get_handlers() -> list[BaseCallbackHandler]:
    return [UserConfigCallbackHandler()]
