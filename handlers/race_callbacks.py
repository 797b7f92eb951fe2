"""
handlers/race_callbacks.py
--------------------------
Callback handlers for the race buttons: details, lists, filters,
range search, location, reminders and favorites.
"""

from config import RACE_LIST_LIMIT
from handlers.base_callback import BaseCallbackHandler
from models.callbacks import (
    RaceDetailsCallback,
    RaceFavoriteCallback,
    RaceLocationCallback,
    RaceReminderCallback,
    RaceUnfavoriteCallback,
    RacesFilterCallback,
    RacesListCallback,
    RacesListFavoriteCallback,
)
from models.command import Button, CommandInput, CommandOutput, Keyboard
from services.favorite_service import FavoriteError, FavoriteService
from services.race_service import RaceService
from utils.race_formatter import format_detailed_race_message

race_service = RaceService()
favorite_service = FavoriteService()

MAPS_URL = "https://maps.google.com"


def _filter_rows() -> list[list[Button]]:
    return [
        [
            Button("5km", RacesFilterCallback(5)),
            Button("10km", RacesFilterCallback(10)),
            Button("21km", RacesFilterCallback(21)),
        ],
        [
            Button("42km", RacesFilterCallback(42)),
            Button("📋 Todas", RacesListCallback()),
        ],
    ]


class RaceDetailsCallbackHandler(BaseCallbackHandler):
    callback_type = RaceDetailsCallback.type

    async def handle(self, command_input: CommandInput) -> CommandOutput:
        data = command_input.callback_data
        try:
            race = race_service.get_race_by_id(data.race_id)
        except Exception as e:
            self.log_error(e)
            return self.create_error_response("Erro ao buscar detalhes da corrida.")

        if race is None:
            return self.create_error_response("Corrida não encontrada.")

        return CommandOutput(
            text=format_detailed_race_message(race),
            format="HTML",
            edit_message=True,
            keyboard=Keyboard(buttons=[
                [Button("🔗 Se Inscrever", url=race.link)],
                [Button("📍 Ver Localização", RaceLocationCallback(data.race_id))],
                [Button("⏰ Lembrar-me", RaceReminderCallback(data.race_id, "set"))],
                [
                    Button("❤️ Favoritar", RaceFavoriteCallback(data.race_id)),
                    Button("💔 Desfavoritar", RaceUnfavoriteCallback(data.race_id)),
                ],
                [self.create_back_button(RacesListCallback())],
            ]),
        )


class RacesListCallbackHandler(BaseCallbackHandler):
    callback_type = RacesListCallback.type

    async def handle(self, command_input: CommandInput) -> CommandOutput:
        data = command_input.callback_data
        try:
            if data.distance:
                races = race_service.get_races_by_distances([data.distance])
            else:
                races = race_service.get_available_races()
        except Exception as e:
            self.log_error(e)
            return self.create_error_response("Erro ao buscar corridas.")

        if not races:
            return self.create_error_response("Nenhuma corrida disponível no momento!")

        return CommandOutput(
            text="🏃‍♂️ <strong>Corridas Disponíveis</strong>\n\nSelecione uma corrida para ver mais detalhes:",
            format="HTML",
            edit_message=True,
            keyboard=Keyboard(buttons=self.race_buttons(races, RACE_LIST_LIMIT) + _filter_rows()),
        )


class RacesFilterCallbackHandler(BaseCallbackHandler):
    callback_type = RacesFilterCallback.type

    async def handle(self, command_input: CommandInput) -> CommandOutput:
        distance = command_input.callback_data.distance
        try:
            races = race_service.get_races_by_distances([distance])
        except Exception as e:
            self.log_error(e)
            return self.create_error_response("Erro ao filtrar corridas.")

        if not races:
            return CommandOutput(
                text=f"❌ Nenhuma corrida encontrada para a distância: {distance}km",
                format="HTML",
                edit_message=True,
                keyboard=Keyboard(buttons=[[self.create_back_button(RacesListCallback())]]),
            )

        return CommandOutput(
            text=f"🏃‍♂️ <strong>Corridas de {distance}km</strong>\n\nEncontradas {len(races)} corrida(s):",
            format="HTML",
            edit_message=True,
            keyboard=Keyboard(buttons=self.race_buttons(races, RACE_LIST_LIMIT) + _filter_rows()),
        )


class RacesSearchCallbackHandler(BaseCallbackHandler):
    """Races with a distance inside [start, end]."""

    callback_type = "races_search"

    async def handle(self, command_input: CommandInput) -> CommandOutput:
        data = command_input.callback_data
        start, end = data.start_distance, data.end_distance
        try:
            races = race_service.get_races_by_range(start, end)
        except Exception as e:
            self.log_error(e)
            return self.create_error_response("Erro ao buscar corridas.")

        back_row = [self.create_back_button(RacesListCallback())]
        if not races:
            return CommandOutput(
                text=f"❌ Nenhuma corrida encontrada para a distância entre {start}km e {end}km.",
                format="HTML",
                edit_message=True,
                keyboard=Keyboard(buttons=[back_row]),
            )

        return CommandOutput(
            text=(
                "🏃‍♂️ <strong>Corridas Encontradas</strong>\n\n"
                f"Encontradas {len(races)} corrida(s) entre {start}km e {end}km:"
            ),
            format="HTML",
            edit_message=True,
            keyboard=Keyboard(buttons=self.race_buttons(races, RACE_LIST_LIMIT) + [back_row]),
        )


class RaceLocationCallbackHandler(BaseCallbackHandler):
    callback_type = RaceLocationCallback.type

    async def handle(self, command_input: CommandInput) -> CommandOutput:
        race_id = command_input.callback_data.race_id
        try:
            race = race_service.get_race_by_id(race_id)
        except Exception as e:
            self.log_error(e)
            return self.create_error_response("Erro ao buscar localização.")

        if race is None:
            return self.create_error_response("Corrida não encontrada.")

        return CommandOutput(
            text=(
                "📍 <strong>Localização da Corrida</strong>\n\n"
                f"🗺️ {race.location or 'Local a definir'}\n\n"
                "💡 Em breve você poderá ver mapas e rotas!"
            ),
            format="HTML",
            edit_message=True,
            keyboard=Keyboard(buttons=[
                [Button("🗺️ Abrir no Maps", url=MAPS_URL)],
                [self.create_back_button(RaceDetailsCallback(race_id))],
            ]),
        )


class RaceReminderCallbackHandler(BaseCallbackHandler):
    callback_type = RaceReminderCallback.type

    async def handle(self, command_input: CommandInput) -> CommandOutput:
        data = command_input.callback_data
        if data.action == "set":
            text = (
                "✅ <strong>Lembrete configurado</strong>\n\n"
                "Você receberá uma notificação sobre esta corrida quando estiver próxima!"
            )
        else:
            text = (
                "❌ <strong>Lembrete cancelado</strong>\n\n"
                "O lembrete para esta corrida foi cancelado."
            )

        return CommandOutput(
            text=text,
            format="HTML",
            edit_message=True,
            keyboard=Keyboard(buttons=[[
                self.create_back_button(RaceDetailsCallback(data.race_id)),
                Button("🏃‍♂️ Ver Outras Corridas", RacesListCallback()),
            ]]),
        )


class RaceFavoriteCallbackHandler(BaseCallbackHandler):
    callback_type = RaceFavoriteCallback.type

    async def handle(self, command_input: CommandInput) -> CommandOutput:
        telegram_id = command_input.user_id
        if not telegram_id:
            return self.create_error_response("ID do usuário não encontrado.")

        try:
            favorite_service.add_favorite(telegram_id, command_input.callback_data.race_id)
        except FavoriteError as e:
            return self.create_error_response(str(e))
        except Exception as e:
            self.log_error(e)
            return self.create_error_response("Erro ao favoritar corrida.")

        return CommandOutput(
            text=(
                "✅ <b>Corrida favoritada com sucesso!</b>\n\n"
                "🌟 Agora você pode visualizar suas corridas favoritas usando o comando /favoritos"
            ),
            format="HTML",
            keyboard=Keyboard(buttons=[[Button("⭐ Ver Favoritos", RacesListFavoriteCallback())]]),
        )


class RaceUnfavoriteCallbackHandler(BaseCallbackHandler):
    callback_type = RaceUnfavoriteCallback.type

    async def handle(self, command_input: CommandInput) -> CommandOutput:
        telegram_id = command_input.user_id
        if not telegram_id:
            return self.create_error_response("ID do usuário não encontrado.")

        try:
            favorite_service.remove_favorite(telegram_id, command_input.callback_data.race_id)
        except FavoriteError as e:
            return self.create_error_response(str(e))
        except Exception as e:
            self.log_error(e)
            return self.create_error_response("Erro ao remover corrida dos favoritos.")

        return CommandOutput(
            text=(
                "✅ <b>Corrida removida dos favoritos!</b>\n\n"
                "🌟 Use o comando /favoritos para ver suas corridas favoritas atualizadas."
            ),
            format="HTML",
            keyboard=Keyboard(buttons=[[Button("⭐ Ver Favoritos", RacesListFavoriteCallback())]]),
        )


class RacesListFavoriteCallbackHandler(BaseCallbackHandler):
    callback_type = RacesListFavoriteCallback.type

    async def handle(self, command_input: CommandInput) -> CommandOutput:
        telegram_id = command_input.user_id
        if not telegram_id:
            return self.create_error_response("ID do usuário não encontrado.")

        try:
            races = favorite_service.get_favorite_races(telegram_id)
        except Exception as e:
            self.log_error(e)
            return self.create_error_response("Erro ao buscar corridas favoritas.")

        all_races_row = [Button("🏃‍♂️ Ver Todas as Corridas", RacesListCallback())]
        if not races:
            return CommandOutput(
                text=(
                    "📝 <b>Suas Corridas Favoritas</b>\n\n"
                    "❌ Você ainda não tem corridas favoritas!\n\n"
                    "💡 Para favoritar uma corrida, use o comando /corridas e clique no botão ❤️ de uma corrida."
                ),
                format="HTML",
                edit_message=True,
                keyboard=Keyboard(buttons=[all_races_row]),
            )

        return CommandOutput(
            text=(
                f"⭐ <strong>Suas Corridas Favoritas</strong> ({len(races)})\n\n"
                "Selecione uma corrida para ver mais detalhes:"
            ),
            format="HTML",
            edit_message=True,
            keyboard=Keyboard(buttons=self.race_buttons(races, RACE_LIST_LIMIT) + [all_races_row]),
        )


def get_handlers() -> list[BaseCallbackHandler]:
    """Callback handlers of the `races` module, in dispatch order."""
    return [
        RaceDetailsCallbackHandler(),
        RacesListCallbackHandler(),
        RacesFilterCallbackHandler(),
        RacesSearchCallbackHandler(),
        RaceLocationCallbackHandler(),
        RaceReminderCallbackHandler(),
        RaceFavoriteCallbackHandler(),
        RaceUnfavoriteCallbackHandler(),
        RacesListFavoriteCallbackHandler(),
    ]
