"""
handlers/race_handler.py
------------------------
Race commands: /corridas, /proxima_corrida, /buscar_corridas, /favoritos,
plus the `corridas_<distances>` filter the router calls directly.
Delegates all lookups to RaceService and FavoriteService.
"""

from config import RACE_LIST_LIMIT, RACE_PAGE_SIZE
from dispatch.command_router import parse_distances
from models.callbacks import (
    PaginationCallback,
    RacesFilterCallback,
    RacesListCallback,
    RacesSearchCallback,
)
from models.command import Button, CommandInput, CommandOutput, Keyboard
from services.favorite_service import FavoriteService
from services.race_service import RaceService
from handlers.base_callback import BaseCallbackHandler
from utils.logger import get_logger
from utils.race_formatter import format_race_message, format_race_messages

logger = get_logger(__name__)
race_service = RaceService()
favorite_service = FavoriteService()

NO_RACES_TEXT = "❌ Nenhuma corrida disponível no momento!"
RACE_SEPARATOR = "\n\n───────────────────\n\n"

NO_FAVORITES_TEXT = (
    "📝 <b>Suas Corridas Favoritas</b>\n\n"
    "❌ Você ainda não tem corridas favoritas!\n\n"
    "💡 Para favoritar uma corrida, use o comando /corridas e clique no botão ❤️ de uma corrida."
)


def _distance_filter_rows() -> list[list[Button]]:
    return [
        [
            Button("5km a 8km", RacesFilterCallback(5)),
            Button("10km a 20km", RacesFilterCallback(10)),
            Button("21km", RacesFilterCallback(21)),
            Button("42km", RacesFilterCallback(42)),
        ],
        [Button("📋 Ver Todas", RacesListCallback())],
    ]


def first_unlisted_page() -> int:
    """Page of the paginated race list that holds the first race /corridas leaves out."""
    return RACE_LIST_LIMIT // RACE_PAGE_SIZE + 1


async def list_races_command(command_input: CommandInput) -> CommandOutput:
    """
    Handle /corridas - open races as buttons plus distance filters.
    `/corridas 5km,10km` behaves like `/corridas_5km,10km`.
    """
    if command_input.args:
        distances = parse_distances(",".join(command_input.args))
        if distances:
            return await list_races_by_distance_command(command_input, distances)

    try:
        races = race_service.get_available_races()
    except Exception as e:
        logger.error(f"Failed to fetch races: {e}")
        return CommandOutput(text="❌ Erro ao buscar corridas. Tente novamente mais tarde.", format="HTML")

    if not races:
        return CommandOutput(text=NO_RACES_TEXT, format="HTML")

    buttons = BaseCallbackHandler.race_buttons(races, RACE_LIST_LIMIT)
    if len(races) > RACE_LIST_LIMIT:
        buttons.append([Button("➡️ Ver mais", PaginationCallback("goto", first_unlisted_page(), "races"))])
    buttons += _distance_filter_rows()

    return CommandOutput(
        text=(
            "🏃‍♂️ <strong>Corridas Disponíveis</strong>\n\n"
            "📌 Selecione uma corrida para ver mais detalhes ou use os filtros por distância:"
        ),
        format="HTML",
        keyboard=Keyboard(buttons=buttons),
    )


async def list_races_by_distance_command(command_input: CommandInput, distances: list[int]) -> CommandOutput:
    """One formatted message per race offering any of `distances`."""
    try:
        races = race_service.get_races_by_distances(distances)
    except Exception as e:
        logger.error(f"Failed to fetch races for distances {distances}: {e}")
        return CommandOutput(text="❌ Erro ao buscar corridas. Tente novamente mais tarde.", format="HTML")

    if not races:
        return CommandOutput(
            text=f"❌ Nenhuma corrida encontrada para as distâncias: {', '.join(map(str, distances))}km",
            format="HTML",
        )

    messages = [format_race_message(race) for race in races]
    return CommandOutput(text=RACE_SEPARATOR.join(messages), messages=messages, format="HTML")


async def next_races_command(command_input: CommandInput) -> CommandOutput:
    """Handle /proxima_corrida - every race on the nearest race date."""
    try:
        races = race_service.get_next_races()
    except Exception as e:
        logger.error(f"Failed to fetch next races: {e}")
        return CommandOutput(
            text="❌ Erro ao buscar próxima corrida. Tente novamente mais tarde.", format="HTML"
        )

    if not races:
        return CommandOutput(text=NO_RACES_TEXT, format="HTML")

    return CommandOutput(text="Próximas corridas", messages=format_race_messages(races), format="HTML")


async def search_races_command(command_input: CommandInput) -> CommandOutput:
    """Handle /buscar_corridas - distance range buttons."""
    try:
        races = race_service.get_available_races()
    except Exception as e:
        logger.error(f"Failed to fetch races: {e}")
        return CommandOutput(text="❌ Erro ao buscar corridas. Tente novamente mais tarde.", format="HTML")

    if not races:
        return CommandOutput(text=NO_RACES_TEXT, format="HTML")

    return CommandOutput(
        text=(
            "🏃‍♂️ <strong>Próximas corridas</strong>\n\n"
            "📌 Escolha uma faixa de distância:"
        ),
        format="HTML",
        keyboard=Keyboard(buttons=[
            [Button("5km a 9km", RacesSearchCallback(5, 9))],
            [Button("10km a 20km", RacesSearchCallback(10, 20))],
            [Button("21km", RacesFilterCallback(21))],
            [Button("42km", RacesFilterCallback(42))],
            [Button("📋 Ver Todas", RacesListCallback())],
        ]),
    )


async def list_favorite_races_command(command_input: CommandInput) -> CommandOutput:
    """Handle /favoritos - the user's favorite races as buttons."""
    telegram_id = command_input.user_id
    if not telegram_id:
        return CommandOutput(text="❌ ID do usuário não encontrado.", format="HTML")

    try:
        races = favorite_service.get_favorite_races(telegram_id)
    except Exception as e:
        logger.error(f"Failed to fetch favorite races for user {telegram_id}: {e}")
        return CommandOutput(
            text="❌ Erro ao buscar corridas favoritas. Tente novamente mais tarde.", format="HTML"
        )

    if not races:
        return CommandOutput(text=NO_FAVORITES_TEXT, format="HTML")

    return CommandOutput(
        text=(
            f"⭐ <strong>Suas Corridas Favoritas</strong> ({len(races)})\n\n"
            "Selecione uma corrida para ver mais detalhes:"
        ),
        format="HTML",
        keyboard=Keyboard(
            buttons=BaseCallbackHandler.race_buttons(races, RACE_LIST_LIMIT)
            + [[Button("🏃‍♂️ Ver Todas as Corridas", RacesListCallback())]]
        ),
    )


def get_commands() -> dict:
    """Commands of the `races` module, keyed by name."""
    return {
        "corridas": list_races_command,
        "proxima_corrida": next_races_command,
        "buscar_corridas": search_races_command,
        "favoritos": list_favorite_races_command,
    }
