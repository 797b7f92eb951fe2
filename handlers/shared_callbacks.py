"""
handlers/shared_callbacks.py
----------------------------
Generic navigation and pagination buttons.
"""

import math

from config import RACE_PAGE_SIZE
from handlers.base_callback import BaseCallbackHandler
from models.callbacks import NavigationCallback, PaginationCallback, RacesListCallback
from models.command import Button, CommandInput, CommandOutput, Keyboard
from services.race_service import RaceService
from utils.text import escape_html

race_service = RaceService()

RACES_TARGET = "races"


class NavigationCallbackHandler(BaseCallbackHandler):
    callback_type = NavigationCallback.type

    async def handle(self, command_input: CommandInput) -> CommandOutput:
        data = command_input.callback_data
        target = escape_html(data.target)
        if data.action == "back":
            return CommandOutput(text=f"⬅️ Voltando para: {target}", format="HTML", edit_message=True)
        if data.action == "next":
            return CommandOutput(text=f"➡️ Navegando para: {target}", format="HTML", edit_message=True)
        if data.action == "close":
            return CommandOutput(text="❌ <i>Navegação encerrada</i>", format="HTML", edit_message=True)
        return self.create_error_response("Ação de navegação não reconhecida.")


class PaginationCallbackHandler(BaseCallbackHandler):
    """
    Pages through the open race list, RACE_PAGE_SIZE races per page.

    `page` is 1-based. For 'prev'/'next' it is the page currently shown,
    for 'goto' it is the destination. Out-of-range pages are clamped.
    """

    callback_type = PaginationCallback.type

    async def handle(self, command_input: CommandInput) -> CommandOutput:
        data = command_input.callback_data
        if data.target != RACES_TARGET:
            return self.create_error_response("Lista não encontrada.")

        try:
            races = race_service.get_available_races()
        except Exception as e:
            self.log_error(e)
            return self.create_error_response("Erro ao buscar corridas.")

        if not races:
            return self.create_error_response("Nenhuma corrida disponível no momento!")

        total_pages = math.ceil(len(races) / RACE_PAGE_SIZE)
        page = self.target_page(data.action, data.page, total_pages)
        start = (page - 1) * RACE_PAGE_SIZE

        nav_row = []
        if page > 1:
            nav_row.append(Button("⬅️ Anterior", PaginationCallback("prev", page, RACES_TARGET)))
        if page < total_pages:
            nav_row.append(Button("Próxima ➡️", PaginationCallback("next", page, RACES_TARGET)))

        buttons = self.race_buttons(races[start:start + RACE_PAGE_SIZE])
        if nav_row:
            buttons.append(nav_row)
        buttons.append([
            self.create_back_button(RacesListCallback()),
            Button("✖️ Fechar", NavigationCallback("close", RACES_TARGET)),
        ])

        return CommandOutput(
            text=(
                "🏃‍♂️ <strong>Corridas Disponíveis</strong>\n\n"
                f"Página {page} de {total_pages}:"
            ),
            format="HTML",
            edit_message=True,
            keyboard=Keyboard(buttons=buttons),
        )

    @staticmethod
    def target_page(action: str, page: int, total_pages: int) -> int:
        if action == "prev":
            page -= 1
        elif action == "next":
            page += 1
        return max(1, min(page, total_pages))


def get_handlers() -> list[BaseCallbackHandler]:
    return [NavigationCallbackHandler(), PaginationCallbackHandler()]
