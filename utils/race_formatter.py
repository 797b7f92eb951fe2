"""
utils/race_formatter.py
-----------------------
HTML renderings of races for Telegram messages.
"""

from datetime import date

from models.race import Race, RaceStatus
from utils.text import escape_attr, escape_html

_STATUS_EMOJI = {
    RaceStatus.OPEN: "🟢",
    RaceStatus.CLOSED: "🔴",
    RaceStatus.COMING_SOON: "🟡",
    RaceStatus.CANCELLED: "⚫",
}

_STATUS_TEXT = {
    RaceStatus.OPEN: "Inscrições Abertas",
    RaceStatus.CLOSED: "Inscrições Encerradas",
    RaceStatus.COMING_SOON: "Em Breve",
    RaceStatus.CANCELLED: "Cancelada",
}


def format_date(day: date) -> str:
    """dd/mm/yyyy."""
    return day.strftime("%d/%m/%Y")


def button_label(race: Race) -> str:
    """Short label used on race buttons."""
    return f"🏃‍♂️ {race.title} - {'/'.join(race.distances)}"


def format_race_message(race: Race) -> str:
    """Compact card used when several races are sent in sequence."""
    return (
        f"{_STATUS_EMOJI.get(race.status, '⚪')} <strong>{escape_html(race.title)}</strong>\n"
        f"📅 <strong>Data:</strong> {format_date(race.date)}\n"
        f"🕐 <strong>Horário:</strong> {escape_html(race.time)}\n"
        f"📍 <strong>Local:</strong> {escape_html(race.location)}\n"
        f"🏃‍♂️ <strong>Distâncias:</strong> {' / '.join(race.distances)}\n"
        f"🏢 <strong>Organização:</strong> {escape_html(race.organization)}\n"
        f"🔗 <strong>Link:</strong> <a href=\"{escape_attr(race.link)}\">Inscrições</a>"
    )


def format_detailed_race_message(race: Race) -> str:
    """Full card shown by the race details button."""
    return (
        f"{_STATUS_EMOJI.get(race.status, '⚪')} <strong>{escape_html(race.title)}</strong>\n\n"
        f"📅 <strong>Data:</strong> {format_date(race.date)}\n"
        f"🕐 <strong>Horário:</strong> {escape_html(race.time)}\n"
        f"📍 <strong>Local:</strong> {escape_html(race.location)}\n"
        f"🏃‍♂️ <strong>Distâncias:</strong> {' / '.join(race.distances)}\n"
        f"🏢 <strong>Organização:</strong> {escape_html(race.organization)}\n"
        f"📊 <strong>Status:</strong> {_STATUS_TEXT.get(race.status, 'Desconhecido')}\n\n"
        f"🔗 <strong>Link para inscrições:</strong>\n"
        f"<a href=\"{escape_attr(race.link)}\">Clique aqui para se inscrever</a>\n\n"
        f"💡 <em>Use os botões abaixo para mais opções!</em>"
    )


def format_race_messages(races: list[Race]) -> list[str]:
    return [format_race_message(r) for r in races]
