"""
db/seed.py
----------
Development data for the race listings.

Usage:
    python -m db.seed            # create tables and insert sample races
    python -m db.seed --clear    # delete races, favorites and chat history
"""

import argparse
from datetime import date
from typing import Optional

from dateutil.relativedelta import relativedelta

from db.connection import close_pool, init_pool
from db.init_db import create_tables
from models.race import Race, RaceStatus
from repositories.favorite_repo import FavoriteRepository
from repositories.message_repo import MessageRepository
from repositories.race_repo import RaceRepository
from utils.logger import get_logger

logger = get_logger(__name__)

# (title, organization, distances in km, offset from today, location, link, time, status)
SAMPLE_RACES = [
    ("Corrida de São Paulo", "Atletismo SP", [5, 10, 21], relativedelta(weeks=+3),
     "Parque Ibirapuera, São Paulo", "https://example.com/corrida-sp", "07:00", RaceStatus.OPEN),
    ("Corrida de Prudente", "Street Race", [10], relativedelta(weeks=+3),
     "Parque do Povo, Presidente Prudente", "https://example.com/corrida-prudente", "07:00", RaceStatus.OPEN),
    ("Maratona do Rio", "Rio Running", [10, 21, 42], relativedelta(months=+2),
     "Copacabana, Rio de Janeiro", "https://example.com/maratona-rio", "06:30", RaceStatus.COMING_SOON),
    ("Corrida da Primavera", "Verde Running", [5, 10], relativedelta(days=+10),
     "Parque da Cidade, Brasília", "https://example.com/corrida-primavera", "06:00", RaceStatus.OPEN),
    ("Desafio da Serra", "Trail Brasil", [15, 30], relativedelta(days=+10),
     "Serra da Mantiqueira, MG", "https://example.com/desafio-serra", "05:30", RaceStatus.OPEN),
    ("Corrida Noturna", "Night Runners", [5, 10], relativedelta(weeks=+6),
     "Aterro do Flamengo, RJ", "https://example.com/corrida-noturna", "19:30", RaceStatus.OPEN),
    ("Meia de Curitiba", "Curitiba Run", [21], relativedelta(months=+1, days=+5),
     "Parque Barigui, Curitiba", "https://example.com/meia-curitiba", "06:45", RaceStatus.OPEN),
    ("Corrida do Sol", "Nordeste Eventos", [5, 8], relativedelta(months=-1),
     "Praia de Iracema, Fortaleza", "https://example.com/corrida-sol", "05:45", RaceStatus.CLOSED),
]


def build_races(today: Optional[date] = None) -> list[Race]:
    """Sample races dated relative to `today` so most of them are upcoming."""
    today = today or date.today()
    return [
        Race(
            title=title,
            organization=organization,
            date=today + offset,
            distances=[f"{km}km" for km in distances],
            distances_numbers=distances,
            location=location,
            link=link,
            time=start_time,
            status=status,
        )
        for title, organization, distances, offset, location, link, start_time, status in SAMPLE_RACES
    ]


def seed() -> int:
    create_tables()
    repo = RaceRepository()
    races = [repo.add(race) for race in build_races()]
    logger.info(f"🌱 Seeded {len(races)} races.")
    return len(races)


def clear() -> None:
    favorites = FavoriteRepository().delete_all()
    races = RaceRepository().delete_all()
    messages = MessageRepository().delete_all()
    logger.info(f"🧹 Cleared {races} races, {favorites} favorites and {messages} messages.")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed or clear the DashBot database.")
    parser.add_argument("--clear", action="store_true", help="delete races, favorites and chat history")
    args = parser.parse_args()

    init_pool()
    try:
        if args.clear:
            clear()
        else:
            seed()
    finally:
        close_pool()


if __name__ == "__main__":
    main()
