"""
Shared FastAPI dependencies and response models.

Game data, the random source and the current date are injected so tests
can override them with `app.dependency_overrides`.
"""

from datetime import date
from typing import Annotated

from fastapi import Depends
from pydantic import BaseModel

from cardalbum.models.card import Card
from cardalbum.models.game_config import GameData
from cardalbum.services.game_data import get_game_data
from cardalbum.services.random_source import RandomSource


def get_rng() -> RandomSource | None:
    """Random source for rule calls; None selects the module default."""
    return None


def get_today() -> date:
    """Current calendar day for the daily bonus."""
    return date.today()


GameDataDep = Annotated[GameData, Depends(get_game_data)]
RngDep = Annotated[RandomSource | None, Depends(get_rng)]
TodayDep = Annotated[date, Depends(get_today)]


class CardResponse(BaseModel):
    """A card as shown to the UI."""

    id: int
    team: str
    league: str
    number: int
    rarity: str
    player_name: str
    color: str


def card_response(card: Card) -> CardResponse:
    return CardResponse(
        id=card.id,
        team=card.team,
        league=card.league,
        number=card.number,
        rarity=card.rarity.value,
        player_name=card.player_name,
        color=card.color,
    )
