"""
Game data loader.

Reads the game data document (teams, promo codes, player names and game
constants) and converts it into the read-only domain models the rules
engine consumes. The document uses the camelCase keys the client apps
ship with. Validation is done with pydantic; anything it rejects
surfaces as GameDataError.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cardalbum.config import (
    ALL_LEAGUES,
    DEFAULT_CARDS_PER_TEAM,
    DEFAULT_DAILY_BONUS,
    DEFAULT_STANDARD_PACK_PRICE,
    DEFAULT_STANDARD_PACK_SIZE,
    DEFAULT_STARTING_COINS,
    settings,
)
from cardalbum.models.failure import FailureKind, KnownError
from cardalbum.models.game_config import GameConfig, GameData, PlayerNames
from cardalbum.models.promo import PromoCode
from cardalbum.models.rarity import Rarity, RarityOdds
from cardalbum.models.team import Team
from cardalbum.services.promo_ledger import normalize_code

logger = logging.getLogger(__name__)

# Bundled game data, used when no external path is configured
DEFAULT_GAME_DATA_PATH = Path(__file__).parent.parent / "data" / "game_data.json"


class GameDataError(KnownError):
    """Raised when the game data document is missing or invalid."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.INVALID_GAME_DATA,
            message=message,
            detail=detail,
            suggestion="Check the game data file and restart the service.",
            status_code=503,
        )


# --- Document schema ---


class _Document(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class RarityOddsSchema(_Document):
    common: int = Field(default=70, ge=0)
    rare: int = Field(default=20, ge=0)
    epic: int = Field(default=8, ge=0)
    legendary: int = Field(default=2, ge=0)


class TeamSchema(_Document):
    name: str = Field(..., min_length=1)
    league: str
    icon: str = ""
    primary_color: str = Field(default="", alias="primaryColor")
    scheme: str = ""


class PromoCodeSchema(_Document):
    sponsor: str
    league: str = ALL_LEAGUES
    card_count: int = Field(default=5, ge=0, alias="cardCount")
    guaranteed: Rarity | None = None
    description: str = ""
    color: str = ""


class PlayerNamesSchema(_Document):
    first_names: list[str] = Field(default_factory=list, alias="firstNames")
    last_names: list[str] = Field(default_factory=list, alias="lastNames")


class GameConfigSchema(_Document):
    cards_per_team: int = Field(default=DEFAULT_CARDS_PER_TEAM, ge=1, alias="cardsPerTeam")
    starting_coins: int = Field(default=DEFAULT_STARTING_COINS, ge=0, alias="startingCoins")
    daily_bonus: int = Field(default=DEFAULT_DAILY_BONUS, ge=0, alias="dailyBonus")
    standard_pack_price: int = Field(
        default=DEFAULT_STANDARD_PACK_PRICE, ge=0, alias="standardPackPrice"
    )
    standard_pack_size: int = Field(
        default=DEFAULT_STANDARD_PACK_SIZE, ge=0, alias="standardPackSize"
    )
    rarity_odds: RarityOddsSchema = Field(default_factory=RarityOddsSchema, alias="rarityOdds")


class GameDataSchema(_Document):
    teams: list[TeamSchema] = Field(default_factory=list)
    promo_codes: dict[str, PromoCodeSchema] = Field(default_factory=dict, alias="promoCodes")
    player_names: PlayerNamesSchema = Field(
        default_factory=PlayerNamesSchema, alias="playerNames"
    )
    config: GameConfigSchema = Field(default_factory=GameConfigSchema)


# --- Conversion ---


def game_data_from_dict(raw: object) -> GameData:
    """
    Validate a decoded game data document and convert it to domain models.

    Raises:
        GameDataError: If the document does not match the schema
    """
    try:
        doc = GameDataSchema.model_validate(raw)
    except ValidationError as e:
        raise GameDataError(
            "Game data document is invalid.",
            detail=f"{e.error_count()} validation error(s)",
        ) from e

    odds = doc.config.rarity_odds
    config = GameConfig(
        cards_per_team=doc.config.cards_per_team,
        starting_coins=doc.config.starting_coins,
        daily_bonus=doc.config.daily_bonus,
        standard_pack_price=doc.config.standard_pack_price,
        standard_pack_size=doc.config.standard_pack_size,
        rarity_odds=RarityOdds(
            common=odds.common,
            rare=odds.rare,
            epic=odds.epic,
            legendary=odds.legendary,
        ),
    )
    if odds.common + odds.rare + odds.epic + odds.legendary != 100:
        logger.warning(
            "Rarity odds sum to %d, not 100; legendary bucket absorbs the difference",
            odds.common + odds.rare + odds.epic + odds.legendary,
        )

    teams = tuple(
        Team(
            name=t.name,
            league=t.league,
            icon=t.icon,
            primary_color=t.primary_color,
            scheme=t.scheme,
        )
        for t in doc.teams
    )

    promo_codes: dict[str, PromoCode] = {}
    for raw_code, p in doc.promo_codes.items():
        code = normalize_code(raw_code)
        if not code:
            logger.warning("Skipping promo code with empty key")
            continue
        promo_codes[code] = PromoCode(
            code=code,
            sponsor=p.sponsor,
            league=p.league,
            card_count=p.card_count,
            guaranteed=p.guaranteed,
            description=p.description,
            color=p.color,
        )

    return GameData(
        teams=teams,
        promo_codes=promo_codes,
        player_names=PlayerNames(
            first_names=tuple(doc.player_names.first_names),
            last_names=tuple(doc.player_names.last_names),
        ),
        config=config,
    )


def load_game_data(path: Path | None = None) -> GameData:
    """
    Load game data from a JSON file.

    Args:
        path: Document path. Defaults to the configured or bundled file.

    Raises:
        GameDataError: If the file is missing, unreadable or invalid
    """
    path = path or settings.game_data_path or DEFAULT_GAME_DATA_PATH

    if not path.exists():
        raise GameDataError(f"Game data not found at {path}.")

    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise GameDataError("Game data could not be read.", detail=str(e)) from e

    data = game_data_from_dict(raw)
    logger.info(
        "Loaded game data from %s: %d teams, %d promo codes",
        path,
        len(data.teams),
        len(data.promo_codes),
    )
    return data


@lru_cache(maxsize=1)
def get_game_data() -> GameData:
    """
    Get cached game data.

    Cached after first load. Used as a FastAPI dependency.
    """
    return load_game_data()
