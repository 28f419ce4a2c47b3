"""
Game configuration and reference data.

These are the externally supplied, read-only inputs of the rules engine:
numeric constants, the team set, the promo catalog and the name lists.
"""

from dataclasses import dataclass, field

from cardalbum.config import (
    ALL_LEAGUES,
    DEFAULT_CARDS_PER_TEAM,
    DEFAULT_DAILY_BONUS,
    DEFAULT_STANDARD_PACK_PRICE,
    DEFAULT_STANDARD_PACK_SIZE,
    DEFAULT_STARTING_COINS,
)
from cardalbum.models.promo import PromoCode
from cardalbum.models.rarity import RarityOdds
from cardalbum.models.team import Team


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Numeric and behavioral constants."""

    cards_per_team: int = DEFAULT_CARDS_PER_TEAM
    starting_coins: int = DEFAULT_STARTING_COINS
    daily_bonus: int = DEFAULT_DAILY_BONUS
    standard_pack_price: int = DEFAULT_STANDARD_PACK_PRICE
    standard_pack_size: int = DEFAULT_STANDARD_PACK_SIZE
    rarity_odds: RarityOdds = field(default_factory=RarityOdds)


@dataclass(frozen=True, slots=True)
class PlayerNames:
    """Name lists player names are drawn from."""

    first_names: tuple[str, ...] = ()
    last_names: tuple[str, ...] = ()


@dataclass(frozen=True)
class GameData:
    """
    Everything loaded from the game data document.

    Attributes:
        teams: All teams, in document order
        promo_codes: Catalog keyed by normalized (upper-case) code
        player_names: First/last name lists
        config: Game constants
    """

    teams: tuple[Team, ...] = ()
    promo_codes: dict[str, PromoCode] = field(default_factory=dict)
    player_names: PlayerNames = field(default_factory=PlayerNames)
    config: GameConfig = field(default_factory=GameConfig)

    def teams_for_league(self, league: str | None) -> list[Team]:
        """Teams matching a league filter; `'all'` or None means every team."""
        return filter_teams(self.teams, league)

    def team_by_name(self, name: str) -> Team | None:
        """Look up a team by its unique name."""
        for team in self.teams:
            if team.name == name:
                return team
        return None


def filter_teams(teams: tuple[Team, ...] | list[Team], league: str | None) -> list[Team]:
    """Filter teams to a league unless the filter is the all-leagues sentinel."""
    if league is None or league == ALL_LEAGUES:
        return list(teams)
    return [team for team in teams if team.league == league]
