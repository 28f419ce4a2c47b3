from dataclasses import dataclass

from cardalbum.models.rarity import RARITY_COLORS, Rarity


@dataclass(frozen=True, slots=True)
class Card:
    """
    A drawn card instance.

    Two cards may share team and number; only `id` is unique.

    Attributes:
        id: Unique id from the player's monotonically increasing counter
        team: Team name
        league: League of the team at draw time
        number: Card number within the team, 1..cards_per_team
        rarity: Rarity tier
        player_name: Generated player name
    """

    id: int
    team: str
    league: str
    number: int
    rarity: Rarity
    player_name: str

    @property
    def color(self) -> str:
        """Display colour for this card's rarity."""
        return RARITY_COLORS[self.rarity]
