from dataclasses import dataclass, field, replace
from datetime import date

from cardalbum.models.album import AlbumState
from cardalbum.models.card import Card
from cardalbum.models.game_config import GameConfig


@dataclass(frozen=True)
class PlayerState:
    """
    Everything the game remembers about one player.

    This is the single state struct threaded through every mutating
    operation. Operations return an updated copy; nothing is changed in place.

    Attributes:
        coins: Currency balance
        inventory: Owned cards in acquisition order (append-only)
        card_id_counter: Next card id to assign
        redeemed_codes: Normalized promo codes already used
        last_login: Calendar day the daily bonus was last granted
        album: Album slot placements
    """

    coins: int
    inventory: tuple[Card, ...] = ()
    card_id_counter: int = 1
    redeemed_codes: frozenset[str] = field(default_factory=frozenset)
    last_login: date | None = None
    album: AlbumState = field(default_factory=AlbumState)

    @classmethod
    def new(cls, config: GameConfig) -> "PlayerState":
        """Fresh state for a player who has never played."""
        return cls(coins=config.starting_coins)

    def find_card(self, card_id: int) -> Card | None:
        for card in self.inventory:
            if card.id == card_id:
                return card
        return None

    def with_cards(self, cards: tuple[Card, ...], next_card_id: int) -> "PlayerState":
        """Copy with cards appended and the id counter advanced."""
        return replace(
            self,
            inventory=self.inventory + tuple(cards),
            card_id_counter=next_card_id,
        )
