"""
Player economy: coins, pack purchases, promo redemption and the daily bonus.

This is the caller layer around the rules engine. It owns the "can the
player afford it" gate and threads PlayerState through every operation:
each function takes a state and returns an updated copy.

The daily bonus is granted once per calendar day (not once per 24 hours).
"""

import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from datetime import date

from cardalbum.config import ALL_LEAGUES
from cardalbum.models.card import Card
from cardalbum.models.failure import FailureKind, KnownError
from cardalbum.models.game_config import GameConfig, GameData
from cardalbum.models.player_state import PlayerState
from cardalbum.models.promo import RedemptionResult
from cardalbum.models.team import Team
from cardalbum.services.pack_generator import generate_pack
from cardalbum.services.promo_ledger import redeem
from cardalbum.services.random_source import RandomSource

logger = logging.getLogger(__name__)


class InsufficientCoinsError(KnownError):
    """Raised when a player cannot afford a pack."""

    def __init__(self, price: int, balance: int):
        self.price = price
        self.balance = balance
        super().__init__(
            kind=FailureKind.INSUFFICIENT_COINS,
            message=f"Not enough coins! You need {price} coins.",
            detail=f"balance: {balance}/{price}",
            suggestion="Come back tomorrow for your daily bonus or redeem a promo code.",
            status_code=402,
        )


@dataclass(frozen=True)
class PackPurchase:
    """State after buying a pack, and the cards it contained."""

    state: PlayerState
    cards: tuple[Card, ...]
    price: int


@dataclass
class CollectionStats:
    """Dashboard statistics for an inventory."""

    total_cards: int = 0
    unique_teams: int = 0
    completion: float = 0.0
    cards_by_team: dict[str, int] = field(default_factory=dict)


# --- Daily bonus ---


def is_daily_bonus_available(last_login: date | None, today: date) -> bool:
    """True if the bonus has not been granted on this calendar day."""
    return last_login is None or last_login != today


def claim_daily_bonus(
    state: PlayerState, config: GameConfig, today: date
) -> tuple[PlayerState, int]:
    """
    Grant the daily bonus if available.

    Returns:
        Tuple of (state, coins awarded). Awarded is 0 when already claimed.
    """
    if not is_daily_bonus_available(state.last_login, today):
        return state, 0

    logger.info("Daily bonus granted: +%d coins", config.daily_bonus)
    updated = replace(state, coins=state.coins + config.daily_bonus, last_login=today)
    return updated, config.daily_bonus


# --- Purchases ---


def buy_standard_pack(
    state: PlayerState,
    data: GameData,
    rng: RandomSource | None = None,
) -> PackPurchase:
    """
    Buy and open a standard pack.

    The price is debited before the pack is opened, so a pack that comes
    back empty (no teams configured) is still paid for.

    Raises:
        InsufficientCoinsError: If the balance is below the pack price
    """
    price = data.config.standard_pack_price
    if state.coins < price:
        raise InsufficientCoinsError(price=price, balance=state.coins)

    debited = replace(state, coins=state.coins - price)
    pack = generate_pack(
        data.config.standard_pack_size,
        ALL_LEAGUES,
        None,
        data.teams,
        data.config,
        data.player_names,
        debited.card_id_counter,
        rng,
    )
    logger.info("Standard pack bought for %d coins: %d cards", price, len(pack.cards))

    return PackPurchase(
        state=debited.with_cards(pack.cards, pack.next_card_id),
        cards=pack.cards,
        price=price,
    )


def redeem_promo(
    state: PlayerState,
    code: str | None,
    data: GameData,
    rng: RandomSource | None = None,
) -> tuple[PlayerState, RedemptionResult]:
    """
    Redeem a promo code for a player.

    On acceptance the code is recorded as redeemed, the cards are added and
    the id counter advances. On rejection the state is returned unchanged.
    """
    result = redeem(
        code,
        data.promo_codes,
        state.redeemed_codes,
        data.teams,
        data.config,
        data.player_names,
        state.card_id_counter,
        rng,
    )
    if not result.ok:
        return state, result

    updated = replace(state, redeemed_codes=result.redeemed_codes)
    return updated.with_cards(result.cards, result.next_card_id), result


# --- Collection views ---


def team_cards(inventory: Sequence[Card], team_name: str) -> list[Card]:
    """Cards in the inventory belonging to one team."""
    return [card for card in inventory if card.team == team_name]


def collection_stats(
    inventory: Sequence[Card],
    teams: Sequence[Team],
    cards_per_team: int,
) -> CollectionStats:
    """
    Summary statistics for an inventory.

    Completion counts every owned card (duplicates included) against the
    number of album slots across all teams.
    """
    by_team = Counter(card.team for card in inventory)
    total_possible = len(teams) * cards_per_team
    completion = 0.0
    if total_possible > 0:
        completion = round(len(inventory) / total_possible * 100, 1)

    return CollectionStats(
        total_cards=len(inventory),
        unique_teams=len(by_team),
        completion=completion,
        cards_by_team={team.name: by_team.get(team.name, 0) for team in teams},
    )
