"""
Pack generation.

A pack is `count` cards drawn independently from the teams matching a
league filter. When a guaranteed rarity is set it applies to the final
card only; every other card rolls against the base odds.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from cardalbum.models.card import Card
from cardalbum.models.game_config import GameConfig, PlayerNames, filter_teams
from cardalbum.models.rarity import Rarity
from cardalbum.models.team import Team
from cardalbum.services.card_factory import make_card
from cardalbum.services.name_generator import generate_name
from cardalbum.services.random_source import RandomSource, resolve_rng
from cardalbum.services.rarity_model import roll_rarity, roll_rarity_guaranteed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackResult:
    """Cards of a pack in reveal order, and the id counter after them."""

    cards: tuple[Card, ...]
    next_card_id: int

    @property
    def empty(self) -> bool:
        return not self.cards


def generate_pack(
    count: int,
    league_filter: str | None,
    guaranteed_rarity: Rarity | None,
    teams: Sequence[Team],
    config: GameConfig,
    names: PlayerNames | None = None,
    next_card_id: int = 1,
    rng: RandomSource | None = None,
) -> PackResult:
    """
    Generate a pack of cards.

    Args:
        count: Number of cards
        league_filter: League to draw teams from, or "all"/None for every team
        guaranteed_rarity: Rarity floor for the final card, if any
        teams: Team set to draw from
        config: Game constants (cards per team, base odds)
        names: Name lists for player names
        next_card_id: First id to assign; ids are consecutive from here
        rng: Random source

    Returns:
        PackResult with the cards in generation order. When no team matches
        the filter the pack is empty and the counter is not advanced.
    """
    rng = resolve_rng(rng)
    names = names or PlayerNames()
    available = filter_teams(list(teams), league_filter)

    if not available:
        logger.warning(
            "No teams available for pack generation (league=%s, teams=%d)",
            league_filter,
            len(teams),
        )
        return PackResult(cards=(), next_card_id=next_card_id)

    cards: list[Card] = []
    card_id = next_card_id
    for i in range(count):
        if i == count - 1 and guaranteed_rarity is not None:
            rarity = roll_rarity_guaranteed(guaranteed_rarity, rng)
        else:
            rarity = roll_rarity(config.rarity_odds, rng)

        team = rng.choice(available)
        name = generate_name(names.first_names, names.last_names, rng)
        cards.append(make_card(team, config.cards_per_team, rarity, name, card_id, rng))
        card_id += 1

    logger.debug("Generated %d-card pack (league=%s)", len(cards), league_filter)
    return PackResult(cards=tuple(cards), next_card_id=card_id)
