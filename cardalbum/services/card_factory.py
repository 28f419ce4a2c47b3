from cardalbum.models.card import Card
from cardalbum.models.rarity import Rarity
from cardalbum.models.team import Team
from cardalbum.services.random_source import RandomSource, resolve_rng


def make_card(
    team: Team,
    cards_per_team: int,
    rarity: Rarity,
    name: str,
    next_id: int,
    rng: RandomSource | None = None,
) -> Card:
    """
    Assemble a card for a team.

    The card number is drawn uniformly from 1..cards_per_team, independent
    of rarity. `next_id` comes from the caller's counter; the caller
    advances it by exactly one per card.
    """
    number = resolve_rng(rng).randint(1, cards_per_team)
    return Card(
        id=next_id,
        team=team.name,
        league=team.league,
        number=number,
        rarity=rarity,
        player_name=name,
    )
