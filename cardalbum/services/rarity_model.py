"""
Rarity rolls.

A roll draws one value r in [0, 100) and walks cumulative thresholds in
ascending severity order: common, rare, epic, then legendary takes the
remainder. Weights are not validated; a shortfall grows the legendary
bucket and an excess makes it unreachable.
"""

from cardalbum.models.rarity import (
    GUARANTEED_RARE_TABLE,
    RARITY_ORDER,
    Rarity,
    RarityOdds,
)
from cardalbum.services.random_source import RandomSource, resolve_rng


def _draw(rng: RandomSource) -> float:
    return rng.random() * 100


def rarity_for_draw(draw: float, odds: RarityOdds) -> Rarity:
    """
    Map a draw in [0, 100) to a tier.

    Deterministic half of `roll_rarity`, exposed for boundary testing.
    """
    threshold = 0
    for rarity in RARITY_ORDER[:-1]:
        threshold += odds.weight(rarity)
        if draw < threshold:
            return rarity
    return Rarity.LEGENDARY


def roll_rarity(odds: RarityOdds, rng: RandomSource | None = None) -> Rarity:
    """Unconstrained rarity roll against the configured odds."""
    return rarity_for_draw(_draw(resolve_rng(rng)), odds)


def roll_rarity_guaranteed(minimum: Rarity, rng: RandomSource | None = None) -> Rarity:
    """
    Rarity for the final card of a pack with a guaranteed floor.

    A "rare" floor re-rolls against a skewed table (70 rare / 25 epic /
    5 legendary). Any other floor is returned as-is without drawing.
    """
    if minimum is not Rarity.RARE:
        return minimum

    draw = _draw(resolve_rng(rng))
    threshold = 0
    for rarity, weight in GUARANTEED_RARE_TABLE:
        threshold += weight
        if draw < threshold:
            return rarity
    return Rarity.LEGENDARY
