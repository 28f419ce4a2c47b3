"""
Rarity tiers and configured odds.

Tiers are ordered by severity: common < rare < epic < legendary.
Odds are four integer weights on a 0-100 scale. They are NOT required
to sum to 100; the roll law in services.rarity_model is total either way.
"""

from dataclasses import dataclass
from enum import Enum


class Rarity(str, Enum):
    """Card rarity tier."""

    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


# Ascending severity order, used for cumulative thresholds
RARITY_ORDER: tuple[Rarity, ...] = (
    Rarity.COMMON,
    Rarity.RARE,
    Rarity.EPIC,
    Rarity.LEGENDARY,
)

# Display colours shown alongside each card
RARITY_COLORS: dict[Rarity, str] = {
    Rarity.COMMON: "#9E9E9E",
    Rarity.RARE: "#2196F3",
    Rarity.EPIC: "#9C27B0",
    Rarity.LEGENDARY: "#FFD700",
}

# Skewed table for the final card of a pack guaranteeing "rare or better"
GUARANTEED_RARE_TABLE: tuple[tuple[Rarity, int], ...] = (
    (Rarity.RARE, 70),
    (Rarity.EPIC, 25),
    (Rarity.LEGENDARY, 5),
)


@dataclass(frozen=True, slots=True)
class RarityOdds:
    """
    Weights for an unconstrained rarity roll.

    Attributes:
        common: Weight of the common bucket
        rare: Weight of the rare bucket
        epic: Weight of the epic bucket
        legendary: Weight of the legendary bucket (also absorbs any shortfall)
    """

    common: int = 70
    rare: int = 20
    epic: int = 8
    legendary: int = 2

    def weight(self, rarity: Rarity) -> int:
        """Weight configured for a tier."""
        return int(getattr(self, rarity.value))

    def total(self) -> int:
        """Sum of all four weights."""
        return self.common + self.rare + self.epic + self.legendary
