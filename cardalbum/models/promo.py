"""
Promo code catalog entries and redemption outcomes.

A redemption is either accepted (cards delivered, code consumed) or
rejected for one of three reasons. Rejections are expected user-input
outcomes and are returned as values, never raised.
"""

from dataclasses import dataclass, field
from enum import Enum

from cardalbum.config import ALL_LEAGUES
from cardalbum.models.card import Card
from cardalbum.models.rarity import Rarity


@dataclass(frozen=True, slots=True)
class PromoCode:
    """
    A sponsor promo code.

    Attributes:
        code: Normalized code (trimmed, upper-case)
        sponsor: Sponsor display name
        league: League filter for the pack, or "all"
        card_count: Number of cards in the pack
        guaranteed: Rarity floor for the final card, if any
        description: Display text
        color: Display colour
    """

    code: str
    sponsor: str
    league: str = ALL_LEAGUES
    card_count: int = 5
    guaranteed: Rarity | None = None
    description: str = ""
    color: str = ""


class RedemptionRejection(str, Enum):
    """Why a redemption was refused, in precedence order."""

    EMPTY = "EMPTY"
    INVALID = "INVALID"
    ALREADY_REDEEMED = "ALREADY_REDEEMED"


# User-facing message per rejection reason
REJECTION_MESSAGES: dict[RedemptionRejection, str] = {
    RedemptionRejection.EMPTY: "Please enter a code.",
    RedemptionRejection.INVALID: "Invalid code. Please check and try again.",
    RedemptionRejection.ALREADY_REDEEMED: "This code has already been redeemed!",
}


@dataclass(frozen=True)
class RedemptionResult:
    """
    Outcome of redeeming a promo code.

    `redeemed_codes` is the caller's redeemed set after this call: unchanged
    on rejection, extended with the code on acceptance (even when the pack
    came back empty).
    """

    code: str
    redeemed_codes: frozenset[str]
    rejection: RedemptionRejection | None = None
    promo: PromoCode | None = None
    cards: tuple[Card, ...] = field(default_factory=tuple)
    next_card_id: int = 1

    @property
    def ok(self) -> bool:
        """True if the code was accepted."""
        return self.rejection is None

    @property
    def sponsor(self) -> str | None:
        return self.promo.sponsor if self.promo else None

    @property
    def description(self) -> str | None:
        return self.promo.description if self.promo else None

    @property
    def message(self) -> str:
        """User-facing message for this outcome."""
        if self.rejection is not None:
            return REJECTION_MESSAGES[self.rejection]
        if not self.cards:
            return "Code redeemed, but no cards could be generated for this pack."
        return f"Redeemed {self.sponsor} pack!"
