"""
Promo code redemption.

Checks run in a fixed precedence order and short-circuit:

1. normalize (trim, upper-case)
2. empty            -> EMPTY
3. not in catalog   -> INVALID
4. already redeemed -> ALREADY_REDEEMED
5. consume the code, then generate the promo pack

The code is consumed before the pack is generated, so a promo whose
league matches no team still uses up the code.
"""

import logging
from collections.abc import Mapping, Sequence, Set

from cardalbum.models.game_config import GameConfig, PlayerNames
from cardalbum.models.promo import PromoCode, RedemptionRejection, RedemptionResult
from cardalbum.models.team import Team
from cardalbum.services.pack_generator import generate_pack
from cardalbum.services.random_source import RandomSource

logger = logging.getLogger(__name__)


def normalize_code(code: str | None) -> str:
    """Catalog key for user-entered text."""
    return (code or "").strip().upper()


def redeem(
    code: str | None,
    catalog: Mapping[str, PromoCode],
    redeemed_codes: Set[str],
    teams: Sequence[Team],
    config: GameConfig,
    names: PlayerNames | None = None,
    next_card_id: int = 1,
    rng: RandomSource | None = None,
) -> RedemptionResult:
    """
    Redeem a promo code against the catalog.

    `redeemed_codes` is not modified; the updated set is returned on the
    result for the caller to store.
    """
    normalized = normalize_code(code)
    redeemed = frozenset(redeemed_codes)

    def _reject(reason: RedemptionRejection) -> RedemptionResult:
        logger.info("Promo code rejected: %r (%s)", normalized, reason.value)
        return RedemptionResult(
            code=normalized,
            redeemed_codes=redeemed,
            rejection=reason,
            next_card_id=next_card_id,
        )

    if not normalized:
        return _reject(RedemptionRejection.EMPTY)

    promo = catalog.get(normalized)
    if promo is None:
        return _reject(RedemptionRejection.INVALID)

    if normalized in redeemed:
        return _reject(RedemptionRejection.ALREADY_REDEEMED)

    redeemed = redeemed | {normalized}

    pack = generate_pack(
        promo.card_count,
        promo.league,
        promo.guaranteed,
        teams,
        config,
        names,
        next_card_id,
        rng,
    )
    if pack.empty:
        logger.warning("Promo code %s consumed but produced no cards", normalized)
    else:
        logger.info("Redeemed %s (%s): %d cards", normalized, promo.sponsor, len(pack.cards))

    return RedemptionResult(
        code=normalized,
        redeemed_codes=redeemed,
        promo=promo,
        cards=pack.cards,
        next_card_id=pack.next_card_id,
    )
