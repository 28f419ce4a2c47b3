"""Rules engine and the player-state services built on it."""

from cardalbum.services.card_factory import make_card
from cardalbum.services.economy import (
    CollectionStats,
    InsufficientCoinsError,
    PackPurchase,
    buy_standard_pack,
    claim_daily_bonus,
    collection_stats,
    is_daily_bonus_available,
    redeem_promo,
    team_cards,
)
from cardalbum.services.name_generator import generate_name
from cardalbum.services.pack_generator import PackResult, generate_pack
from cardalbum.services.promo_ledger import normalize_code, redeem
from cardalbum.services.random_source import RandomSource
from cardalbum.services.rarity_model import rarity_for_draw, roll_rarity, roll_rarity_guaranteed
from cardalbum.services.slot_placement import (
    AlbumFilter,
    can_place,
    filter_album_slots,
    matching_slots,
    place_card,
    placement_mismatch,
)

__all__ = [
    "AlbumFilter",
    "CollectionStats",
    "InsufficientCoinsError",
    "PackPurchase",
    "PackResult",
    "RandomSource",
    "buy_standard_pack",
    "can_place",
    "claim_daily_bonus",
    "collection_stats",
    "filter_album_slots",
    "generate_name",
    "generate_pack",
    "is_daily_bonus_available",
    "make_card",
    "matching_slots",
    "normalize_code",
    "place_card",
    "placement_mismatch",
    "rarity_for_draw",
    "redeem",
    "redeem_promo",
    "roll_rarity",
    "roll_rarity_guaranteed",
    "team_cards",
]
