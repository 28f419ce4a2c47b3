from cardalbum.models.album import (
    HOLDING_AREA,
    HOLDING_AREA_ID,
    AlbumSlot,
    AlbumState,
    PlacementOutcome,
    PlacementResult,
    SlotKind,
)
from cardalbum.models.card import Card
from cardalbum.models.failure import (
    ApiResponse,
    FailureDetail,
    FailureKind,
    KnownError,
    OutcomeType,
    RefusalError,
    create_unknown_failure,
    finalize_response,
)
from cardalbum.models.game_config import GameConfig, GameData, PlayerNames, filter_teams
from cardalbum.models.player_state import PlayerState
from cardalbum.models.promo import (
    REJECTION_MESSAGES,
    PromoCode,
    RedemptionRejection,
    RedemptionResult,
)
from cardalbum.models.rarity import RARITY_COLORS, RARITY_ORDER, Rarity, RarityOdds
from cardalbum.models.team import Team

__all__ = [
    "AlbumSlot",
    "AlbumState",
    "ApiResponse",
    "Card",
    "FailureDetail",
    "FailureKind",
    "GameConfig",
    "GameData",
    "HOLDING_AREA",
    "HOLDING_AREA_ID",
    "KnownError",
    "OutcomeType",
    "PlacementOutcome",
    "PlacementResult",
    "PlayerNames",
    "PlayerState",
    "PromoCode",
    "RARITY_COLORS",
    "RARITY_ORDER",
    "REJECTION_MESSAGES",
    "Rarity",
    "RarityOdds",
    "RedemptionRejection",
    "RedemptionResult",
    "RefusalError",
    "SlotKind",
    "Team",
    "create_unknown_failure",
    "filter_teams",
    "finalize_response",
]
