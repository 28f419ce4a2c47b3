"""
Player API endpoints.

Provides the player's state summary, collection statistics, the daily
bonus and an explicit reset.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from cardalbum.api.dependencies import CardResponse, GameDataDep, TodayDep, card_response
from cardalbum.db import delete_player_state, load_player_state, save_player_state
from cardalbum.db.database import get_session
from cardalbum.services.economy import (
    claim_daily_bonus,
    collection_stats,
    is_daily_bonus_available,
)
from cardalbum.services.player_locks import player_locks

router = APIRouter(prefix="/players", tags=["players"])


class PlayerResponse(BaseModel):
    """Response model for a player's state."""

    user_id: str
    coins: int
    inventory: list[CardResponse] = Field(default_factory=list)
    redeemed_codes: list[str] = Field(default_factory=list)
    daily_bonus_available: bool = False


class DailyBonusResponse(BaseModel):
    """Response model for a daily bonus claim."""

    user_id: str
    awarded: int
    coins: int
    message: str


class StatsResponse(BaseModel):
    """Response model for collection statistics."""

    user_id: str
    total_cards: int = 0
    unique_teams: int = 0
    completion: float = Field(
        default=0.0,
        description="Owned cards as a percentage of all album slots",
    )
    cards_by_team: dict[str, int] = Field(default_factory=dict)


class ResetResponse(BaseModel):
    user_id: str
    deleted: bool
    message: str = ""


@router.get("/{user_id}", response_model=PlayerResponse)
async def get_player(
    user_id: str,
    data: GameDataDep,
    today: TodayDep,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PlayerResponse:
    """
    Get a player's state.

    Unknown players get the starting state (not saved until they act).
    """
    state = await load_player_state(session, user_id, data.config)
    return PlayerResponse(
        user_id=user_id,
        coins=state.coins,
        inventory=[card_response(c) for c in state.inventory],
        redeemed_codes=sorted(state.redeemed_codes),
        daily_bonus_available=is_daily_bonus_available(state.last_login, today),
    )


@router.post("/{user_id}/daily-bonus", response_model=DailyBonusResponse)
async def claim_player_daily_bonus(
    user_id: str,
    data: GameDataDep,
    today: TodayDep,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DailyBonusResponse:
    """
    Claim the once-per-calendar-day coin bonus.

    Claiming twice on the same day awards nothing the second time.
    """
    async with player_locks.hold(user_id):
        state = await load_player_state(session, user_id, data.config)
        state, awarded = claim_daily_bonus(state, data.config, today)
        if awarded:
            await save_player_state(session, user_id, state)
            await session.commit()
            message = f"Daily Login Bonus: +{awarded} Coins!"
        else:
            message = "Daily bonus already claimed today."

    return DailyBonusResponse(user_id=user_id, awarded=awarded, coins=state.coins, message=message)


@router.get("/{user_id}/stats", response_model=StatsResponse)
async def get_player_stats(
    user_id: str,
    data: GameDataDep,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> StatsResponse:
    """Collection statistics for the dashboard."""
    state = await load_player_state(session, user_id, data.config)
    stats = collection_stats(state.inventory, data.teams, data.config.cards_per_team)
    return StatsResponse(
        user_id=user_id,
        total_cards=stats.total_cards,
        unique_teams=stats.unique_teams,
        completion=stats.completion,
        cards_by_team=stats.cards_by_team,
    )


@router.delete("/{user_id}", response_model=ResetResponse)
async def reset_player(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ResetResponse:
    """
    Delete a player's saved state.

    The next request for this player starts from the defaults.
    """
    async with player_locks.hold(user_id):
        deleted = await delete_player_state(session, user_id)
        await session.commit()

    message = "Progress reset." if deleted else "No saved progress found."
    return ResetResponse(user_id=user_id, deleted=deleted, message=message)
