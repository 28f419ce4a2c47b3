"""
Pack API endpoints.

Buying a standard pack with coins and redeeming sponsor promo codes.
Both append the new cards to the player's inventory.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from cardalbum.api.dependencies import (
    CardResponse,
    GameDataDep,
    RngDep,
    card_response,
)
from cardalbum.db import load_player_state, save_player_state
from cardalbum.db.database import get_session
from cardalbum.models.failure import FailureKind, RefusalError
from cardalbum.services.economy import buy_standard_pack, redeem_promo
from cardalbum.services.player_locks import player_locks

router = APIRouter(prefix="/players", tags=["packs"])


class PackResponse(BaseModel):
    """Response model for an opened pack."""

    user_id: str
    cards: list[CardResponse] = Field(default_factory=list)
    coins: int
    message: str = ""


class PromoRedeemRequest(BaseModel):
    """Request model for redeeming a promo code."""

    code: str = Field(
        default="",
        description="Promo code as typed; case and surrounding whitespace are ignored",
        examples=["COKE-NBA-2024"],
    )


class PromoPackResponse(PackResponse):
    """Response model for a redeemed promo pack."""

    code: str
    sponsor: str | None = None
    description: str | None = None
    color: str | None = None


@router.post("/{user_id}/packs/standard", response_model=PackResponse)
async def open_standard_pack(
    user_id: str,
    data: GameDataDep,
    rng: RngDep,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PackResponse:
    """
    Buy and open a standard pack.

    Returns 402 if the player cannot afford it.
    """
    async with player_locks.hold(user_id):
        state = await load_player_state(session, user_id, data.config)
        purchase = buy_standard_pack(state, data, rng)
        await save_player_state(session, user_id, purchase.state)
        await session.commit()

    message = "Pack opened!" if purchase.cards else "No cards could be generated for this pack."
    return PackResponse(
        user_id=user_id,
        cards=[card_response(c) for c in purchase.cards],
        coins=purchase.state.coins,
        message=message,
    )


@router.post("/{user_id}/promo", response_model=PromoPackResponse)
async def redeem_promo_code(
    user_id: str,
    request: PromoRedeemRequest,
    data: GameDataDep,
    rng: RngDep,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PromoPackResponse:
    """
    Redeem a promo code for a bonus pack.

    Rejections return 400 with the reason (EMPTY, INVALID or
    ALREADY_REDEEMED) in the failure detail. An accepted code is consumed
    even if its pack comes back empty.
    """
    async with player_locks.hold(user_id):
        state = await load_player_state(session, user_id, data.config)
        state, result = redeem_promo(state, request.code, data, rng)

        if result.rejection is not None:
            raise RefusalError(
                kind=FailureKind.PROMO_REJECTED,
                message=result.message,
                detail=result.rejection.value,
            )

        await save_player_state(session, user_id, state)
        await session.commit()

    return PromoPackResponse(
        user_id=user_id,
        cards=[card_response(c) for c in result.cards],
        coins=state.coins,
        message=result.message,
        code=result.code,
        sponsor=result.sponsor,
        description=result.description,
        color=result.promo.color if result.promo else None,
    )
