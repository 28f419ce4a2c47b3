"""
Album API endpoints.

Album view per team, drop-target highlighting for a card being moved,
and card placement (into an album slot or back to the holding area).
"""

from dataclasses import replace
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from cardalbum.api.dependencies import CardResponse, GameDataDep, card_response
from cardalbum.db import load_player_state, save_player_state
from cardalbum.db.database import get_session
from cardalbum.models.album import HOLDING_AREA, AlbumSlot, PlacementOutcome
from cardalbum.models.card import Card
from cardalbum.models.failure import FailureKind, KnownError
from cardalbum.models.game_config import GameData
from cardalbum.models.player_state import PlayerState
from cardalbum.models.team import Team
from cardalbum.services.economy import team_cards
from cardalbum.services.player_locks import player_locks
from cardalbum.services.slot_placement import (
    AlbumFilter,
    filter_album_slots,
    matching_slots,
    place_card,
)

router = APIRouter(prefix="/players", tags=["album"])


class SlotResponse(BaseModel):
    """Response model for one album slot."""

    slot_id: str
    number: int
    card: CardResponse | None = None


class AlbumResponse(BaseModel):
    """Response model for a team album."""

    user_id: str
    team: str
    league: str
    slots: list[SlotResponse] = Field(default_factory=list)
    holding: list[CardResponse] = Field(
        default_factory=list,
        description="This team's cards not placed in the album",
    )
    placed_count: int = 0
    total_slots: int = 0


class MatchingSlotsResponse(BaseModel):
    user_id: str
    card_id: int
    slot_ids: list[str] = Field(default_factory=list)


class PlaceCardRequest(BaseModel):
    """Request model for moving a card."""

    card_id: int
    target: Literal["album", "holding"] = Field(
        default="album",
        description="Drop on an album slot, or back to the holding area",
    )
    team: str | None = Field(default=None, description="Slot team (album target only)")
    number: int | None = Field(default=None, description="Slot number (album target only)")


class PlacementResponse(BaseModel):
    """Response model for a placement attempt."""

    user_id: str
    card_id: int
    outcome: PlacementOutcome
    placed: bool
    slot_id: str
    message: str


def _require_card(state: PlayerState, card_id: int) -> Card:
    card = state.find_card(card_id)
    if card is None:
        raise KnownError(
            kind=FailureKind.NOT_FOUND,
            message=f"Card {card_id} is not in this player's inventory.",
            status_code=status.HTTP_404_NOT_FOUND,
        )
    return card


def _require_team(data: GameData, team: str) -> Team:
    found = data.team_by_name(team)
    if found is None:
        raise KnownError(
            kind=FailureKind.NOT_FOUND,
            message=f"Team '{team}' not found.",
            status_code=status.HTTP_404_NOT_FOUND,
        )
    return found


@router.get("/{user_id}/album/{team}", response_model=AlbumResponse)
async def get_album(
    user_id: str,
    team: str,
    data: GameDataDep,
    session: Annotated[AsyncSession, Depends(get_session)],
    mode: Annotated[AlbumFilter, Query(alias="filter")] = AlbumFilter.ALL,
    search: str = "",
) -> AlbumResponse:
    """
    Get a team's album.

    Slots can be narrowed to placed or empty ones, and searched by placed
    player name or slot number.
    """
    team_data = _require_team(data, team)
    state = await load_player_state(session, user_id, data.config)

    cards = {card.id: card for card in state.inventory}
    all_slots = state.album.slots_for_team(team, data.config.cards_per_team)
    shown = filter_album_slots(all_slots, mode, search, cards)

    placed_ids = state.album.placed_card_ids()
    holding = [c for c in team_cards(state.inventory, team) if c.id not in placed_ids]

    return AlbumResponse(
        user_id=user_id,
        team=team,
        league=team_data.league,
        slots=[
            SlotResponse(
                slot_id=slot.slot_id,
                number=int(slot.number or 0),
                card=card_response(cards[slot.card_id]) if slot.card_id in cards else None,
            )
            for slot in shown
        ],
        holding=[card_response(c) for c in holding],
        placed_count=sum(1 for slot in all_slots if slot.occupied),
        total_slots=len(all_slots),
    )


@router.get("/{user_id}/cards/{card_id}/matching-slots", response_model=MatchingSlotsResponse)
async def get_matching_slots(
    user_id: str,
    card_id: int,
    data: GameDataDep,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> MatchingSlotsResponse:
    """
    Empty album slots a card can be dropped on.

    Used to highlight valid drop targets while dragging.
    """
    state = await load_player_state(session, user_id, data.config)
    card = _require_card(state, card_id)
    slots = state.album.slots_for_team(card.team, data.config.cards_per_team)
    return MatchingSlotsResponse(
        user_id=user_id,
        card_id=card_id,
        slot_ids=sorted(matching_slots(card, slots)),
    )


@router.post("/{user_id}/album/place", response_model=PlacementResponse)
async def place_player_card(
    user_id: str,
    request: PlaceCardRequest,
    data: GameDataDep,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PlacementResponse:
    """
    Move a card into an album slot or back to the holding area.

    Rejected placements are normal outcomes (200) tagged OCCUPIED,
    MISMATCH_TEAM or MISMATCH_NUMBER; nothing is saved for them.
    """
    if request.target == "album" and (request.team is None or request.number is None):
        raise KnownError(
            kind=FailureKind.INVALID_INPUT,
            message="Album placement requires team and number.",
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    async with player_locks.hold(user_id):
        state = await load_player_state(session, user_id, data.config)
        card = _require_card(state, request.card_id)

        slot: AlbumSlot
        if request.target == "holding" or request.team is None or request.number is None:
            slot = HOLDING_AREA
        else:
            _require_team(data, request.team)
            if not 1 <= request.number <= data.config.cards_per_team:
                raise KnownError(
                    kind=FailureKind.INVALID_INPUT,
                    message=f"Slot number must be between 1 and {data.config.cards_per_team}.",
                    status_code=status.HTTP_400_BAD_REQUEST,
                )
            slot = state.album.slot(request.team, request.number)

        result = place_card(card, slot, state.album)
        if result.placed:
            await save_player_state(session, user_id, replace(state, album=result.album))
            await session.commit()

    return PlacementResponse(
        user_id=user_id,
        card_id=card.id,
        outcome=result.outcome,
        placed=result.placed,
        slot_id=slot.slot_id,
        message=result.message,
    )
