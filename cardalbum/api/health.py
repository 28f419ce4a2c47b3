"""
Health check endpoints.

The service is ready once the player-state store answers and the game data
document (teams, promo codes, names, constants) loads. Without game data no
pack can be opened, so a bad document keeps the service out of rotation.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from cardalbum.db.database import get_session, ping
from cardalbum.services.game_data import GameDataError, get_game_data

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    database: str | None = None
    game_data: str | None = None
    teams: int | None = None
    promo_codes: int | None = None
    reason: str | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness check. Does not touch the database or the game data."""
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> HealthResponse:
    """
    Readiness check.

    Reports the player-state store and the game data separately. Returns 503
    with the reason when either is unavailable.
    """
    result = HealthResponse(status="ready")
    reasons: list[str] = []

    if await ping(session):
        result.database = "connected"
    else:
        result.database = "disconnected"
        reasons.append("Player state database is unreachable.")

    try:
        data = get_game_data()
    except GameDataError as e:
        logger.warning("Game data unavailable: %s", e.message)
        result.game_data = "unavailable"
        reasons.append(e.message if e.detail is None else f"{e.message} {e.detail}")
    else:
        result.game_data = "loaded"
        result.teams = len(data.teams)
        result.promo_codes = len(data.promo_codes)

    if reasons:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        result.status = "not ready"
        result.reason = " ".join(reasons)
    return result
