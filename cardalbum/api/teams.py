"""
Team API endpoints.

Lists the configured teams, optionally filtered by league.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from cardalbum.api.dependencies import GameDataDep
from cardalbum.config import ALL_LEAGUES

router = APIRouter(prefix="/teams", tags=["teams"])


class TeamResponse(BaseModel):
    """Response model for a team."""

    name: str
    league: str
    icon: str = ""
    primary_color: str = ""
    scheme: str = ""


class TeamListResponse(BaseModel):
    league: str
    teams: list[TeamResponse]
    count: int


@router.get("", response_model=TeamListResponse)
async def list_teams(data: GameDataDep, league: str = ALL_LEAGUES) -> TeamListResponse:
    """List teams in a league, or every team for "all"."""
    teams = [
        TeamResponse(
            name=t.name,
            league=t.league,
            icon=t.icon,
            primary_color=t.primary_color,
            scheme=t.scheme,
        )
        for t in data.teams_for_league(league)
    ]
    return TeamListResponse(league=league, teams=teams, count=len(teams))
