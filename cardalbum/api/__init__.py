from cardalbum.api.album import router as album_router
from cardalbum.api.health import router as health_router
from cardalbum.api.packs import router as packs_router
from cardalbum.api.players import router as players_router
from cardalbum.api.teams import router as teams_router

__all__ = [
    "album_router",
    "health_router",
    "packs_router",
    "players_router",
    "teams_router",
]
