import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cardalbum.api import (
    album_router,
    health_router,
    packs_router,
    players_router,
    teams_router,
)
from cardalbum.config import settings
from cardalbum.db.database import init_db
from cardalbum.models.failure import (
    KnownError,
    RefusalError,
    create_unknown_failure,
    finalize_response,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    await init_db()
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("cardalbum"),
    lifespan=lifespan,
)

app.include_router(album_router)
app.include_router(health_router)
app.include_router(packs_router)
app.include_router(players_router)
app.include_router(teams_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Render known failures through the failure envelope."""
    logger.info("Known failure (%s): %s", exc.kind.value, exc.message)
    response = finalize_response(exc.to_response())
    return JSONResponse(status_code=exc.status_code, content=response.model_dump(mode="json"))


@app.exception_handler(RefusalError)
async def refusal_error_handler(_request: Request, exc: RefusalError) -> JSONResponse:
    """Render rule refusals through the failure envelope."""
    response = finalize_response(exc.to_response())
    return JSONResponse(status_code=exc.status_code, content=response.model_dump(mode="json"))


@app.exception_handler(Exception)
async def unknown_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Classify anything unexpected instead of letting a raw 500 through."""
    logger.exception("Unhandled error: %s", type(exc).__name__)
    response = create_unknown_failure(exc)
    return JSONResponse(status_code=500, content=response.model_dump(mode="json"))
