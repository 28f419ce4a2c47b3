import random
from collections.abc import Sequence
from datetime import date
from typing import TypeVar

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cardalbum.api.dependencies import get_rng, get_today
from cardalbum.db.database import get_session
from cardalbum.main import app
from cardalbum.models.db import Base
from cardalbum.models.game_config import GameConfig, GameData, PlayerNames
from cardalbum.models.promo import PromoCode
from cardalbum.models.rarity import Rarity, RarityOdds
from cardalbum.models.team import Team
from cardalbum.services.game_data import get_game_data
from cardalbum.services.player_locks import player_locks

T = TypeVar("T")


class ScriptedRandom:
    """
    Deterministic random source.

    `random()` returns the scripted draws in order (0.0 once exhausted),
    `randint` returns scripted ints (the low bound once exhausted) and
    `choice` always picks the element at index `pick`.
    """

    def __init__(
        self,
        draws: Sequence[float] = (),
        ints: Sequence[int] = (),
        pick: int = 0,
    ) -> None:
        self.draws = list(draws)
        self.ints = list(ints)
        self.pick = pick
        self.random_calls = 0

    def random(self) -> float:
        self.random_calls += 1
        return self.draws.pop(0) if self.draws else 0.0

    def randint(self, a: int, b: int) -> int:
        return self.ints.pop(0) if self.ints else a

    def choice(self, seq: Sequence[T]) -> T:
        return seq[self.pick % len(seq)]


@pytest.fixture(autouse=True)
def clear_player_locks():
    """Locks are bound to the event loop they were first used on."""
    player_locks.clear()
    yield
    player_locks.clear()


@pytest.fixture
def scripted_rng() -> type[ScriptedRandom]:
    """Factory for scripted random sources."""
    return ScriptedRandom


@pytest.fixture
def test_team() -> Team:
    return Team(name="Test Team", league="MLB", icon="⚾", primary_color="#000000")


@pytest.fixture
def teams() -> list[Team]:
    return [
        Team(name="Yankees", league="MLB"),
        Team(name="Red Sox", league="MLB"),
        Team(name="Lakers", league="NBA"),
        Team(name="Bruins", league="NHL"),
    ]


@pytest.fixture
def game_config() -> GameConfig:
    return GameConfig(
        cards_per_team=300,
        starting_coins=500,
        daily_bonus=50,
        standard_pack_price=100,
        standard_pack_size=5,
        rarity_odds=RarityOdds(common=70, rare=20, epic=8, legendary=2),
    )


@pytest.fixture
def player_names() -> PlayerNames:
    return PlayerNames(first_names=("John", "Mike"), last_names=("Doe", "Smith"))


@pytest.fixture
def promo_catalog() -> dict[str, PromoCode]:
    return {
        "TEST-CODE": PromoCode(code="TEST-CODE", sponsor="Test", league="all", card_count=5),
        "NBA-RARE": PromoCode(
            code="NBA-RARE",
            sponsor="Hoops",
            league="NBA",
            card_count=3,
            guaranteed=Rarity.RARE,
        ),
        "NHL-EPIC": PromoCode(
            code="NHL-EPIC",
            sponsor="Ice",
            league="NHL",
            card_count=4,
            guaranteed=Rarity.EPIC,
        ),
        "CRICKET": PromoCode(code="CRICKET", sponsor="Nobody", league="IPL", card_count=5),
    }


@pytest.fixture
def game_data(
    teams: list[Team],
    game_config: GameConfig,
    player_names: PlayerNames,
    promo_catalog: dict[str, PromoCode],
) -> GameData:
    return GameData(
        teams=tuple(teams),
        promo_codes=promo_catalog,
        player_names=player_names,
        config=game_config,
    )


@pytest.fixture
def clock() -> dict[str, date]:
    """Mutable current day for the daily bonus."""
    return {"today": date(2024, 3, 1)}


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def client(async_engine, game_data: GameData, clock: dict[str, date]):
    """Provide an async test client with overridden session, data, rng and clock."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session():
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    rng = random.Random(42)

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_game_data] = lambda: game_data
    app.dependency_overrides[get_rng] = lambda: rng
    app.dependency_overrides[get_today] = lambda: clock["today"]

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
