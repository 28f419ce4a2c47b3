"""Tests for database CRUD operations."""

import logging
from datetime import date

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cardalbum.db.operations import (
    card_from_dict,
    card_to_dict,
    delete_player_state,
    get_player_row,
    load_player_state,
    row_to_state,
    save_player_state,
)
from cardalbum.models.album import AlbumState
from cardalbum.models.card import Card
from cardalbum.models.db import PlayerStateDB
from cardalbum.models.game_config import GameConfig
from cardalbum.models.player_state import PlayerState
from cardalbum.models.rarity import Rarity


@pytest.fixture
async def session(async_engine) -> AsyncSession:
    """Provide a database session for tests."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


def _card(card_id: int, team: str = "Yankees", number: int = 5) -> Card:
    return Card(
        id=card_id,
        team=team,
        league="MLB",
        number=number,
        rarity=Rarity.EPIC,
        player_name="John Doe",
    )


@pytest.fixture
def saved_state() -> PlayerState:
    return PlayerState(
        coins=250,
        inventory=(_card(1), _card(2, number=7), _card(3, team="Lakers", number=1)),
        card_id_counter=4,
        redeemed_codes=frozenset({"TEST-CODE", "NBA-RARE"}),
        last_login=date(2024, 3, 1),
        album=AlbumState(placements={("Yankees", 5): 1}),
    )


class TestCardSerialization:
    def test_card_dict(self) -> None:
        assert card_to_dict(_card(1)) == {
            "id": 1,
            "team": "Yankees",
            "league": "MLB",
            "number": 5,
            "rarity": "epic",
            "playerName": "John Doe",
        }

    def test_card_from_dict(self) -> None:
        assert card_from_dict(card_to_dict(_card(9))) == _card(9)

    @pytest.mark.parametrize(
        "raw",
        [
            "not a card",
            {"team": "Yankees", "number": 5, "rarity": "common"},
            {"id": 1, "team": "Yankees", "number": "five", "rarity": "common"},
            {"id": 1, "team": "Yankees", "number": 5, "rarity": "mythic"},
        ],
    )
    def test_malformed_card(self, raw: object) -> None:
        with pytest.raises(ValueError):
            card_from_dict(raw)


class TestPlayerStateOperations:
    async def test_unknown_player_gets_defaults(
        self, session: AsyncSession, game_config: GameConfig
    ) -> None:
        state = await load_player_state(session, "new-user", game_config)

        assert state == PlayerState.new(game_config)
        assert await get_player_row(session, "new-user") is None

    async def test_save_and_load(
        self, session: AsyncSession, game_config: GameConfig, saved_state: PlayerState
    ) -> None:
        await save_player_state(session, "user-1", saved_state)
        await session.commit()

        loaded = await load_player_state(session, "user-1", game_config)

        assert loaded.coins == 250
        assert loaded.inventory == saved_state.inventory
        assert loaded.card_id_counter == 4
        assert loaded.redeemed_codes == frozenset({"TEST-CODE", "NBA-RARE"})
        assert loaded.last_login == date(2024, 3, 1)
        assert loaded.album.placements == {("Yankees", 5): 1}

    async def test_save_updates_existing_row(
        self, session: AsyncSession, game_config: GameConfig, saved_state: PlayerState
    ) -> None:
        first = await save_player_state(session, "user-1", saved_state)
        second = await save_player_state(session, "user-1", PlayerState(coins=7))
        await session.commit()

        assert first.id == second.id
        loaded = await load_player_state(session, "user-1", game_config)
        assert loaded.coins == 7
        assert loaded.inventory == ()

    async def test_players_are_isolated(
        self, session: AsyncSession, game_config: GameConfig, saved_state: PlayerState
    ) -> None:
        await save_player_state(session, "user-1", saved_state)
        await session.commit()

        other = await load_player_state(session, "user-2", game_config)
        assert other.coins == 500

    async def test_delete(
        self, session: AsyncSession, game_config: GameConfig, saved_state: PlayerState
    ) -> None:
        await save_player_state(session, "user-1", saved_state)
        await session.commit()

        assert await delete_player_state(session, "user-1") is True
        await session.commit()

        assert await get_player_row(session, "user-1") is None
        assert await load_player_state(session, "user-1", game_config) == (
            PlayerState.new(game_config)
        )

    async def test_delete_missing(self, session: AsyncSession) -> None:
        assert await delete_player_state(session, "nobody") is False


class TestRowToState:
    def _row(self, **overrides: object) -> PlayerStateDB:
        fields: dict[str, object] = {
            "user_id": "user-1",
            "coins": 120,
            "card_id_counter": 3,
            "inventory": [card_to_dict(_card(1)), card_to_dict(_card(2, number=6))],
            "redeemed_codes": ["TEST-CODE"],
            "album": [],
            "last_login": "2024-03-01",
        }
        fields.update(overrides)
        return PlayerStateDB(**fields)

    def test_well_formed_row(self, game_config: GameConfig) -> None:
        state = row_to_state(self._row(), game_config)

        assert state.coins == 120
        assert [c.id for c in state.inventory] == [1, 2]
        assert state.last_login == date(2024, 3, 1)

    def test_malformed_inventory(self, game_config: GameConfig, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="cardalbum.db.operations"):
            state = row_to_state(self._row(inventory="garbage"), game_config)

        assert state.inventory == ()
        assert state.coins == 120
        assert "Inventory" in caplog.text

    def test_unreadable_cards_dropped(self, game_config: GameConfig) -> None:
        inventory = [card_to_dict(_card(1)), {"id": "x"}, 42, card_to_dict(_card(1))]
        state = row_to_state(self._row(inventory=inventory), game_config)

        assert [c.id for c in state.inventory] == [1]

    def test_malformed_coins(self, game_config: GameConfig) -> None:
        state = row_to_state(self._row(coins="lots"), game_config)
        assert state.coins == 500

    def test_malformed_redeemed_codes(self, game_config: GameConfig) -> None:
        state = row_to_state(self._row(redeemed_codes={"a": 1}), game_config)
        assert state.redeemed_codes == frozenset()

    def test_redeemed_codes_normalized(self, game_config: GameConfig) -> None:
        state = row_to_state(self._row(redeemed_codes=[" test-code ", "", 3]), game_config)
        assert state.redeemed_codes == frozenset({"TEST-CODE"})

    def test_malformed_last_login(self, game_config: GameConfig) -> None:
        state = row_to_state(self._row(last_login="yesterday"), game_config)
        assert state.last_login is None

    def test_counter_raised_above_inventory(self, game_config: GameConfig) -> None:
        """A counter behind the inventory would reissue existing ids."""
        state = row_to_state(self._row(card_id_counter=1), game_config)
        assert state.card_id_counter == 3

    def test_malformed_counter(self, game_config: GameConfig) -> None:
        state = row_to_state(self._row(card_id_counter=None), game_config)
        assert state.card_id_counter == 3

    def test_invalid_album_placements_dropped(self, game_config: GameConfig) -> None:
        album = [
            {"team": "Yankees", "number": 5, "card_id": 1},
            {"team": "Yankees", "number": 6, "card_id": 1},
            {"team": "Yankees", "number": 9, "card_id": 2},
            {"team": "Yankees", "number": 6, "card_id": 99},
            {"team": "Yankees"},
        ]
        state = row_to_state(self._row(album=album), game_config)

        assert state.album.placements == {("Yankees", 5): 1}

    def test_malformed_album(self, game_config: GameConfig) -> None:
        state = row_to_state(self._row(album="nope"), game_config)
        assert state.album.placements == {}
