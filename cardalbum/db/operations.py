"""
Database CRUD operations.

Provides async functions for loading, saving and deleting player state.

Stored state is trusted to be client-local but not to be well-formed:
any field that cannot be read back falls back to its default with a
logged warning. Loading never raises on bad data.
"""

import logging
from datetime import date
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cardalbum.models.album import AlbumState
from cardalbum.models.card import Card
from cardalbum.models.db import PlayerStateDB
from cardalbum.models.game_config import GameConfig
from cardalbum.models.player_state import PlayerState
from cardalbum.models.rarity import Rarity
from cardalbum.services.promo_ledger import normalize_code

logger = logging.getLogger(__name__)


# --- Serialization ---


def card_to_dict(card: Card) -> dict[str, Any]:
    return {
        "id": card.id,
        "team": card.team,
        "league": card.league,
        "number": card.number,
        "rarity": card.rarity.value,
        "playerName": card.player_name,
    }


def card_from_dict(raw: Any) -> Card:
    """
    Rebuild a card from its stored form.

    Raises:
        ValueError: If the entry is not a well-formed card
    """
    if not isinstance(raw, dict):
        raise ValueError(f"Card entry is {type(raw).__name__}, expected object")
    try:
        return Card(
            id=int(raw["id"]),
            team=str(raw["team"]),
            league=str(raw.get("league", "")),
            number=int(raw["number"]),
            rarity=Rarity(raw["rarity"]),
            player_name=str(raw.get("playerName", "")),
        )
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed card entry: {e}") from e


def _load_inventory(raw: Any, user_id: str) -> tuple[Card, ...]:
    if not isinstance(raw, list):
        if raw is not None:
            logger.warning("Inventory for %s is malformed; starting empty", user_id)
        return ()

    cards: list[Card] = []
    seen: set[int] = set()
    for entry in raw:
        try:
            card = card_from_dict(entry)
        except ValueError as e:
            logger.warning("Dropping unreadable card for %s: %s", user_id, e)
            continue
        if card.id in seen:
            logger.warning("Dropping duplicate card id %d for %s", card.id, user_id)
            continue
        seen.add(card.id)
        cards.append(card)
    return tuple(cards)


def _load_int(raw: Any, default: int, label: str, user_id: str) -> int:
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    logger.warning("%s for %s is malformed; using %d", label, user_id, default)
    return default


def _load_redeemed(raw: Any, user_id: str) -> frozenset[str]:
    if not isinstance(raw, list):
        if raw is not None:
            logger.warning("Redeemed codes for %s are malformed; starting empty", user_id)
        return frozenset()
    return frozenset(normalize_code(c) for c in raw if isinstance(c, str) and c.strip())


def _load_last_login(raw: Any, user_id: str) -> date | None:
    if raw is None:
        return None
    try:
        return date.fromisoformat(str(raw))
    except ValueError:
        logger.warning("Last login for %s is malformed; bonus will be available", user_id)
        return None


def _load_album(raw: Any, inventory: tuple[Card, ...], user_id: str) -> AlbumState:
    if not isinstance(raw, list):
        if raw is not None:
            logger.warning("Album for %s is malformed; all cards returned to holding", user_id)
        return AlbumState()

    cards = {card.id: card for card in inventory}
    placements: dict[tuple[str, int], int] = {}
    placed: set[int] = set()
    for entry in raw:
        try:
            team = str(entry["team"])
            number = int(entry["number"])
            card_id = int(entry["card_id"])
        except (KeyError, TypeError, ValueError):
            logger.warning("Dropping unreadable album placement for %s", user_id)
            continue

        card = cards.get(card_id)
        # A placement must still satisfy the slot rule and single occupancy
        if card is None or card.team != team or card.number != number:
            logger.warning("Dropping invalid album placement %s#%d for %s", team, number, user_id)
            continue
        if (team, number) in placements or card_id in placed:
            continue
        placements[(team, number)] = card_id
        placed.add(card_id)

    return AlbumState(placements=placements)


def row_to_state(row: PlayerStateDB, config: GameConfig) -> PlayerState:
    """Convert a database row to a PlayerState, repairing malformed fields."""
    user_id = row.user_id
    inventory = _load_inventory(row.inventory, user_id)

    counter = _load_int(row.card_id_counter, 1, "Card id counter", user_id)
    # Never hand out an id already in the inventory
    high_water = max((card.id for card in inventory), default=0) + 1
    if counter < high_water:
        logger.warning(
            "Card id counter for %s behind inventory; raising to %d", user_id, high_water
        )
        counter = high_water

    return PlayerState(
        coins=_load_int(row.coins, config.starting_coins, "Coins", user_id),
        inventory=inventory,
        card_id_counter=counter,
        redeemed_codes=_load_redeemed(row.redeemed_codes, user_id),
        last_login=_load_last_login(row.last_login, user_id),
        album=_load_album(row.album, inventory, user_id),
    )


def _apply_state(row: PlayerStateDB, state: PlayerState) -> None:
    row.coins = state.coins
    row.card_id_counter = state.card_id_counter
    row.inventory = [card_to_dict(card) for card in state.inventory]
    row.redeemed_codes = sorted(state.redeemed_codes)
    row.album = [
        {"team": team, "number": number, "card_id": card_id}
        for (team, number), card_id in sorted(state.album.placements.items())
    ]
    row.last_login = state.last_login.isoformat() if state.last_login else None


# --- Player State Operations ---


async def get_player_row(session: AsyncSession, user_id: str) -> PlayerStateDB | None:
    """
    Get a player's saved state row.

    Returns None if the player has never saved.
    """
    result = await session.execute(select(PlayerStateDB).where(PlayerStateDB.user_id == user_id))
    return result.scalar_one_or_none()


async def load_player_state(
    session: AsyncSession, user_id: str, config: GameConfig
) -> PlayerState:
    """
    Load a player's state.

    Returns fresh default state for unknown players.
    """
    row = await get_player_row(session, user_id)
    if row is None:
        return PlayerState.new(config)
    return row_to_state(row, config)


async def save_player_state(
    session: AsyncSession, user_id: str, state: PlayerState
) -> PlayerStateDB:
    """
    Insert or update a player's state.

    If a row exists for the player, updates it. Otherwise creates one.
    """
    row = await get_player_row(session, user_id)
    if row is None:
        row = PlayerStateDB(user_id=user_id)
        session.add(row)

    _apply_state(row, state)
    await session.flush()
    return row


async def delete_player_state(session: AsyncSession, user_id: str) -> bool:
    """
    Delete a player's state.

    Returns True if deleted, False if not found.
    """
    row = await get_player_row(session, user_id)
    if row is None:
        return False

    await session.delete(row)
    return True
