"""
Album slot placement rules.

`can_place` is the occupancy-agnostic predicate: the holding area takes
any card, an album slot takes a card only if both team and number match.
`place_card` is the single authoritative operation: it checks occupancy
first, then the predicate, and returns one tagged outcome together with
the album state after the attempt.
"""

import logging
from collections.abc import Iterable
from enum import Enum

from cardalbum.models.album import (
    AlbumSlot,
    AlbumState,
    PlacementOutcome,
    PlacementResult,
    SlotKind,
)
from cardalbum.models.card import Card

logger = logging.getLogger(__name__)


class AlbumFilter(str, Enum):
    """Album view filters."""

    ALL = "all"
    PLACED = "placed"
    EMPTY = "empty"


def _as_int(value: int | str | None) -> int | None:
    # UI layers transport slot numbers as text
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _team_matches(card: Card, slot: AlbumSlot) -> bool:
    return card.team == slot.team


def _number_matches(card: Card, slot: AlbumSlot) -> bool:
    card_number = _as_int(card.number)
    return card_number is not None and card_number == _as_int(slot.number)


def can_place(card: Card, slot: AlbumSlot) -> bool:
    """
    Whether a card may go into a slot, ignoring occupancy.

    Holding area: always. Album slot: team AND number must match.
    Anything else: never.
    """
    if slot.kind is SlotKind.HOLDING:
        return True

    if slot.kind is SlotKind.ALBUM:
        return _number_matches(card, slot) and _team_matches(card, slot)

    return False


def placement_mismatch(card: Card, slot: AlbumSlot) -> PlacementOutcome | None:
    """
    Which half of the predicate fails for an album slot.

    Team is reported before number. Returns None when the card fits.
    """
    if slot.kind is SlotKind.HOLDING:
        return None
    if not _team_matches(card, slot):
        return PlacementOutcome.MISMATCH_TEAM
    if not _number_matches(card, slot):
        return PlacementOutcome.MISMATCH_NUMBER
    return None


def matching_slots(card: Card, slots: Iterable[AlbumSlot]) -> set[str]:
    """Ids of every empty album slot the card could be dropped on."""
    return {
        slot.slot_id
        for slot in slots
        if slot.kind is SlotKind.ALBUM and not slot.occupied and can_place(card, slot)
    }


def _message(outcome: PlacementOutcome, card: Card, slot: AlbumSlot) -> str:
    if outcome is PlacementOutcome.OCCUPIED:
        return f"Slot #{slot.number} for {slot.team} is already filled!"
    if outcome is PlacementOutcome.MISMATCH_TEAM:
        return f"Cannot place {card.team} card in {slot.team or 'this'} slot!"
    if outcome is PlacementOutcome.MISMATCH_NUMBER:
        return f"Card #{card.number} does not belong in slot #{slot.number}!"
    if slot.kind is SlotKind.HOLDING:
        return f"Returned {card.player_name} to your cards."
    return f"Placed {card.player_name} in slot #{slot.number}."


def place_card(card: Card, slot: AlbumSlot, album: AlbumState) -> PlacementResult:
    """
    Place a card into a slot.

    Outcomes are checked in order: OCCUPIED, MISMATCH_TEAM, MISMATCH_NUMBER.
    Dropping on the holding area always succeeds and frees the slot the
    card held. Occupancy is read from `album`, not from `slot.card_id`.
    A malformed album slot (no team or unreadable number) is rejected as a
    mismatch like any other.
    """
    if slot.kind is SlotKind.HOLDING:
        outcome = PlacementOutcome.PLACED
        return PlacementResult(outcome, album.without_card(card.id), _message(outcome, card, slot))

    number = _as_int(slot.number)
    occupant = None
    if slot.team is not None and number is not None:
        occupant = album.card_at(slot.team, number)
    if occupant is not None:
        outcome = PlacementOutcome.OCCUPIED
        return PlacementResult(outcome, album, _message(outcome, card, slot))

    mismatch = placement_mismatch(card, slot)
    if mismatch is not None:
        logger.debug("Rejected card %d for slot %s: %s", card.id, slot.slot_id, mismatch.value)
        return PlacementResult(mismatch, album, _message(mismatch, card, slot))

    outcome = PlacementOutcome.PLACED
    updated = album.with_placement(card.team, card.number, card.id)
    return PlacementResult(outcome, updated, _message(outcome, card, slot))


def filter_album_slots(
    slots: Iterable[AlbumSlot],
    mode: AlbumFilter = AlbumFilter.ALL,
    search: str = "",
    cards_by_id: dict[int, Card] | None = None,
) -> list[AlbumSlot]:
    """
    Filter an album view.

    `mode` keeps placed or empty slots. `search` matches case-insensitively
    against the player name of a placed slot, or the number of an empty one.
    """
    cards_by_id = cards_by_id or {}
    needle = search.strip().lower()
    result: list[AlbumSlot] = []

    for slot in slots:
        if mode is AlbumFilter.PLACED and not slot.occupied:
            continue
        if mode is AlbumFilter.EMPTY and slot.occupied:
            continue

        if needle:
            card = cards_by_id.get(slot.card_id) if slot.card_id is not None else None
            haystack = card.player_name.lower() if card else str(slot.number)
            if needle not in haystack:
                continue

        result.append(slot)

    return result
