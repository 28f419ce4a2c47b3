"""
Album slots and placement state.

Each team has an album of numbered slots. A slot is EMPTY or OCCUPIED by
exactly one card. Cards not placed in any slot live in the holding area.

State machine per album slot:
    EMPTY -> OCCUPIED  (valid placement)
    OCCUPIED -> EMPTY  (card returned to the holding area)
"""

from dataclasses import dataclass, field
from enum import Enum

HOLDING_AREA_ID = "holding"


class SlotKind(str, Enum):
    """Kind of drop target."""

    HOLDING = "holding"
    ALBUM = "album"


@dataclass(frozen=True, slots=True)
class AlbumSlot:
    """
    A drop target.

    Attributes:
        kind: Holding area or team album slot
        team: Team the slot belongs to (album slots only)
        number: Slot number, 1..cards_per_team (album slots only)
        card_id: Id of the card occupying the slot, if any
    """

    kind: SlotKind
    team: str | None = None
    number: int | str | None = None
    card_id: int | None = None

    @property
    def slot_id(self) -> str:
        if self.kind is SlotKind.HOLDING:
            return HOLDING_AREA_ID
        return f"{self.team}#{self.number}"

    @property
    def occupied(self) -> bool:
        return self.card_id is not None

    @classmethod
    def holding_area(cls) -> "AlbumSlot":
        return cls(kind=SlotKind.HOLDING)


HOLDING_AREA = AlbumSlot.holding_area()


@dataclass(frozen=True)
class AlbumState:
    """
    Which card occupies which album slot, across all teams.

    Placements are keyed by (team, number). Immutable: every change returns
    a new AlbumState.
    """

    placements: dict[tuple[str, int], int] = field(default_factory=dict)

    def card_at(self, team: str, number: int) -> int | None:
        """Id of the card in a slot, or None if the slot is empty."""
        return self.placements.get((team, number))

    def slot_of(self, card_id: int) -> tuple[str, int] | None:
        """The (team, number) slot a card occupies, or None if unplaced."""
        for key, placed_id in self.placements.items():
            if placed_id == card_id:
                return key
        return None

    def slot(self, team: str, number: int) -> AlbumSlot:
        """Materialize one album slot with its current occupant."""
        return AlbumSlot(
            kind=SlotKind.ALBUM,
            team=team,
            number=number,
            card_id=self.card_at(team, number),
        )

    def slots_for_team(self, team: str, cards_per_team: int) -> list[AlbumSlot]:
        """All album slots for a team, numbered 1..cards_per_team."""
        return [self.slot(team, number) for number in range(1, cards_per_team + 1)]

    def placed_card_ids(self) -> set[int]:
        return set(self.placements.values())

    def with_placement(self, team: str, number: int, card_id: int) -> "AlbumState":
        """Copy with a card placed, freeing any slot it previously held."""
        placements = {k: v for k, v in self.placements.items() if v != card_id}
        placements[(team, number)] = card_id
        return AlbumState(placements=placements)

    def without_card(self, card_id: int) -> "AlbumState":
        """Copy with a card returned to the holding area."""
        placements = {k: v for k, v in self.placements.items() if v != card_id}
        return AlbumState(placements=placements)


class PlacementOutcome(str, Enum):
    """Tagged outcome of a placement attempt, in precedence order."""

    PLACED = "PLACED"
    OCCUPIED = "OCCUPIED"
    MISMATCH_TEAM = "MISMATCH_TEAM"
    MISMATCH_NUMBER = "MISMATCH_NUMBER"


@dataclass(frozen=True)
class PlacementResult:
    """Outcome of a placement together with the album state after it."""

    outcome: PlacementOutcome
    album: AlbumState
    message: str = ""

    @property
    def placed(self) -> bool:
        return self.outcome is PlacementOutcome.PLACED
