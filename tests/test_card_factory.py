"""Tests for card assembly."""

import random

from cardalbum.models.rarity import Rarity
from cardalbum.models.team import Team
from cardalbum.services.card_factory import make_card


class TestMakeCard:
    def test_card_fields(self, test_team: Team, scripted_rng) -> None:
        card = make_card(test_team, 300, Rarity.EPIC, "John Doe", 42, scripted_rng(ints=[17]))

        assert card.id == 42
        assert card.team == "Test Team"
        assert card.league == "MLB"
        assert card.number == 17
        assert card.rarity == Rarity.EPIC
        assert card.player_name == "John Doe"

    def test_number_within_range(self, test_team: Team) -> None:
        rng = random.Random(5)
        numbers = {
            make_card(test_team, 10, Rarity.COMMON, "A B", i, rng).number for i in range(500)
        }
        assert numbers <= set(range(1, 11))
        assert numbers == set(range(1, 11))

    def test_single_number_team(self, test_team: Team) -> None:
        card = make_card(test_team, 1, Rarity.COMMON, "A B", 1)
        assert card.number == 1

    def test_uses_team_league_at_draw_time(self, scripted_rng) -> None:
        team = Team(name="Lakers", league="NBA")
        card = make_card(team, 300, Rarity.RARE, "A B", 7, scripted_rng(ints=[300]))
        assert (card.team, card.league, card.number) == ("Lakers", "NBA", 300)
