"""Tests for rarity rolls."""

import random

import pytest

from cardalbum.models.rarity import Rarity, RarityOdds
from cardalbum.services.rarity_model import (
    rarity_for_draw,
    roll_rarity,
    roll_rarity_guaranteed,
)

DEFAULT_ODDS = RarityOdds(common=70, rare=20, epic=8, legendary=2)


class _NoDraws:
    """Random source that fails if a draw is attempted."""

    def random(self) -> float:
        raise AssertionError("no draw expected")

    def randint(self, a: int, b: int) -> int:
        raise AssertionError("no draw expected")

    def choice(self, seq):  # type: ignore[no-untyped-def]
        raise AssertionError("no draw expected")


class TestRarityForDraw:
    @pytest.mark.parametrize(
        ("draw", "expected"),
        [
            (0.0, Rarity.COMMON),
            (69.999, Rarity.COMMON),
            (70.0, Rarity.RARE),
            (89.999, Rarity.RARE),
            (90.0, Rarity.EPIC),
            (97.999, Rarity.EPIC),
            (98.0, Rarity.LEGENDARY),
            (99.999999, Rarity.LEGENDARY),
        ],
    )
    def test_threshold_boundaries(self, draw: float, expected: Rarity) -> None:
        """Cumulative thresholds ascend common, rare, epic, legendary."""
        assert rarity_for_draw(draw, DEFAULT_ODDS) == expected

    def test_zero_draw_is_common_when_common_weighted(self) -> None:
        assert rarity_for_draw(0.0, RarityOdds(common=1, rare=0, epic=0, legendary=99)) == (
            Rarity.COMMON
        )

    def test_zero_draw_falls_through_empty_buckets(self) -> None:
        """A zero-weight bucket never matches, even at draw 0."""
        assert rarity_for_draw(0.0, RarityOdds(common=0, rare=30, epic=0, legendary=70)) == (
            Rarity.RARE
        )
        assert rarity_for_draw(0.0, RarityOdds(common=0, rare=0, epic=5, legendary=95)) == (
            Rarity.EPIC
        )
        assert rarity_for_draw(0.0, RarityOdds(common=0, rare=0, epic=0, legendary=0)) == (
            Rarity.LEGENDARY
        )

    def test_shortfall_grows_legendary_bucket(self) -> None:
        """Weights summing below 100 leave the remainder to legendary."""
        odds = RarityOdds(common=10, rare=10, epic=10, legendary=0)
        assert rarity_for_draw(29.9, odds) == Rarity.EPIC
        assert rarity_for_draw(30.0, odds) == Rarity.LEGENDARY
        assert rarity_for_draw(99.0, odds) == Rarity.LEGENDARY

    def test_excess_makes_legendary_unreachable(self) -> None:
        odds = RarityOdds(common=60, rare=30, epic=20, legendary=5)
        assert rarity_for_draw(99.999, odds) == Rarity.EPIC


class TestRollRarity:
    def test_uses_scaled_draw(self, scripted_rng) -> None:
        """A draw of 0.x maps to x*100 on the threshold scale."""
        rng = scripted_rng(draws=[0.0, 0.5, 0.75, 0.95, 0.99])
        rolls = [roll_rarity(DEFAULT_ODDS, rng) for _ in range(5)]
        assert rolls == [
            Rarity.COMMON,
            Rarity.COMMON,
            Rarity.RARE,
            Rarity.EPIC,
            Rarity.LEGENDARY,
        ]

    def test_single_draw_per_roll(self, scripted_rng) -> None:
        rng = scripted_rng()
        roll_rarity(DEFAULT_ODDS, rng)
        assert rng.random_calls == 1

    def test_distribution_roughly_matches_odds(self) -> None:
        rng = random.Random(1234)
        counts = {r: 0 for r in Rarity}
        for _ in range(20_000):
            counts[roll_rarity(DEFAULT_ODDS, rng)] += 1

        assert 0.67 < counts[Rarity.COMMON] / 20_000 < 0.73
        assert 0.17 < counts[Rarity.RARE] / 20_000 < 0.23
        assert 0.06 < counts[Rarity.EPIC] / 20_000 < 0.10
        assert 0.01 < counts[Rarity.LEGENDARY] / 20_000 < 0.03

    def test_default_rng(self) -> None:
        assert roll_rarity(DEFAULT_ODDS) in set(Rarity)


class TestRollRarityGuaranteed:
    @pytest.mark.parametrize(
        ("draw", "expected"),
        [
            (0.0, Rarity.RARE),
            (0.69, Rarity.RARE),
            (0.71, Rarity.EPIC),
            (0.94, Rarity.EPIC),
            (0.96, Rarity.LEGENDARY),
        ],
    )
    def test_rare_floor_uses_skewed_table(
        self, scripted_rng, draw: float, expected: Rarity
    ) -> None:
        """Rare floor re-rolls 70 rare / 25 epic / 5 legendary."""
        assert roll_rarity_guaranteed(Rarity.RARE, scripted_rng(draws=[draw])) == expected

    def test_rare_floor_never_common(self) -> None:
        rng = random.Random(99)
        rolls = {roll_rarity_guaranteed(Rarity.RARE, rng) for _ in range(2_000)}
        assert Rarity.COMMON not in rolls

    @pytest.mark.parametrize("floor", [Rarity.COMMON, Rarity.EPIC, Rarity.LEGENDARY])
    def test_other_floors_returned_without_drawing(self, floor: Rarity) -> None:
        assert roll_rarity_guaranteed(floor, _NoDraws()) == floor
