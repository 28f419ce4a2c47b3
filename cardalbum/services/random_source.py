"""
Injectable random source.

Every rule that draws randomness takes an `rng` argument satisfying
`RandomSource`. `random.Random` satisfies it, so production code passes
nothing (and gets the module default) while tests pass scripted sources
to hit exact threshold boundaries.
"""

import random
from collections.abc import Sequence
from typing import Protocol, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """The subset of `random.Random` the rules engine uses."""

    def random(self) -> float:
        """Uniform float in [0.0, 1.0)."""
        ...

    def randint(self, a: int, b: int) -> int:
        """Uniform integer in [a, b], both ends inclusive."""
        ...

    def choice(self, seq: Sequence[T]) -> T:
        """Uniformly chosen element of a non-empty sequence."""
        ...


_default_rng = random.Random()


def resolve_rng(rng: RandomSource | None) -> RandomSource:
    """Return `rng`, or the shared module-level generator when None."""
    return rng if rng is not None else _default_rng
