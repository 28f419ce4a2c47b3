from collections.abc import Sequence

from cardalbum.config import FALLBACK_FIRST_NAME, FALLBACK_LAST_NAME
from cardalbum.services.random_source import RandomSource, resolve_rng


def generate_name(
    first_names: Sequence[str],
    last_names: Sequence[str],
    rng: RandomSource | None = None,
) -> str:
    """
    Random "First Last" player name.

    Empty lists fall back to fixed tokens, so this never fails.
    """
    rng = resolve_rng(rng)
    first = rng.choice(first_names) if first_names else FALLBACK_FIRST_NAME
    last = rng.choice(last_names) if last_names else FALLBACK_LAST_NAME
    return f"{first} {last}"
