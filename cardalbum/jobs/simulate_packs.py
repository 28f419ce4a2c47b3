"""
Simulate pack openings against the game data.

Opens a number of packs without touching any player state and reports
the rarity distribution, to sanity-check configured odds and promo
guarantees before shipping a data change.

    python -m cardalbum.jobs.simulate_packs --packs 1000 --promo PEPSI-MLB-RARE
"""

import argparse
import logging
import random
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

from cardalbum.config import ALL_LEAGUES
from cardalbum.models.game_config import GameData
from cardalbum.models.rarity import RARITY_ORDER, Rarity
from cardalbum.services.game_data import load_game_data
from cardalbum.services.pack_generator import generate_pack
from cardalbum.services.promo_ledger import normalize_code
from cardalbum.services.random_source import RandomSource

logger = logging.getLogger(__name__)


@dataclass
class SimulationReport:
    """Rarity counts over a batch of simulated packs."""

    packs: int = 0
    cards: int = 0
    by_rarity: Counter[Rarity] = field(default_factory=Counter)
    final_card_by_rarity: Counter[Rarity] = field(default_factory=Counter)

    def share(self, rarity: Rarity) -> float:
        """Percentage of all cards with a rarity."""
        if self.cards == 0:
            return 0.0
        return self.by_rarity[rarity] / self.cards * 100


def simulate_packs(
    data: GameData,
    packs: int,
    promo_code: str | None = None,
    rng: RandomSource | None = None,
) -> SimulationReport:
    """
    Open `packs` packs and count rarities.

    Uses the promo's size, league and guarantee when a code is given,
    otherwise the standard pack.

    Raises:
        ValueError: If the promo code is not in the catalog
    """
    count = data.config.standard_pack_size
    league: str | None = ALL_LEAGUES
    guaranteed: Rarity | None = None

    if promo_code is not None:
        promo = data.promo_codes.get(normalize_code(promo_code))
        if promo is None:
            raise ValueError(f"Unknown promo code: {promo_code}")
        count, league, guaranteed = promo.card_count, promo.league, promo.guaranteed

    report = SimulationReport()
    next_id = 1
    for _ in range(packs):
        pack = generate_pack(
            count, league, guaranteed, data.teams, data.config, data.player_names, next_id, rng
        )
        next_id = pack.next_card_id
        report.packs += 1
        report.cards += len(pack.cards)
        report.by_rarity.update(card.rarity for card in pack.cards)
        if pack.cards:
            report.final_card_by_rarity[pack.cards[-1].rarity] += 1

    return report


def format_report(report: SimulationReport) -> str:
    lines = [f"{report.packs} packs, {report.cards} cards"]
    for rarity in RARITY_ORDER:
        lines.append(
            f"  {rarity.value:<10} {report.by_rarity[rarity]:>7}  {report.share(rarity):5.1f}%"
            f"  (final card: {report.final_card_by_rarity[rarity]})"
        )
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Simulate pack openings")
    parser.add_argument("--packs", type=int, default=1000, help="Number of packs to open")
    parser.add_argument("--promo", default=None, help="Simulate a promo code's pack instead")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible runs")
    parser.add_argument("--data", type=Path, default=None, help="Game data JSON path")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    data = load_game_data(args.data)
    report = simulate_packs(data, args.packs, args.promo, random.Random(args.seed))
    logger.info("Simulation complete: %d packs", report.packs)
    print(format_report(report))


if __name__ == "__main__":
    main()
