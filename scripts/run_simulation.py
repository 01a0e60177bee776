#!/usr/bin/env python3
"""
Run a strategy tournament and write one CSV row per game.

Examples:
    python scripts/run_simulation.py --strategies minimax offset greedy --count 10
    python scripts/run_simulation.py --mode field --strategies minimax random greedy --depth 4
    python scripts/run_simulation.py --show-game minimax greedy
"""

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

# Add src to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / 'src'))

from connect_four_arena.arena import BatchSettings, play, simulate_all, simulate_against_field, summarize
from connect_four_arena.config import SEARCH_CONFIG, SIMULATION_CONFIG
from connect_four_arena.strategy import STRATEGIES, build_strategy


def parse_args():
    ap = argparse.ArgumentParser(description="Simulate Connect Four strategies against each other")
    ap.add_argument('--strategies', nargs='+', default=SIMULATION_CONFIG['strategies'],
                    choices=sorted(STRATEGIES), help="Strategies taking part")
    ap.add_argument('--mode', choices=['all', 'field'], default=SIMULATION_CONFIG['mode'],
                    help="'all': every ordered pair; 'field': first strategy vs the rest, both seats")
    ap.add_argument('--count', type=int, default=SIMULATION_CONFIG['count'], help="Games per pairing")
    ap.add_argument('--batch-size', type=int, default=SIMULATION_CONFIG['batch_size'])
    ap.add_argument('--output', type=str, default=SIMULATION_CONFIG['output_path'])
    ap.add_argument('--depth', type=int, default=SEARCH_CONFIG['depth'], help="Minimax search depth")
    ap.add_argument('--no-cache', action='store_true', help="Disable the transposition table")
    ap.add_argument('--seed', type=int, default=None)
    ap.add_argument('--show-game', nargs=2, metavar=('RED', 'YELLOW'), default=None,
                    help="Play and print a single game instead of a tournament")
    ap.add_argument('--verbose', action='store_true')
    return ap.parse_args()


def main():
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    rng = np.random.default_rng(args.seed)
    options = {'depth': args.depth, 'use_cache': not args.no_cache}

    if args.show_game:
        red, yellow = (build_strategy(name, rng=rng, **options) for name in args.show_game)
        record = play(red, yellow, verbose=True)
        print(f"\nResult: {record.winner} after {record.move_count} moves")
        return

    strategies = [build_strategy(name, rng=rng, **options) for name in args.strategies]
    try:
        settings = BatchSettings(count=args.count, batch_size=args.batch_size)
    except ValueError as e:
        sys.exit(f"Invalid simulation settings: {e}")

    print("=" * 60)
    print(f"Strategies: {', '.join(s.display_name() for s in strategies)}")
    print(f"Mode={args.mode} | games per pairing={args.count} | output={args.output}")
    print("=" * 60)

    if args.mode == 'field':
        if len(strategies) < 2:
            sys.exit("--mode field needs at least two strategies")
        records = simulate_against_field(strategies[0], strategies[1:], settings, args.output)
    else:
        records = simulate_all(strategies, settings, args.output)

    print()
    for (red, yellow), counts in summarize(records).items():
        wins = ", ".join(f"{outcome}: {n}" for outcome, n in sorted(counts.items(), key=lambda kv: kv[0].value))
        print(f"{red:>16} vs {yellow:<16} {wins}")
    print(f"\n✓ {len(records)} games written to {args.output}")


if __name__ == "__main__":
    main()
