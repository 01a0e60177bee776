"""
Strategy registry.

Maps short names used on the command line and in SIMULATION_CONFIG to
configured Strategy instances.
"""

from typing import Optional

import numpy as np

from connect_four_arena.config import SEARCH_CONFIG, EVALUATOR_CONFIG, OFFSET_CONFIG
from connect_four_arena.engine.evaluator import WindowEvaluator
from connect_four_arena.strategy.base import Strategy
from connect_four_arena.strategy.strategies import (
    EvaluatorStrategy, MinimaxStrategy, RandomStrategy, OffsetStrategy,
    DefensiveStrategy, CenterFirstStrategy,
)


def _evaluator(options: dict) -> WindowEvaluator:
    return WindowEvaluator(options.get('weights', EVALUATOR_CONFIG['weights']))


def _build_minimax(rng, options):
    return MinimaxStrategy(
        _evaluator(options),
        depth=options.get('depth', SEARCH_CONFIG['depth']),
        use_cache=options.get('use_cache', SEARCH_CONFIG['use_cache']),
        rng=rng,
    )


def _build_greedy(rng, options):
    return EvaluatorStrategy(_evaluator(options))


def _build_random(rng, options):
    return RandomStrategy(rng=rng)


def _build_offset(rng, options):
    return OffsetStrategy(
        dx=options.get('dx', OFFSET_CONFIG['dx']),
        dy=options.get('dy', OFFSET_CONFIG['dy']),
        rng=rng,
    )


def _build_defensive(rng, options):
    return DefensiveStrategy(_build_greedy(rng, options))


def _build_center(rng, options):
    return CenterFirstStrategy()


STRATEGIES = {
    'minimax': _build_minimax,
    'greedy': _build_greedy,
    'random': _build_random,
    'offset': _build_offset,
    'defensive': _build_defensive,
    'center': _build_center,
}


def build_strategy(name: str, rng: Optional[np.random.Generator] = None, **options) -> Strategy:
    """
    Factory function returning a configured Strategy.

    Args:
        name: One of STRATEGIES (case-insensitive)
        rng: Shared random generator (a fresh one when omitted)
        **options: Overrides for the config defaults (depth, use_cache, weights, dx, dy)
    """
    builder = STRATEGIES.get(name.lower())
    if builder is None:
        raise ValueError(f"Unknown strategy: {name} (choose from {', '.join(STRATEGIES)})")
    if rng is None:
        rng = np.random.default_rng()
    return builder(rng, options)
