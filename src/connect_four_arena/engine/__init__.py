"""
Alpha-beta search engine for Connect4.

This module contains the search components:
- Static window-counting evaluation
- Transposition table keyed by canonical positions
- Move ordering by static evaluation
- Alpha-beta negamax search with random tie-breaking at the root
"""

from connect_four_arena.engine.evaluator import (
    Evaluator, WindowEvaluator, WindowCounts, SCORE_WIN, SCORE_DRAW, SCORE_INF,
)
from connect_four_arena.engine.transposition_table import TranspositionTable, BoundType, TTEntry
from connect_four_arena.engine.move_ordering import order_children, score_children
from connect_four_arena.engine.alphabeta import AlphaBetaEngine, SearchResult

__all__ = [
    'Evaluator',
    'WindowEvaluator',
    'WindowCounts',
    'SCORE_WIN',
    'SCORE_DRAW',
    'SCORE_INF',
    'TranspositionTable',
    'BoundType',
    'TTEntry',
    'order_children',
    'score_children',
    'AlphaBetaEngine',
    'SearchResult',
]
