from connect_four_arena.strategy.base import Strategy
from connect_four_arena.strategy.strategies import (
    EvaluatorStrategy, MinimaxStrategy, RandomStrategy, OffsetStrategy,
    DefensiveStrategy, CenterFirstStrategy,
)
from connect_four_arena.strategy.tactical import WinOrBlock, best_move_wb, with_tactics
from connect_four_arena.strategy.registry import STRATEGIES, build_strategy

__all__ = [
    'Strategy',
    'EvaluatorStrategy',
    'MinimaxStrategy',
    'RandomStrategy',
    'OffsetStrategy',
    'DefensiveStrategy',
    'CenterFirstStrategy',
    'WinOrBlock',
    'best_move_wb',
    'with_tactics',
    'STRATEGIES',
    'build_strategy',
]
