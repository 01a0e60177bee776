"""
Static position evaluation.

Scores are red-positive: good for red is > 0, good for yellow is < 0.
Terminal positions map to +/-SCORE_WIN (or 0 for a tie), which is far outside
the range any heuristic sum can reach, so a forced win always beats a
heuristic advantage.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from connect_four_arena.game.bitboard import WIN_MASKS
from connect_four_arena.game.board import Board, Outcome


SCORE_WIN = 100000
SCORE_DRAW = 0
# Larger than any reachable score, with headroom so negating never matters
SCORE_INF = 1000000


class Evaluator(ABC):
    """Scores a Board from red's point of view."""

    @abstractmethod
    def eval(self, board: Board) -> int:
        pass

    def __call__(self, board: Board) -> int:
        return self.eval(board)


def terminal_score(outcome: Outcome) -> int:
    if outcome is Outcome.RED:
        return SCORE_WIN
    if outcome is Outcome.YELLOW:
        return -SCORE_WIN
    return SCORE_DRAW


@dataclass
class WindowCounts:
    """
    Number of live windows per player, indexed by stones in the window.

    red[k] = windows holding k red stones and no yellow stone (k = 0 unused).
    Windows holding both colors are dead and counted nowhere.
    """
    red: list[int]
    yellow: list[int]

    @classmethod
    def from_board(cls, board: Board) -> 'WindowCounts':
        red = [0] * 5
        yellow = [0] * 5
        red_bits = board.red.data
        yellow_bits = board.yellow.data
        for mask in WIN_MASKS:
            r = red_bits & mask
            y = yellow_bits & mask
            if r and not y:
                red[r.bit_count()] += 1
            elif y and not r:
                yellow[y.bit_count()] += 1
        return cls(red, yellow)


class WindowEvaluator(Evaluator):
    """
    Weighted count of partial lines.

    Args:
        weights: value of a live window holding 1, 2 and 3 stones
    """

    def __init__(self, weights=(1, 5, 100)):
        if len(weights) != 3:
            raise ValueError(f"Expected 3 window weights, got {len(weights)}")
        self.weights = tuple(int(w) for w in weights)

    def eval(self, board: Board) -> int:
        outcome = board.win()
        if outcome is not Outcome.NONE:
            return terminal_score(outcome)

        counts = WindowCounts.from_board(board)
        w1, w2, w3 = self.weights
        red = counts.red[3] * w3 + counts.red[2] * w2 + counts.red[1] * w1
        yellow = counts.yellow[3] * w3 + counts.yellow[2] * w2 + counts.yellow[1] * w1
        return red - yellow

    def __repr__(self):
        return f"WindowEvaluator(weights={self.weights})"
