"""
Concrete move-selection policies.

All of them honor the Strategy contract; composition (Defensive, WinOrBlock)
wraps another Strategy instead of subclassing it.
"""

from typing import Optional

import numpy as np

from connect_four_arena.engine.alphabeta import AlphaBetaEngine
from connect_four_arena.engine.evaluator import Evaluator
from connect_four_arena.game.bitboard import Move, COLUMN_COUNT
from connect_four_arena.game.board import Board
from connect_four_arena.strategy.base import Strategy, require_moves, random_choice


class EvaluatorStrategy(Strategy):
    """
    1-ply greedy policy over an Evaluator.

    Red takes the child with the highest red-positive score, yellow the
    lowest. Ties go to the first move in center-out order.
    """

    def __init__(self, evaluator: Evaluator, name: str = "Greedy"):
        self.evaluator = evaluator
        self.name = name

    def select_move(self, board: Board, last_move: Optional[Move] = None) -> Move:
        moves = require_moves(board)
        sign = 1 if board.red_to_play else -1

        best_move = moves[0]
        best_score = None
        for move in moves:
            score = sign * self.evaluator.eval(board.do_move(move))
            if best_score is None or score > best_score:
                best_score = score
                best_move = move
        return best_move

    def display_name(self) -> str:
        return self.name


class MinimaxStrategy(Strategy):
    """Depth-bounded alpha-beta search; owns its engine and position cache."""

    def __init__(
        self,
        evaluator: Evaluator,
        depth: int = 6,
        use_cache: bool = True,
        rng: Optional[np.random.Generator] = None
    ):
        self.engine = AlphaBetaEngine(evaluator, depth=depth, use_cache=use_cache, rng=rng)

    @property
    def depth(self) -> int:
        return self.engine.depth

    def select_move(self, board: Board, last_move: Optional[Move] = None) -> Move:
        return self.engine.search(board).best_move

    def display_name(self) -> str:
        return f"Minimax({self.engine.depth})"


class RandomStrategy(Strategy):
    """Uniformly random legal move."""

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()

    def select_move(self, board: Board, last_move: Optional[Move] = None) -> Move:
        return random_choice(require_moves(board), self.rng)

    def display_name(self) -> str:
        return "Random"


class OffsetStrategy(Strategy):
    """
    Pattern follower: answer the opponent's last move shifted by (dx, dy).

    Falls back to a random legal move when the shifted cell is not playable
    or there is no previous move.
    """

    def __init__(self, dx: int = 1, dy: int = 0, rng: Optional[np.random.Generator] = None):
        self.dx = dx
        self.dy = dy
        self.rng = rng if rng is not None else np.random.default_rng()

    def select_move(self, board: Board, last_move: Optional[Move] = None) -> Move:
        moves = require_moves(board)
        if last_move is not None:
            target = Move(last_move.column + self.dx, last_move.row + self.dy)
            if target in moves:
                return target
        return random_choice(moves, self.rng)

    def display_name(self) -> str:
        return f"Offset({self.dx},{self.dy})"


class DefensiveStrategy(Strategy):
    """
    Ask the inner strategy what the opponent would play here, and take that cell.

    Uses Board.flipped(), so the inner strategy needs no defensive variant of
    its own. The flipped board has the same legal moves as the real one.
    """

    def __init__(self, inner: Strategy):
        self.inner = inner

    def select_move(self, board: Board, last_move: Optional[Move] = None) -> Move:
        require_moves(board)
        return self.inner.select_move(board.flipped(), last_move)

    def display_name(self) -> str:
        return f"Defensive({self.inner.display_name()})"


class CenterFirstStrategy(Strategy):
    """Column 3 while it is open, otherwise the lowest-numbered open column."""

    def select_move(self, board: Board, last_move: Optional[Move] = None) -> Move:
        require_moves(board)
        center = board.column(COLUMN_COUNT // 2)
        if center is not None:
            return center
        for column in range(COLUMN_COUNT):
            move = board.column(column)
            if move is not None:
                return move
        raise ValueError("No valid moves available")

    def display_name(self) -> str:
        return "CenterFirst"
