from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from connect_four_arena.game.bitboard import Move
from connect_four_arena.game.board import Board, Outcome


class Strategy(ABC):
    """
    Move-selection policy.

    select_move() gets a non-terminal Board and an optional hint (the
    opponent's previous move, None on the first move) and returns a Move
    from board.legal_moves() for the side to move. It never mutates the Board.
    """

    @abstractmethod
    def select_move(self, board: Board, last_move: Optional[Move] = None) -> Move:
        pass

    @abstractmethod
    def display_name(self) -> str:
        pass

    def __repr__(self):
        return f"<{type(self).__name__} {self.display_name()}>"


def require_moves(board: Board) -> list[Move]:
    """Legal moves, or ValueError when the game is already over."""
    moves = board.legal_moves()
    if not moves or board.win() is not Outcome.NONE:
        raise ValueError("No valid moves available")
    return moves


def random_choice(moves: list[Move], rng: np.random.Generator) -> Move:
    return moves[int(rng.integers(len(moves)))]
