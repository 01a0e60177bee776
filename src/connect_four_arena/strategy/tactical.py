"""
Tactical safety net applied in front of every strategy.

Strategy:
1. If the side to move can complete a window, do it
2. If the opponent could complete a window next turn, block it
3. Otherwise ask the wrapped strategy
"""

from typing import Optional

from connect_four_arena.game.bitboard import Move, WIN_MASKS, mask_to_move
from connect_four_arena.game.board import Board
from connect_four_arena.strategy.base import Strategy, require_moves


def find_completion(board: Board, own: int, other: int) -> Optional[Move]:
    """
    First playable cell that completes a window holding 3 of `own` stones.

    The window must hold none of `other`'s stones, and the missing cell must
    sit exactly on top of its column.
    """
    for mask in WIN_MASKS:
        stones = own & mask
        if stones.bit_count() != 3 or other & mask:
            continue
        move = mask_to_move(mask ^ stones)
        if board.height(move.column) == move.row:
            return move
    return None


def best_move_wb(board: Board, strategy: Strategy, last_move: Optional[Move] = None) -> Move:
    """Win if possible, block if necessary, otherwise defer to `strategy`."""
    require_moves(board)
    mover, opponent = board.mover_bits()

    move = find_completion(board, mover, opponent)
    if move is not None:
        return move

    move = find_completion(board, opponent, mover)
    if move is not None:
        return move

    return strategy.select_move(board, last_move)


class WinOrBlock(Strategy):
    """Decorator form of best_move_wb; reports the wrapped strategy's name."""

    def __init__(self, inner: Strategy):
        self.inner = inner

    def select_move(self, board: Board, last_move: Optional[Move] = None) -> Move:
        return best_move_wb(board, self.inner, last_move)

    def display_name(self) -> str:
        return self.inner.display_name()


def with_tactics(strategy: Strategy) -> Strategy:
    """Wrap once; already wrapped strategies are returned as they are."""
    if isinstance(strategy, WinOrBlock):
        return strategy
    return WinOrBlock(strategy)
