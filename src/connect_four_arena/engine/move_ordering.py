"""
Move ordering for alpha-beta search.

Good move ordering is critical for alpha-beta pruning efficiency: searching
the strongest reply first closes the window sooner. Children are ranked by
the static evaluation of the position they lead to, best for the side to
move first. Ties keep the center-out order of Board.legal_moves().
"""

from connect_four_arena.engine.evaluator import Evaluator
from connect_four_arena.game.bitboard import Move
from connect_four_arena.game.board import Board


def side_sign(board: Board) -> int:
    """+1 when red moves, -1 when yellow moves (red-positive scores)."""
    return 1 if board.red_to_play else -1


def score_children(board: Board, evaluator: Evaluator) -> list[tuple[int, Move, Board]]:
    """
    Expand, score and sort the children of a non-terminal board.

    Each score is the child's static evaluation from the mover's side, which
    is also its negamax value when the child is a leaf.

    Returns:
        List of (score, move, child board), most promising for the mover first
    """
    sign = side_sign(board)
    scored = []
    for move in board.legal_moves():
        child = board.do_move(move)
        scored.append((sign * evaluator.eval(child), move, child))

    # sort() is stable, so equal scores stay center-out
    scored.sort(key=lambda item: item[0], reverse=True)
    return scored


def order_children(board: Board, evaluator: Evaluator) -> list[tuple[Move, Board]]:
    """(move, child board) pairs in search order."""
    return [(move, child) for _, move, child in score_children(board, evaluator)]
