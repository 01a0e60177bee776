from connect_four_arena.game.bitboard import BitBoard, Move, WIN_MASKS, generate_win_masks
from connect_four_arena.game.board import Board, Outcome, COLUMN_ORDER

__all__ = [
    'BitBoard',
    'Move',
    'WIN_MASKS',
    'generate_win_masks',
    'Board',
    'Outcome',
    'COLUMN_ORDER',
]
