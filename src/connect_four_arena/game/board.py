"""
Connect Four position built from two packed bitboards.

Board: 6 rows x 7 columns
Win condition: 4 in a row (horizontal, vertical, or diagonal)
Red always moves first. Boards are immutable: every move returns a new Board,
so they can be shared, replayed and used as dictionary keys.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from connect_four_arena.game.bitboard import (
    BitBoard, Move, WIN_MASKS, FULL_BOARD,
    COLUMN_COUNT, ROW_COUNT, CELL_COUNT, LANE_BITS, LANE_MASK,
)


# Search center columns first to maximize alpha-beta pruning efficiency
COLUMN_ORDER = (3, 2, 4, 1, 5, 0, 6)

RED_COLOR = "\x1b[31m"
YELLOW_COLOR = "\x1b[33m"
NO_COLOR = "\x1b[0m"


class Outcome(Enum):
    """Game status reported by Board.win()."""
    NONE = 0
    RED = 1
    YELLOW = 2
    TIE = 3

    def __str__(self):
        return self.name.capitalize()


def _lowest_zero_bit(lane: int) -> int:
    # trailing zeros of (lane + 1) == number of filled cells from the bottom
    b = lane + 1
    return (b & -b).bit_length() - 1


def has_four(bits: int) -> bool:
    for mask in WIN_MASKS:
        if bits & mask == mask:
            return True
    return False


@dataclass(frozen=True)
class Board:
    red: BitBoard = BitBoard()
    yellow: BitBoard = BitBoard()
    red_to_play: bool = True

    @classmethod
    def empty(cls) -> 'Board':
        return cls()

    @property
    def occupied(self) -> int:
        return self.red.data | self.yellow.data

    @property
    def move_count(self) -> int:
        return self.occupied.bit_count()

    def height(self, column: int) -> int:
        lane = (self.occupied >> (LANE_BITS * column)) & LANE_MASK
        return _lowest_zero_bit(lane)

    def legal_moves(self) -> list[Move]:
        """
        Playable moves in center-out order (3, 2, 4, 1, 5, 0, 6).

        The order is a search heuristic; do not rely on left-to-right.
        """
        occupied = self.occupied
        moves = []
        for column in COLUMN_ORDER:
            height = _lowest_zero_bit((occupied >> (LANE_BITS * column)) & LANE_MASK)
            if height < ROW_COUNT:
                moves.append(Move(column, height))
        return moves

    def column(self, column: int) -> Optional[Move]:
        """Move for a single column, None if full or out of range."""
        if column < 0 or column >= COLUMN_COUNT:
            return None
        height = self.height(column)
        if height >= ROW_COUNT:
            return None
        return Move(column, height)

    def do_move(self, move: Move) -> 'Board':
        # Caller guarantees the move came from legal_moves()/column()
        if self.red_to_play:
            return Board(self.red.with_move(move.column, move.row), self.yellow, False)
        return Board(self.red, self.yellow.with_move(move.column, move.row), True)

    def win(self) -> Outcome:
        """Win is checked before tie: a winning last disc on a full board is a win."""
        if has_four(self.red.data):
            return Outcome.RED
        if has_four(self.yellow.data):
            return Outcome.YELLOW
        if self.occupied == FULL_BOARD:
            return Outcome.TIE
        return Outcome.NONE

    def is_terminal(self) -> bool:
        return self.win() is not Outcome.NONE

    def mirror(self) -> 'Board':
        return Board(self.red.mirror(), self.yellow.mirror(), self.red_to_play)

    def canonicalize(self) -> 'Board':
        """
        Representative of the mirror-symmetry class.

        Both bitboards are compared as one 128-bit value (red low, yellow
        high); the turn flag does not take part and is preserved.
        """
        mirrored = self.mirror()
        current = self.red.data + (self.yellow.data << 64)
        other = mirrored.red.data + (mirrored.yellow.data << 64)
        if other < current:
            return mirrored
        return self

    def flipped(self) -> 'Board':
        """
        Same discs, other side to move.

        Not a reachable position. Lets a strategy look at the board from the
        opponent's seat.
        """
        return Board(self.red, self.yellow, not self.red_to_play)

    def mover_bits(self) -> tuple[int, int]:
        """(side to move, opponent) raw bitboards."""
        if self.red_to_play:
            return self.red.data, self.yellow.data
        return self.yellow.data, self.red.data

    # --- Conversion helpers ---

    @classmethod
    def from_grid(cls, grid, red_to_play: Optional[bool] = None) -> 'Board':
        """
        Build a Board from a (6, 7) array in display order.

        Row 0 is the TOP of the board. Values: 1 = red, -1 = yellow, 0 = empty.
        If red_to_play is not given it is inferred from the disc counts.

        Raises:
            ValueError: on a wrong shape, an unknown cell value, a floating
                disc, or disc counts no game could reach (red must have the
                same number of discs as yellow, or one more)
        """
        grid = np.asarray(grid)
        if grid.shape != (ROW_COUNT, COLUMN_COUNT):
            raise ValueError(f"Expected grid of shape {(ROW_COUNT, COLUMN_COUNT)}, got {grid.shape}")
        if not np.isin(grid, (-1, 0, 1)).all():
            raise ValueError(f"Grid values must be 1, -1 or 0, got {sorted(set(np.unique(grid)) - {-1, 0, 1})}")

        red_cells = []
        yellow_cells = []
        for column in range(COLUMN_COUNT):
            filled = True
            for row in range(ROW_COUNT):
                value = grid[ROW_COUNT - 1 - row, column]
                if value == 0:
                    filled = False
                    continue
                if not filled:
                    raise ValueError(f"Floating disc in column {column} at row {row}")
                if value == 1:
                    red_cells.append((column, row))
                else:
                    yellow_cells.append((column, row))

        surplus = len(red_cells) - len(yellow_cells)
        if surplus not in (0, 1):
            raise ValueError(f"Red has {len(red_cells)} discs and yellow {len(yellow_cells)}")

        if red_to_play is None:
            red_to_play = surplus == 0

        return cls(BitBoard.from_cells(red_cells), BitBoard.from_cells(yellow_cells), red_to_play)

    def to_grid(self) -> np.ndarray:
        """Inverse of from_grid."""
        grid = np.zeros((ROW_COUNT, COLUMN_COUNT), dtype=np.int8)
        for cell in range(CELL_COUNT):
            row, column = divmod(cell, COLUMN_COUNT)
            if self.red.occupied_at(cell):
                grid[row, column] = 1
            elif self.yellow.occupied_at(cell):
                grid[row, column] = -1
        return grid

    def __str__(self):
        out = []
        for cell in range(CELL_COUNT):
            if cell % COLUMN_COUNT == 0:
                out.append("\n")
            red = self.red.occupied_at(cell)
            yellow = self.yellow.occupied_at(cell)
            if red and yellow:
                out.append(" E ")
            elif red:
                out.append(f" {RED_COLOR}● ")
            elif yellow:
                out.append(f" {YELLOW_COLOR}● ")
            else:
                out.append(f" {NO_COLOR}○ ")
        out.append(NO_COLOR)
        return "".join(out)
