"""
Packed bitboard for one player's stones.

Layout: one 64-bit word, 7 lanes of 8 bits (lane x = bits 8x..8x+7), one lane
per column. Only the low 6 bits of a lane are real cells, row 0 at the
bottom. Bit 6 only shows up transiently in the height computation, bit 7 is
padding.

    bit index = 8 * column + row
"""

from dataclasses import dataclass


COLUMN_COUNT = 7
ROW_COUNT = 6
LANE_BITS = 8
CELL_COUNT = COLUMN_COUNT * ROW_COUNT

LANE_MASK = 0xFF
# All 42 real cells set
FULL_BOARD = 0x3F3F3F3F3F3F3F


@dataclass(frozen=True)
class Move:
    """A column plus the row the disc lands on (the column's current height)."""
    column: int
    row: int

    def bit(self) -> int:
        return 1 << (LANE_BITS * self.column + self.row)


@dataclass(frozen=True)
class BitBoard:
    data: int = 0

    def occupied_at(self, cell: int) -> bool:
        """
        Test a cell given as a row-major index in display order.

        Cell 0 is the top-left cell, cell 41 the bottom-right one.
        """
        row_from_top = cell // COLUMN_COUNT
        column = cell - COLUMN_COUNT * row_from_top
        index = (ROW_COUNT - 1 - row_from_top) + LANE_BITS * column
        return self.data & (1 << index) != 0

    def lane(self, column: int) -> int:
        return (self.data >> (LANE_BITS * column)) & LANE_MASK

    def mirror(self) -> 'BitBoard':
        """Reflect horizontally: lane i <-> lane 6 - i."""
        swapped = int.from_bytes(self.data.to_bytes(8, 'little'), 'big')
        return BitBoard(swapped >> LANE_BITS)

    def with_move(self, column: int, row: int) -> 'BitBoard':
        # No occupancy check: callers go through Board's move generation
        return BitBoard(self.data | (1 << (LANE_BITS * column + row)))

    def count(self) -> int:
        return self.data.bit_count()

    @classmethod
    def from_cells(cls, cells) -> 'BitBoard':
        """Build from an iterable of (column, row) pairs."""
        data = 0
        for column, row in cells:
            data |= 1 << (LANE_BITS * column + row)
        return cls(data)


# Window shapes anchored at (column 0, row 0)
_VERTICAL = 0x0F
_HORIZONTAL = 0x01010101
_RISING = 0x08040201    # (x, y), (x+1, y+1), ...
_FALLING = 0x01020408   # (x, y+3), (x+1, y+2), ...


def generate_win_masks() -> tuple[int, ...]:
    """
    Enumerate every 4-in-a-row window on the 7x6 grid.

    21 vertical + 24 horizontal + 12 rising + 12 falling = 69 masks.
    """
    masks = []
    for x in range(COLUMN_COUNT):
        for y in range(ROW_COUNT):
            shift = LANE_BITS * x + y
            if y < ROW_COUNT - 3:
                masks.append(_VERTICAL << shift)
            if x < COLUMN_COUNT - 3:
                masks.append(_HORIZONTAL << shift)
            if y < ROW_COUNT - 3 and x < COLUMN_COUNT - 3:
                masks.append(_RISING << shift)
                masks.append(_FALLING << shift)
    return tuple(masks)


WIN_MASKS = generate_win_masks()


def mask_to_move(mask: int) -> Move:
    """Convert a single-bit mask back into a (column, row) Move."""
    index = mask.bit_length() - 1
    column, row = divmod(index, LANE_BITS)
    return Move(column, row)
