"""
Unit tests for Board: move generation, win/tie detection, symmetry.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / 'src'))

from connect_four_arena.game.bitboard import Move
from connect_four_arena.game.board import Board, Outcome, COLUMN_ORDER


def tie_grid():
    """
    Full board without any 4-in-a-row.

    Column types A (red on even rows from the bottom) and B (red on odd rows)
    laid out A A B B A A B.
    """
    grid = np.zeros((6, 7), dtype=np.int8)
    column_type = [0, 0, 1, 1, 0, 0, 1]
    for column in range(7):
        for row in range(6):
            grid[5 - row, column] = 1 if (row + column_type[column]) % 2 == 0 else -1
    return grid


def random_game(rng, max_moves=42):
    """Yield successive boards of a random legal game."""
    board = Board.empty()
    yield board
    for _ in range(max_moves):
        if board.win() is not Outcome.NONE:
            return
        moves = board.legal_moves()
        board = board.do_move(moves[int(rng.integers(len(moves)))])
        yield board


class TestMoveGeneration:
    def test_empty_board_center_out(self):
        moves = Board.empty().legal_moves()
        assert [m.column for m in moves] == list(COLUMN_ORDER)
        assert all(m.row == 0 for m in moves)

    def test_legal_moves_raise_height_by_one(self):
        rng = np.random.default_rng(7)
        for _ in range(20):
            for board in random_game(rng):
                if board.win() is not Outcome.NONE:
                    break
                for move in board.legal_moves():
                    assert board.height(move.column) == move.row < 6
                    child = board.do_move(move)
                    assert child.height(move.column) == move.row + 1
                    assert child.move_count == board.move_count + 1

    def test_full_column_is_skipped(self):
        board = Board.empty()
        for _ in range(6):
            board = board.do_move(board.column(0))
        assert board.height(0) == 6
        assert board.column(0) is None
        assert 0 not in [m.column for m in board.legal_moves()]
        assert len(board.legal_moves()) == 6

    def test_column_out_of_range(self):
        board = Board.empty()
        assert board.column(-1) is None
        assert board.column(7) is None
        assert board.column(6) == Move(6, 0)

    def test_do_move_alternates_players(self):
        board = Board.empty()
        first = board.do_move(Move(3, 0))
        second = first.do_move(first.column(3))
        assert first.red.data != 0 and first.yellow.data == 0
        assert not first.red_to_play
        assert second.yellow.occupied_at(31)  # column 3, second row from the bottom
        assert second.red_to_play
        # Boards are values: the source board is untouched
        assert board == Board.empty()

    def test_boards_are_hashable(self):
        a = Board.empty().do_move(Move(3, 0))
        b = Board.empty().do_move(Move(3, 0))
        assert a == b
        assert {a: 1}[b] == 1

    def test_every_game_ends_within_42_moves(self):
        rng = np.random.default_rng(11)
        for _ in range(50):
            boards = list(random_game(rng))
            assert boards[-1].win() is not Outcome.NONE
            assert boards[-1].move_count <= 42


class TestWinDetection:
    def test_empty_board(self):
        assert Board.empty().win() is Outcome.NONE

    def test_vertical(self):
        grid = np.zeros((6, 7), dtype=np.int8)
        grid[2:6, 1] = -1
        grid[5, 0] = grid[5, 2] = grid[5, 3] = grid[4, 0] = 1
        assert Board.from_grid(grid).win() is Outcome.YELLOW

    def test_horizontal(self):
        grid = np.zeros((6, 7), dtype=np.int8)
        grid[5, 3:7] = 1
        grid[4, 3:6] = -1
        assert Board.from_grid(grid).win() is Outcome.RED

    def test_rising_diagonal(self):
        grid = np.zeros((6, 7), dtype=np.int8)
        # Red on (0,0), (1,1), (2,2), (3,3) counted from the bottom
        grid[5, 0] = 1
        grid[5, 1] = -1
        grid[4, 1] = 1
        grid[5, 2] = -1
        grid[4, 2] = -1
        grid[3, 2] = 1
        grid[5, 3] = 1
        grid[4, 3] = -1
        grid[3, 3] = -1
        grid[2, 3] = 1
        grid[5, 6] = 1
        assert Board.from_grid(grid).win() is Outcome.RED

    def test_falling_diagonal(self):
        grid = np.zeros((6, 7), dtype=np.int8)
        # Yellow on (3,3), (4,2), (5,1), (6,0) counted from the bottom
        grid[5:2:-1, 3] = [1, 1, 1]
        grid[2, 3] = -1
        grid[5:3:-1, 4] = [1, -1]
        grid[3, 4] = -1
        grid[5, 5] = 1
        grid[4, 5] = -1
        grid[5, 6] = -1
        assert Board.from_grid(grid, red_to_play=True).win() is Outcome.YELLOW

    def test_three_is_not_a_win(self):
        grid = np.zeros((6, 7), dtype=np.int8)
        grid[5, 0:3] = 1
        grid[4, 0:3] = -1
        assert Board.from_grid(grid).win() is Outcome.NONE

    def test_tie(self):
        board = Board.from_grid(tie_grid())
        assert board.move_count == 42
        assert board.legal_moves() == []
        assert board.win() is Outcome.TIE

    def test_win_beats_tie_on_full_board(self):
        grid = tie_grid()
        grid[5:1:-1, 6] = 1     # red column 6, rows 0-3
        grid[1::-1, 6] = -1
        grid[1, 0] = -1         # keep the disc counts even
        board = Board.from_grid(grid, red_to_play=True)
        assert board.move_count == 42
        assert board.win() is Outcome.RED


class TestSymmetry:
    def test_mirror_preserves_outcome(self):
        rng = np.random.default_rng(3)
        for _ in range(30):
            for board in random_game(rng):
                assert board.mirror().win() is board.win()

    def test_canonicalize_idempotent_and_mirror_invariant(self):
        rng = np.random.default_rng(5)
        for _ in range(20):
            for board in random_game(rng):
                canonical = board.canonicalize()
                assert canonical.canonicalize() == canonical
                assert board.mirror().canonicalize() == canonical
                assert canonical.red_to_play == board.red_to_play

    def test_canonical_is_the_smaller_value(self):
        left = Board.empty().do_move(Move(0, 0))
        right = Board.empty().do_move(Move(6, 0))
        assert left.canonicalize() == left
        assert right.canonicalize() == left

    def test_symmetric_board_is_its_own_canonical_form(self):
        board = Board.empty().do_move(Move(3, 0)).do_move(Move(3, 1))
        assert board.mirror() == board
        assert board.canonicalize() is board

    def test_flipped(self):
        board = Board.empty().do_move(Move(3, 0))
        flipped = board.flipped()
        assert flipped.red == board.red and flipped.yellow == board.yellow
        assert flipped.red_to_play != board.red_to_play
        assert flipped.legal_moves() == board.legal_moves()
        assert flipped.flipped() == board


class TestConversion:
    def test_from_grid_infers_turn(self):
        grid = np.zeros((6, 7), dtype=np.int8)
        grid[5, 3] = 1
        assert not Board.from_grid(grid).red_to_play
        grid[4, 3] = -1
        assert Board.from_grid(grid).red_to_play

    def test_grid_round_trip(self):
        grid = tie_grid()
        grid[0:2, :] = 0
        np.testing.assert_array_equal(Board.from_grid(grid).to_grid(), grid)

    def test_floating_disc_rejected(self):
        grid = np.zeros((6, 7), dtype=np.int8)
        grid[3, 2] = 1
        with pytest.raises(ValueError):
            Board.from_grid(grid)

    def test_unknown_cell_value_rejected(self):
        grid = np.zeros((6, 7), dtype=np.int8)
        grid[5, 3] = 2
        with pytest.raises(ValueError):
            Board.from_grid(grid)

    @pytest.mark.parametrize("red, yellow", [(0, 1), (2, 0), (3, 1)])
    def test_unreachable_disc_counts_rejected(self, red, yellow):
        grid = np.zeros((6, 7), dtype=np.int8)
        grid[5, 0:red] = 1
        grid[5, 6 - yellow + 1:7] = -1
        with pytest.raises(ValueError):
            Board.from_grid(grid)
        with pytest.raises(ValueError):
            Board.from_grid(grid, red_to_play=True)

    def test_wrong_shape_rejected(self):
        with pytest.raises(ValueError):
            Board.from_grid(np.zeros((7, 6)))

    def test_str_renders_42_cells(self):
        text = str(Board.empty().do_move(Move(3, 0)))
        assert text.count("○") == 41
        assert text.count("●") == 1
