"""
Integration tests: full games through the simulation driver and CSV output.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / 'src'))

from connect_four_arena.arena import (
    BatchSettings, GameRecord, ResultsCSV, play, simulate, simulate_batches,
    simulate_all, simulate_against_field, summarize,
)
from connect_four_arena.engine.evaluator import WindowEvaluator
from connect_four_arena.game.bitboard import Move
from connect_four_arena.game.board import Board, Outcome
from connect_four_arena.strategy import (
    Strategy, CenterFirstStrategy, RandomStrategy, EvaluatorStrategy, MinimaxStrategy,
)


class StubbornStrategy(Strategy):
    """Ignores the board and always answers the same cell."""

    def select_move(self, board, last_move=None):
        return Move(0, 5)

    def display_name(self):
        return "Stubborn"


class TestGameLoop:
    def test_center_first_self_play_without_override(self):
        strategy = CenterFirstStrategy()
        board = Board.empty()
        moves = 0
        while board.win() is Outcome.NONE:
            board = board.do_move(strategy.select_move(board))
            moves += 1
            assert moves <= 42
        assert board.win() in (Outcome.RED, Outcome.YELLOW, Outcome.TIE)

    def test_center_first_self_play(self):
        record = play(CenterFirstStrategy(), CenterFirstStrategy())
        assert record.winner is not Outcome.NONE
        assert 7 <= record.move_count <= 42
        assert record.red == record.yellow == "CenterFirst"

    def test_random_games_terminate(self):
        rng = np.random.default_rng(0)
        for _ in range(10):
            record = play(RandomStrategy(rng), RandomStrategy(rng))
            assert record.winner is not Outcome.NONE
            assert record.move_count <= 42

    def test_minimax_beats_random(self):
        rng = np.random.default_rng(42)
        minimax = MinimaxStrategy(WindowEvaluator(), depth=2, rng=rng)
        random = RandomStrategy(rng)

        as_red = [play(minimax, random) for _ in range(5)]
        as_yellow = [play(random, minimax) for _ in range(5)]

        wins = (sum(r.winner is Outcome.RED for r in as_red)
                + sum(r.winner is Outcome.YELLOW for r in as_yellow))
        assert wins >= 8
        assert all(r.red == "Minimax(2)" for r in as_red)

    def test_illegal_move_fails_loudly(self):
        with pytest.raises(ValueError):
            play(StubbornStrategy(), RandomStrategy())

    def test_verbose_prints_boards(self, capsys):
        play(CenterFirstStrategy(), CenterFirstStrategy(), verbose=True)
        out = capsys.readouterr().out
        assert "Simulating CenterFirst vs CenterFirst" in out
        assert "---------" in out


class TestResultsCSV:
    def test_header_and_rows(self, tmp_path):
        path = tmp_path / "out.csv"
        ResultsCSV([GameRecord("A", "B", Outcome.TIE, 42)]).create(path)
        ResultsCSV([GameRecord("B", "A", Outcome.RED, 7)]).append(path)

        lines = path.read_text().splitlines()
        assert lines == ["Red,Yellow,Win,Move Count", "A,B,Tie,42", "B,A,Red,7"]

        records = ResultsCSV.read(path).rows
        assert records[1] == GameRecord("B", "A", Outcome.RED, 7)

    def test_append_requires_existing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ResultsCSV([GameRecord("A", "B", Outcome.TIE, 42)]).append(tmp_path / "missing.csv")

    def test_summarize(self):
        records = [
            GameRecord("A", "B", Outcome.RED, 10),
            GameRecord("A", "B", Outcome.RED, 12),
            GameRecord("A", "B", Outcome.YELLOW, 9),
            GameRecord("B", "A", Outcome.TIE, 42),
        ]
        summary = summarize(records)
        assert summary[("A", "B")][Outcome.RED] == 2
        assert summary[("A", "B")][Outcome.YELLOW] == 1
        assert summary[("B", "A")][Outcome.TIE] == 1


class TestSimulation:
    def test_simulate_count(self):
        records = simulate(CenterFirstStrategy(), RandomStrategy(np.random.default_rng(1)), 4)
        assert len(records) == 4

    def test_batches_append(self, tmp_path):
        path = tmp_path / "out.csv"
        ResultsCSV().create(path)
        settings = BatchSettings(count=5, batch_size=2)

        records = simulate_batches(CenterFirstStrategy(), CenterFirstStrategy(), settings, path)

        assert len(records) == 5
        assert len(ResultsCSV.read(path).rows) == 5

    @pytest.mark.parametrize("count, batch_size", [(2, 0), (2, -1), (-1, 5)])
    def test_invalid_batch_settings_rejected(self, count, batch_size):
        with pytest.raises(ValueError):
            BatchSettings(count=count, batch_size=batch_size)

    def test_zero_games_writes_nothing(self, tmp_path):
        path = tmp_path / "out.csv"
        ResultsCSV().create(path)

        records = simulate_batches(CenterFirstStrategy(), CenterFirstStrategy(), BatchSettings(0, 1), path)

        assert records == []
        assert ResultsCSV.read(path).rows == []

    def test_simulate_all(self, tmp_path):
        path = tmp_path / "out.csv"
        rng = np.random.default_rng(3)
        strategies = [CenterFirstStrategy(), RandomStrategy(rng), EvaluatorStrategy(WindowEvaluator())]
        settings = BatchSettings(count=3, batch_size=2)

        records = simulate_all(strategies, settings, path, show_progress=False)

        assert len(records) == 27
        rows = ResultsCSV.read(path).rows
        assert rows == records
        pairings = {(r.red, r.yellow) for r in rows}
        assert len(pairings) == 9

    def test_simulate_against_field(self, tmp_path):
        path = tmp_path / "out.csv"
        rng = np.random.default_rng(4)
        settings = BatchSettings(count=2, batch_size=5)

        records = simulate_against_field(
            CenterFirstStrategy(), [RandomStrategy(rng), EvaluatorStrategy(WindowEvaluator())],
            settings, path, show_progress=False
        )

        assert len(records) == 8
        assert all("CenterFirst" in (r.red, r.yellow) for r in records)
        assert [r.red for r in records[:2]] == ["CenterFirst", "CenterFirst"]
        assert [r.yellow for r in records[2:4]] == ["CenterFirst", "CenterFirst"]
