"""
Batch simulation driver.

Plays strategies against each other from the empty board and appends one
CSV row per game. Every strategy is put behind the WinOrBlock tactical check
before it is asked for a move.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from tqdm import tqdm

from connect_four_arena.arena.results import GameRecord, ResultsCSV
from connect_four_arena.game.board import Board, Outcome
from connect_four_arena.strategy.base import Strategy
from connect_four_arena.strategy.tactical import with_tactics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchSettings:
    count: int
    batch_size: int

    def __post_init__(self):
        if self.count < 0:
            raise ValueError(f"count must be non-negative, got {self.count}")
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {self.batch_size}")


def play(red: Strategy, yellow: Strategy, verbose: bool = False) -> GameRecord:
    """
    Play one game, red first.

    Raises:
        ValueError: if a strategy returns a move that is not legal
    """
    if verbose:
        print(f"Simulating {red.display_name()} vs {yellow.display_name()}")

    players = {True: with_tactics(red), False: with_tactics(yellow)}
    board = Board.empty()
    last_move = None
    move_count = 0

    while board.win() is Outcome.NONE:
        strategy = players[board.red_to_play]
        move = strategy.select_move(board, last_move)
        if move not in board.legal_moves():
            raise ValueError(f"{strategy.display_name()} returned illegal move {move}")

        board = board.do_move(move)
        last_move = move
        move_count += 1

        if verbose:
            print(f"---------{board}")

    return GameRecord(red.display_name(), yellow.display_name(), board.win(), move_count)


def simulate(
    red: Strategy,
    yellow: Strategy,
    count: int,
    progress: Optional[tqdm] = None
) -> list[GameRecord]:
    """Play `count` games with fixed seats."""
    records = []
    for _ in range(count):
        records.append(play(red, yellow))
        if progress is not None:
            progress.update(1)
    return records


def simulate_batches(
    red: Strategy,
    yellow: Strategy,
    settings: BatchSettings,
    path,
    progress: Optional[tqdm] = None
) -> list[GameRecord]:
    """
    Play settings.count games, appending to `path` after every batch.

    The CSV file must already exist with its header.
    """
    records = []
    played = 0
    while played < settings.count:
        batch = min(settings.batch_size, settings.count - played)
        batch_records = simulate(red, yellow, batch, progress)
        ResultsCSV(batch_records).append(path)
        records.extend(batch_records)
        played += batch
        logger.info(
            "%s vs %s: %d/%d games written to %s",
            red.display_name(), yellow.display_name(), played, settings.count, path
        )
    return records


def simulate_all(strategies: list[Strategy], settings: BatchSettings, path, show_progress: bool = True) -> list[GameRecord]:
    """Every ordered pairing, self-play included. Total: len(strategies)**2 * settings.count games."""
    ResultsCSV().create(path)
    records = []
    total = len(strategies) * len(strategies) * settings.count
    with tqdm(total=total, desc="Simulating", ncols=80, disable=not show_progress) as progress:
        for red in strategies:
            for yellow in strategies:
                records.extend(simulate_batches(red, yellow, settings, path, progress))
    return records


def simulate_against_field(
    strategy: Strategy,
    others: list[Strategy],
    settings: BatchSettings,
    path,
    show_progress: bool = True
) -> list[GameRecord]:
    """One strategy against each other one, in both seats. Total: len(others) * 2 * settings.count games."""
    ResultsCSV().create(path)
    records = []
    total = len(others) * 2 * settings.count
    with tqdm(total=total, desc="Simulating", ncols=80, disable=not show_progress) as progress:
        for other in others:
            records.extend(simulate_batches(strategy, other, settings, path, progress))
            records.extend(simulate_batches(other, strategy, settings, path, progress))
    return records
