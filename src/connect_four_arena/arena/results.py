"""
Game records and the CSV file they are written to.

One row per game: Red,Yellow,Win,Move Count
"""

import csv
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

from connect_four_arena.game.board import Outcome


CSV_HEADER = ["Red", "Yellow", "Win", "Move Count"]


@dataclass
class GameRecord:
    red: str
    yellow: str
    winner: Outcome
    move_count: int

    def to_row(self) -> list:
        return [self.red, self.yellow, str(self.winner), self.move_count]

    @classmethod
    def from_row(cls, row: list) -> 'GameRecord':
        red, yellow, winner, move_count = row
        return cls(red, yellow, Outcome[winner.upper()], int(move_count))


@dataclass
class ResultsCSV:
    rows: list[GameRecord] = field(default_factory=list)

    def add(self, record: GameRecord):
        self.rows.append(record)

    def extend(self, records):
        self.rows.extend(records)

    def create(self, path):
        """Write the header plus any buffered rows, truncating the file."""
        with open(path, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(CSV_HEADER)
            writer.writerows(record.to_row() for record in self.rows)

    def append(self, path):
        """Append buffered rows; the file must already exist (see create())."""
        if not Path(path).exists():
            raise FileNotFoundError(f"Results file {path} does not exist, create() it first")
        with open(path, "a", newline="") as f:
            writer = csv.writer(f)
            writer.writerows(record.to_row() for record in self.rows)

    @classmethod
    def read(cls, path) -> 'ResultsCSV':
        with open(path, newline="") as f:
            reader = csv.reader(f)
            header = next(reader, None)
            if header != CSV_HEADER:
                raise ValueError(f"Unexpected header in {path}: {header}")
            return cls([GameRecord.from_row(row) for row in reader if row])


def summarize(records) -> dict[tuple[str, str], Counter]:
    """
    Outcome counts per (red, yellow) pairing.

    Returns:
        {(red name, yellow name): Counter({Outcome.RED: n, ...})}
    """
    summary: dict[tuple[str, str], Counter] = {}
    for record in records:
        summary.setdefault((record.red, record.yellow), Counter())[record.winner] += 1
    return summary
