from connect_four_arena.arena.results import GameRecord, ResultsCSV, summarize
from connect_four_arena.arena.simulate import (
    BatchSettings, play, simulate, simulate_batches, simulate_all, simulate_against_field,
)

__all__ = [
    'GameRecord',
    'ResultsCSV',
    'summarize',
    'BatchSettings',
    'play',
    'simulate',
    'simulate_batches',
    'simulate_all',
    'simulate_against_field',
]
