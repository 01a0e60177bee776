"""
Transposition table for caching alpha-beta search results.

Positions are keyed by their canonical (mirror-reduced) Board, so a position
and its horizontal reflection share one entry.

Key concepts:
- Bound types: EXACT (PV node), LOWER (fail-high/beta cutoff), UPPER (fail-low/alpha cutoff)
- An entry is only usable at exactly the depth it was computed for. Deeper
  entries would be more accurate but would make cached and uncached searches
  disagree.
- No eviction: the table lives as long as its engine, or until clear()
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from connect_four_arena.game.bitboard import Move
from connect_four_arena.game.board import Board


class BoundType(Enum):
    """Type of bound stored in transposition table entry."""
    EXACT = 0   # Exact value (searched window contained it)
    LOWER = 1   # Lower bound (beta cutoff, actual value >= stored value)
    UPPER = 2   # Upper bound (alpha cutoff, actual value <= stored value)


@dataclass
class TTEntry:
    """
    Cached search result.

    Attributes:
        depth: Remaining search depth when this entry was stored
        score: Score (or bound) from the side to move's perspective
        bound: Type of bound (EXACT/LOWER/UPPER)
        best_move: Best move found, in the stored (canonical) orientation
    """
    depth: int
    score: int
    bound: BoundType
    best_move: Optional[Move] = None


class TranspositionTable:
    """
    Unbounded dict-backed position cache.

    Not thread-safe: one table belongs to one engine, used by one thread at a time.
    """

    def __init__(self):
        self.table: dict[Board, TTEntry] = {}

        # Statistics
        self.hits = 0
        self.misses = 0
        self.stores = 0

    def __len__(self):
        return len(self.table)

    def probe(self, key: Board, depth: int) -> Optional[TTEntry]:
        """
        Look up a canonical Board.

        Returns the entry only when it was stored for the same depth; the
        caller decides what its bound means for the current window.
        """
        entry = self.table.get(key)
        if entry is None or entry.depth != depth:
            self.misses += 1
            return None
        self.hits += 1
        return entry

    def store(
        self,
        key: Board,
        depth: int,
        score: int,
        bound: BoundType,
        best_move: Optional[Move] = None
    ):
        existing = self.table.get(key)
        # Same depth: keep an EXACT value over a bound
        if (existing is not None and existing.depth == depth
                and existing.bound == BoundType.EXACT and bound != BoundType.EXACT):
            return
        self.table[key] = TTEntry(depth=depth, score=score, bound=bound, best_move=best_move)
        self.stores += 1

    def clear(self):
        self.table.clear()
        self._reset_stats()

    def _reset_stats(self):
        self.hits = 0
        self.misses = 0
        self.stores = 0

    def get_stats(self) -> dict:
        total_queries = self.hits + self.misses
        hit_rate = self.hits / total_queries if total_queries > 0 else 0.0

        return {
            'hits': self.hits,
            'misses': self.misses,
            'hit_rate': hit_rate,
            'stores': self.stores,
            'size_entries': len(self.table),
        }
