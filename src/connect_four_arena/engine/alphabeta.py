"""
Alpha-beta negamax search engine for Connect4.

Depth-bounded search over Boards: nodes are positions, edges are legal moves.
Leaves (won, tied, or out of depth) are scored by an Evaluator.

Key features:
- Negamax framework (simplified minimax using negation)
- Alpha-beta pruning (cut branches that can't affect final result)
- Transposition table keyed by canonical (mirror-reduced) positions
- Move ordering by static evaluation for tighter pruning
- Root scores every move with a full window and breaks ties at random


Algorithm overview:

    def negamax(board, depth, alpha, beta):
        # Terminal or depth limit
        if terminal or depth == 0:
            return sign * evaluate(board)

        # Transposition table lookup (same depth only)
        entry = tt.probe(canonical(board), depth)
        tighten alpha/beta from entry, return if the window closed

        best_score = -infinity
        for move in ordered_moves:
            score = -negamax(board.do_move(move), depth-1, -beta, -alpha)
            best_score = max(best_score, score)
            alpha = max(alpha, score)
            if alpha >= beta:
                break  # Beta cutoff

        tt.store(canonical(board), depth, best_score, bound_type)
        return best_score

Scores inside the search are from the side to move's perspective. The
Evaluator is red-positive, so leaves are multiplied by +1 (red to move) or
-1 (yellow to move).
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from connect_four_arena.engine.evaluator import Evaluator, SCORE_INF
from connect_four_arena.engine.move_ordering import score_children, side_sign
from connect_four_arena.engine.transposition_table import TranspositionTable, BoundType
from connect_four_arena.game.bitboard import Move, COLUMN_COUNT
from connect_four_arena.game.board import Board, Outcome

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """Result of alpha-beta search."""
    best_move: Move
    score: int
    depth: int
    nodes_searched: int
    move_scores: dict[Move, int] = field(default_factory=dict)
    tt_stats: dict = field(default_factory=dict)


class AlphaBetaEngine:
    """
    Alpha-beta negamax search engine with a position cache.

    The cache is owned by the engine and persists across search() calls.
    An engine must not be used from more than one thread at a time; give
    each concurrently simulated game its own engine.
    """

    def __init__(
        self,
        evaluator: Evaluator,
        depth: int = 6,
        use_cache: bool = True,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize alpha-beta engine.

        Args:
            evaluator: Red-positive static evaluation
            depth: Plies searched, counting the root move itself
            use_cache: Enable the transposition table
            rng: Random generator used to break ties between equal root moves
            seed: Seed for a fresh generator when rng is not given
        """
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")

        self.evaluator = evaluator
        self.depth = depth
        self.tt = TranspositionTable() if use_cache else None
        self.rng = rng if rng is not None else np.random.default_rng(seed)

        # Search statistics
        self.nodes_searched = 0

    @property
    def use_cache(self) -> bool:
        return self.tt is not None

    def search(self, board: Board, depth: Optional[int] = None) -> SearchResult:
        """
        Score every legal move and pick the best one for the side to move.

        Each root move is searched with a full window so its score is exact,
        not just a bound.

        Raises:
            ValueError: if the board is already decided
        """
        depth = self.depth if depth is None else depth
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")

        moves = board.legal_moves()
        if not moves or board.win() is not Outcome.NONE:
            raise ValueError("No valid moves available")

        self.nodes_searched = 0

        move_scores = {}
        for move in moves:
            child = board.do_move(move)
            move_scores[move] = -self._negamax(child, depth - 1, -SCORE_INF, SCORE_INF)

        best_score = max(move_scores.values())
        best_moves = [move for move in moves if move_scores[move] == best_score]
        if len(best_moves) == 1:
            best_move = best_moves[0]
        else:
            best_move = best_moves[int(self.rng.integers(len(best_moves)))]

        tt_stats = self.tt.get_stats() if self.tt is not None else {}
        logger.debug(
            "depth %d: best %s score %d (%d nodes, tt hit rate %.1f%%)",
            depth, best_move, best_score, self.nodes_searched,
            100.0 * tt_stats.get('hit_rate', 0.0)
        )

        return SearchResult(
            best_move=best_move,
            score=best_score,
            depth=depth,
            nodes_searched=self.nodes_searched,
            move_scores=move_scores,
            tt_stats=tt_stats,
        )

    def best_move(self, board: Board) -> Move:
        return self.search(board).best_move

    def _negamax(self, board: Board, depth: int, alpha: int, beta: int) -> int:
        """
        Negamax alpha-beta search (fail-soft).

        Args:
            board: Position to score
            depth: Remaining depth
            alpha: Alpha bound
            beta: Beta bound

        Returns:
            Score from the side to move's perspective
        """
        self.nodes_searched += 1

        if depth <= 0 or board.win() is not Outcome.NONE:
            return side_sign(board) * self.evaluator.eval(board)

        # Bounds are classified against the caller's window, not the one tightened by the cache
        window_alpha, window_beta = alpha, beta

        key = None
        if self.tt is not None:
            key = board.canonicalize()
            entry = self.tt.probe(key, depth)
            if entry is not None:
                if entry.bound == BoundType.EXACT:
                    return entry.score
                if entry.bound == BoundType.LOWER:
                    alpha = max(alpha, entry.score)
                else:
                    beta = min(beta, entry.score)
                if alpha >= beta:
                    return entry.score

        scored = score_children(board, self.evaluator)

        if depth == 1:
            # Children are leaves: their ordering scores are their values
            self.nodes_searched += len(scored)
            best_score, best_move, _ = scored[0]
            exact = True
        else:
            exact = False
            best_score = -SCORE_INF
            best_move = None

            for _, move, child in scored:
                score = -self._negamax(child, depth - 1, -beta, -alpha)

                if score > best_score:
                    best_score = score
                    best_move = move

                alpha = max(alpha, score)

                # Beta cutoff
                if alpha >= beta:
                    break

        if key is not None:
            if exact:
                bound = BoundType.EXACT
            elif best_score <= window_alpha:
                bound = BoundType.UPPER  # All moves failed low
            elif best_score >= window_beta:
                bound = BoundType.LOWER  # We failed high
            else:
                bound = BoundType.EXACT
            if key != board:
                best_move = Move(COLUMN_COUNT - 1 - best_move.column, best_move.row)
            self.tt.store(key, depth, best_score, bound, best_move)

        return best_score

    def clear_tt(self):
        """Clear transposition table."""
        if self.tt is not None:
            self.tt.clear()

    def get_stats(self) -> dict:
        """Get search statistics."""
        return {
            'nodes_searched': self.nodes_searched,
            'tt_stats': self.tt.get_stats() if self.tt is not None else {},
        }
