"""Fixed-depth negamax search with an optional alpha-beta style cutoff.

Each side owns one running best score. Both are threaded through the
recursion as plain arguments, with the roles swapped at every ply, so sibling
branches never share a bound. A node stops examining its moves once its own
best strictly exceeds the best the opponent has already secured elsewhere
(negated into the mover's perspective). The cutoff changes the number of
visited nodes, never the move that is chosen.
"""

import logging
import time
from typing import Optional

from checkers_engine.config import CONFIG

from .board import GameState, Move
from .evaluator import Evaluator
from .moves import apply_move, legal_moves
from .utils import format_info, min_score

logger = logging.getLogger(__name__)

INF = float("inf")


class SearchEngine:
    def __init__(self, evaluator: Optional[Evaluator] = None, depth: Optional[int] = None,
                 pruning: Optional[bool] = None):
        self.evaluator = evaluator or Evaluator()
        self.max_depth = CONFIG.search.depth if depth is None else depth
        self.pruning = CONFIG.search.pruning if pruning is None else pruning
        self.nodes = 0
        self.last_score = None
        self.last_elapsed = 0.0

    def choose_best_move(self, state: GameState) -> Optional[Move]:
        """Return the root move with the strictly greatest score.

        Ties go to the move generated first. Returns None when the side to
        move has no legal moves.
        """
        if not isinstance(self.max_depth, int) or self.max_depth < 1:
            raise ValueError(f"search depth must be a positive integer, got {self.max_depth!r}")

        self.nodes = 0
        start_time = time.time()
        own_best = -INF
        opponent_best = -INF
        best_move = None
        best_score = -INF

        for move in legal_moves(state):
            child = apply_move(state, move)
            score = -self.search(child, self.max_depth, opponent_best, own_best)
            if best_move is None or score > best_score:
                best_move = move
                best_score = score
            if score > own_best:
                own_best = score

        self.last_score = best_score if best_move is not None else None
        self.last_elapsed = time.time() - start_time
        logger.info(format_info(self.max_depth, self.last_score, self.nodes,
                                self.last_elapsed, best_move, self.pruning))
        return best_move

    def search(self, state: GameState, depth: int, own_best: float, opponent_best: float) -> float:
        """Score `state` for its side to move, looking `depth` plies ahead."""
        self.nodes += 1
        if depth == 0:
            return self.evaluator.evaluate(state)

        moves = legal_moves(state)
        if not moves:
            return self.evaluator.evaluate(state)

        opponent_scores = []
        for move in moves:
            child = apply_move(state, move)
            child_score = self.search(child, depth - 1, opponent_best, own_best)
            value = -child_score
            if value > own_best:
                own_best = value
            if self.pruning and own_best > -opponent_best:
                return own_best
            opponent_scores.append(child_score)

        return -min_score(opponent_scores)


def choose_best_move(state: GameState, max_depth: int, pruning_enabled: bool = True) -> Optional[Move]:
    """One-shot search: best move for the side to move of `state`."""
    return SearchEngine(depth=max_depth, pruning=pruning_enabled).choose_best_move(state)
