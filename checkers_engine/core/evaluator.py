"""Material evaluator: piece count difference from the side to move's view."""

from checkers_engine.config import CONFIG

from .board import GameState


class Evaluator:
    def __init__(self, win_score: int = None):
        self.win_score = CONFIG.eval.win_score if win_score is None else win_score

    def evaluate(self, state: GameState) -> int:
        """Return the score for the side to move.

        Kings count the same as men. A side with no pieces left has lost:
        +win_score when the opponent is wiped out, -win_score when the side
        to move is.
        """
        own = state.count(state.side)
        opponent = state.count(state.side.opponent)
        if opponent == 0:
            return self.win_score
        if own == 0:
            return -self.win_score
        return own - opponent
