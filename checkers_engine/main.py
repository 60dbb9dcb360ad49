"""Game wrapper: owns the current position and its history, talks notation."""

import logging
from typing import List, Optional, Tuple

from checkers_engine.core.board import GameState, Move, Side, initial_position, is_game_over
from checkers_engine.core.errors import IllegalMoveError, NotationError
from checkers_engine.core.evaluator import Evaluator
from checkers_engine.core.moves import apply_move, legal_moves, play_move
from checkers_engine.core.search import SearchEngine
from checkers_engine.notation import format_move, parse_move, render_board

logger = logging.getLogger(__name__)


class Engine:
    def __init__(self, depth=None, pruning=None):
        self.state = initial_position()
        self.move_history: List[Move] = []
        self._previous: List[GameState] = []
        self.search = SearchEngine(Evaluator(), depth=depth, pruning=pruning)

    def reset(self):
        """Back to the starting position."""
        self.set_state(initial_position())

    def set_state(self, state: GameState):
        self.state = state
        self.move_history.clear()
        self._previous.clear()

    def get_best_move(self) -> Tuple[Optional[str], Optional[float]]:
        """Return (notation, score) of the engine's choice, or (None, None)."""
        move = self.search.choose_best_move(self.state)
        if move is None:
            return None, None
        return format_move(move), self.search.last_score

    def push(self, move: Move):
        """Play `move`. Raises IllegalMoveError if it is not legal here."""
        new_state = play_move(self.state, move)
        self._previous.append(self.state)
        self.move_history.append(move)
        self.state = new_state

    def make_move(self, move_str: str) -> bool:
        """Play a move given in notation (e.g. 'c3 d4'). Returns True if legal."""
        try:
            self.push(parse_move(move_str))
        except (NotationError, IllegalMoveError) as e:
            logger.debug("Rejected move %r: %s", move_str, e)
            return False
        return True

    def undo_move(self):
        """Take back the last move."""
        if self.move_history:
            self.state = self._previous.pop()
            self.move_history.pop()

    def get_legal_moves(self) -> List[str]:
        return [format_move(m) for m in legal_moves(self.state)]

    def is_game_over(self) -> bool:
        return is_game_over(self.state)

    def winner(self) -> Optional[Side]:
        """The side with pieces left once the other has none."""
        if self.state.count(Side.DARK) == 0:
            return Side.LIGHT
        if self.state.count(Side.LIGHT) == 0:
            return Side.DARK
        return None

    def print_board(self):
        print(render_board(self.state))


def self_play(depth: int, plies: int, pruning: bool = True,
              state: Optional[GameState] = None) -> Tuple[GameState, List[Move], int]:
    """Let the engine play both sides for up to `plies` plies.

    Stops early when the game is over or the side to move is stuck.
    Returns the final state, the moves played and the total nodes visited.
    """
    state = state or initial_position()
    search = SearchEngine(Evaluator(), depth=depth, pruning=pruning)
    played: List[Move] = []
    nodes = 0
    for _ in range(plies):
        if is_game_over(state):
            break
        move = search.choose_best_move(state)
        nodes += search.nodes
        if move is None:
            break
        played.append(move)
        state = apply_move(state, move)
    return state, played, nodes
