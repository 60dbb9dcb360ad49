"""Core engine components: board model, move generator, evaluator and search."""

from .board import (
    Direction,
    GameState,
    Move,
    Piece,
    Position,
    Rank,
    Side,
    initial_position,
    is_game_over,
    state_from_rows,
    state_to_rows,
)
from .errors import BoardFormatError, IllegalMoveError, NotationError
from .evaluator import Evaluator
from .moves import apply_move, is_legal, legal_moves, play_move
from .search import SearchEngine, choose_best_move
