from __future__ import annotations

from typing import Dict

from checkers_engine.core.board import GameState
from checkers_engine.core.moves import apply_move, legal_moves
from checkers_engine.notation import format_move


def perft(state: GameState, depth: int) -> int:
    """Performance test: count leaf nodes to `depth` from `state`."""
    if depth <= 0:
        return 1
    moves = legal_moves(state)
    if depth == 1:
        return len(moves)
    return sum(perft(apply_move(state, m), depth - 1) for m in moves)


def perft_divide(state: GameState, depth: int) -> Dict[str, int]:
    """Divide perft: nodes per root move."""
    out: Dict[str, int] = {}
    for m in legal_moves(state):
        out[format_move(m)] = perft(apply_move(state, m), depth - 1)
    return out
