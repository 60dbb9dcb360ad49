"""Move generation and move application.

Men step and capture along the two forward diagonals only. Kings slide any
number of empty squares along all four diagonals and capture by landing on
the square directly behind the first enemy piece on a ray. Captures are
mandatory: while any jump exists for the side to move, only jumps are legal.
Each move captures at most one piece.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from .board import GameState, Move, Position, on_board
from .errors import IllegalMoveError

DIAGONALS = ((-1, -1), (-1, 1), (1, -1), (1, 1))


def _sign(x: int) -> int:
    return (x > 0) - (x < 0)


def man_steps(state: GameState, pos: Position) -> List[Move]:
    d = state.direction.value
    steps = []
    for dc in (-1, 1):
        target = pos.offset(d, dc)
        if on_board(*target) and state.piece_at(target) is None:
            steps.append(Move(pos, target))
    return steps


def man_jumps(state: GameState, pos: Position) -> List[Move]:
    """Forward captures for a man of the side to move standing on `pos`."""
    d = state.direction.value
    enemy = state.side.opponent
    jumps = []
    for dc in (-1, 1):
        landing = pos.offset(d, dc, 2)
        if not on_board(*landing):
            continue
        victim = state.piece_at(pos.offset(d, dc))
        if victim is not None and victim.side is enemy and state.piece_at(landing) is None:
            jumps.append(Move(pos, landing))
    return jumps


def king_moves(state: GameState, pos: Position) -> Tuple[List[Move], List[Move]]:
    """Return (slides, jumps) for a king of the side to move standing on `pos`.

    Along each diagonal the king may stop on any empty square before the first
    occupied one. If that occupied square holds an enemy piece and the square
    right behind it is empty, landing there is a jump; squares further along
    the ray are not.
    """
    enemy = state.side.opponent
    slides: List[Move] = []
    jumps: List[Move] = []
    for dr, dc in DIAGONALS:
        step = 1
        while True:
            target = pos.offset(dr, dc, step)
            if not on_board(*target):
                break
            sq = state.piece_at(target)
            if sq is None:
                slides.append(Move(pos, target))
                step += 1
                continue
            if sq.side is enemy:
                landing = pos.offset(dr, dc, step + 1)
                if on_board(*landing) and state.piece_at(landing) is None:
                    jumps.append(Move(pos, landing))
            break
    return slides, jumps


def legal_moves(state: GameState) -> List[Move]:
    """All legal moves for the side to move; jumps only when any jump exists."""
    men: List[Position] = []
    kings: List[Position] = []
    for pos, piece in state.pieces(state.side):
        (kings if piece.is_king else men).append(pos)

    jumps: List[Move] = []
    for pos in men:
        jumps.extend(man_jumps(state, pos))
    king_slides: List[Move] = []
    for pos in kings:
        slides, king_jumps = king_moves(state, pos)
        jumps.extend(king_jumps)
        king_slides.extend(slides)

    if jumps:
        return jumps

    moves: List[Move] = []
    for pos in men:
        moves.extend(man_steps(state, pos))
    moves.extend(king_slides)
    return moves


def captured_square(state: GameState, move: Move) -> Optional[Position]:
    """Square of the piece `move` captures, or None for a non-capturing move.

    The captured piece always sits on the square immediately before the
    destination, whatever the length of the slide that preceded it. A long
    king slide with nothing in front of its landing square captures nothing.
    """
    if move.distance < 2:
        return None
    dr = _sign(move.destination.row - move.origin.row)
    dc = _sign(move.destination.col - move.origin.col)
    before = move.destination.offset(-dr, -dc)
    mover = state.piece_at(move.origin)
    victim = state.piece_at(before)
    if mover is None or victim is None or victim.side is mover.side:
        return None
    return before


def apply_move(state: GameState, move: Move) -> GameState:
    """Return the state after `move`. The move is assumed to be legal."""
    piece = state.piece_at(move.origin)
    if move.destination.row == state.direction.promotion_row:
        piece = piece.promoted()
    changes = {move.origin: None, move.destination: piece}
    captured = captured_square(state, move)
    if captured is not None:
        changes[captured] = None
    return state.with_squares(changes).next_turn()


def is_legal(state: GameState, move: Move) -> bool:
    return move in legal_moves(state)


def play_move(state: GameState, move: Move) -> GameState:
    """Checked variant of apply_move for moves that come from outside."""
    if not is_legal(state, move):
        raise IllegalMoveError(move)
    return apply_move(state, move)
