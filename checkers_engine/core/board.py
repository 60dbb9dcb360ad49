"""Immutable board model: pieces, squares, moves and the game state."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Tuple

from .errors import BoardFormatError

BOARD_SIZE = 8


class Side(Enum):
    LIGHT = "light"
    DARK = "dark"

    @property
    def opponent(self) -> "Side":
        return Side.DARK if self is Side.LIGHT else Side.LIGHT


class Rank(Enum):
    MAN = "man"
    KING = "king"


class Direction(Enum):
    """Row delta of a side's forward movement."""

    UP = -1
    DOWN = 1

    @property
    def opposite(self) -> "Direction":
        return Direction.DOWN if self is Direction.UP else Direction.UP

    @property
    def promotion_row(self) -> int:
        return 0 if self is Direction.UP else BOARD_SIZE - 1


@dataclass(frozen=True)
class Piece:
    side: Side
    rank: Rank = Rank.MAN

    @property
    def is_king(self) -> bool:
        return self.rank is Rank.KING

    def promoted(self) -> "Piece":
        return Piece(self.side, Rank.KING)


class Position(NamedTuple):
    row: int
    col: int

    def offset(self, d_row: int, d_col: int, steps: int = 1) -> "Position":
        return Position(self.row + d_row * steps, self.col + d_col * steps)


@dataclass(frozen=True)
class Move:
    origin: Position
    destination: Position

    @property
    def distance(self) -> int:
        return max(abs(self.destination.row - self.origin.row),
                   abs(self.destination.col - self.origin.col))

    def __str__(self) -> str:
        return f"{tuple(self.origin)}->{tuple(self.destination)}"


Square = Optional[Piece]
Grid = Tuple[Tuple[Square, ...], ...]


def on_board(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def is_playable(pos: Position) -> bool:
    """True for the 32 dark squares pieces live on."""
    return on_board(pos.row, pos.col) and (pos.row + pos.col) % 2 == 0


def _empty_grid() -> Grid:
    return tuple((None,) * BOARD_SIZE for _ in range(BOARD_SIZE))


@dataclass(frozen=True)
class GameState:
    board: Grid
    side: Side
    direction: Direction

    def piece_at(self, pos: Position) -> Square:
        return self.board[pos.row][pos.col]

    def pieces(self, side: Side) -> Iterator[Tuple[Position, Piece]]:
        """Yield (position, piece) for every piece of `side`, row-major."""
        for r, row in enumerate(self.board):
            for c, sq in enumerate(row):
                if sq is not None and sq.side is side:
                    yield Position(r, c), sq

    def count(self, side: Side) -> int:
        return sum(1 for _ in self.pieces(side))

    def with_squares(self, changes: Dict[Position, Square]) -> "GameState":
        """Return a copy with the given squares overwritten."""
        rows: List[List[Square]] = [list(row) for row in self.board]
        for pos, sq in changes.items():
            rows[pos.row][pos.col] = sq
        return replace(self, board=tuple(tuple(row) for row in rows))

    def next_turn(self) -> "GameState":
        return replace(self, side=self.side.opponent, direction=self.direction.opposite)


def empty_state(side: Side = Side.LIGHT, direction: Optional[Direction] = None) -> GameState:
    if direction is None:
        direction = Direction.UP if side is Side.LIGHT else Direction.DOWN
    return GameState(_empty_grid(), side, direction)


def initial_position() -> GameState:
    """Standard layout: dark on rows 0-2, light on rows 5-7, light to move."""
    changes: Dict[Position, Square] = {}
    for row in range(BOARD_SIZE):
        if 3 <= row <= 4:
            continue
        side = Side.DARK if row < 3 else Side.LIGHT
        for col in range(row % 2, BOARD_SIZE, 2):
            changes[Position(row, col)] = Piece(side)
    return empty_state(Side.LIGHT, Direction.UP).with_squares(changes)


def is_game_over(state: GameState) -> bool:
    return state.count(Side.LIGHT) == 0 or state.count(Side.DARK) == 0


# ── Text diagrams ───────────────────────────────────────────

_SYMBOLS = {
    Piece(Side.LIGHT): "l",
    Piece(Side.LIGHT, Rank.KING): "L",
    Piece(Side.DARK): "d",
    Piece(Side.DARK, Rank.KING): "D",
}
_FROM_SYMBOL = {sym: piece for piece, sym in _SYMBOLS.items()}


def state_from_rows(rows: Iterable[str], side: Side = Side.LIGHT,
                    direction: Optional[Direction] = None) -> GameState:
    """Build a state from 8 strings of 8 symbols ('.', 'l', 'L', 'd', 'D')."""
    rows = [r.strip() for r in rows]
    if len(rows) != BOARD_SIZE:
        raise BoardFormatError(f"expected {BOARD_SIZE} rows, got {len(rows)}")
    changes: Dict[Position, Square] = {}
    for r, line in enumerate(rows):
        if len(line) != BOARD_SIZE:
            raise BoardFormatError(f"row {r} has {len(line)} squares, expected {BOARD_SIZE}")
        for c, ch in enumerate(line):
            if ch == ".":
                continue
            if ch not in _FROM_SYMBOL:
                raise BoardFormatError(f"unknown symbol {ch!r} at row {r}, column {c}")
            changes[Position(r, c)] = _FROM_SYMBOL[ch]
    return empty_state(side, direction).with_squares(changes)


def state_to_rows(state: GameState) -> List[str]:
    return ["".join("." if sq is None else _SYMBOLS[sq] for sq in row) for row in state.board]
