"""Human move notation and the text board.

Squares are written as a column letter followed by a row digit: ``a1`` is
row 0, column 0. A move is two squares, either run together (``c3d4``) or
separated by whitespace (``c3  d4``).
"""

import re
from typing import List

from checkers_engine.core.board import BOARD_SIZE, GameState, Move, Piece, Position, Rank, Side
from checkers_engine.core.errors import NotationError

FILES = "abcdefgh"

_SQUARE = r"([a-h][1-8])"
_MOVE_RE = re.compile(rf"^\s*{_SQUARE}\s*{_SQUARE}\s*$", re.IGNORECASE)

GLYPHS = {
    None: "   ",
    Piece(Side.DARK, Rank.MAN): " ● ",
    Piece(Side.DARK, Rank.KING): " ♚ ",
    Piece(Side.LIGHT, Rank.MAN): " o ",
    Piece(Side.LIGHT, Rank.KING): " ♔ ",
}


def parse_square(text: str) -> Position:
    text = text.strip().lower()
    if len(text) != 2 or text[0] not in FILES or text[1] not in "12345678":
        raise NotationError(f"Invalid square: {text!r}")
    return Position(int(text[1]) - 1, FILES.index(text[0]))


def parse_move(text: str) -> Move:
    """Parse 'c3d4' or 'c3 d4' into a Move. Raises NotationError."""
    m = _MOVE_RE.match(text or "")
    if m is None:
        raise NotationError(f"Invalid move notation: {text!r} (expected e.g. 'c3 d4')")
    return Move(parse_square(m.group(1)), parse_square(m.group(2)))


def format_square(pos: Position) -> str:
    return f"{FILES[pos.col]}{pos.row + 1}"


def format_move(move: Move) -> str:
    return f"{format_square(move.origin)} {format_square(move.destination)}"


def render_board(state: GameState) -> str:
    letters = "   " + " ".join(f" {c.upper()} " for c in FILES)
    lines: List[str] = [letters]
    for r in range(BOARD_SIZE):
        cells = "|".join(GLYPHS[sq] for sq in state.board[r])
        lines.append(f"{r + 1} |{cells}| {r + 1}")
    lines.append(letters)
    return "\n".join(lines)
