"""Exceptions raised for bad user input. All of them are ValueErrors."""


class NotationError(ValueError):
    """Move text that cannot be parsed into two board squares."""


class IllegalMoveError(ValueError):
    """A well-formed move that is not in the legal move set."""

    def __init__(self, move, message: str = None):
        self.move = move
        super().__init__(message or f"Illegal move: {move}")


class BoardFormatError(ValueError):
    """A board diagram that does not describe an 8x8 position."""
