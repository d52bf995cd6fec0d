class MalformedInput(ValueError):
    """Raised when a board or macroboard payload cannot be decoded."""


class IllegalMove(ValueError):
    """Raised when a move is applied outside the legal move set."""
