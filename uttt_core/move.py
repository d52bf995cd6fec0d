from typing import Iterator, Tuple


class Move:
    """
    A placement at absolute (row, col) on the 9×9 grid.

    `score` is scratch space for the search and carries no meaning outside it.
    """

    __slots__ = ("_row", "_col", "score")

    def __init__(self, row: int = -1, col: int = -1, score: int = 0) -> None:
        self._row = row
        self._col = col
        self.score = score

    @property
    def row(self) -> int:
        return self._row

    @property
    def col(self) -> int:
        return self._col

    @property
    def board_index(self) -> int:
        """Index (0..8) of the sub-board holding this cell."""
        return (self._row // 3) * 3 + self._col // 3

    @property
    def target_index(self) -> int:
        """Index (0..8) of the sub-board this move sends the opponent to."""
        return (self._row % 3) * 3 + self._col % 3

    def is_sentinel(self) -> bool:
        return self._row < 0 or self._col < 0

    def as_tuple(self) -> Tuple[int, int]:
        return (self._row, self._col)

    def __iter__(self) -> Iterator[int]:
        yield self._row
        yield self._col

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Move):
            return self.as_tuple() == other.as_tuple()
        if isinstance(other, tuple):
            return self.as_tuple() == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.as_tuple())

    def __repr__(self) -> str:
        return f"Move({self._row}, {self._col}, score={self.score})"
