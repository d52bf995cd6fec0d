import logging
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .errors import IllegalMove, MalformedInput
from .move import Move

logger = logging.getLogger(__name__)

# Cell values
EMPTY = 0
PLAYER_ONE = 1
PLAYER_TWO = 2
PLAYERS = (PLAYER_ONE, PLAYER_TWO)

# Sub-board / macro board status values
OPEN = 0
DRAWN = 3

# Macroboard payload sentinels
MACRO_ACTIVE = -1
MACRO_INACTIVE = 0
MACRO_DRAWN = DRAWN

ALL_BOARDS = frozenset(range(9))

# The 8 lines of a 3×3 grid, as index arrays usable on any (3, 3) array
LINES = [
    [(0, 0), (0, 1), (0, 2)],
    [(1, 0), (1, 1), (1, 2)],
    [(2, 0), (2, 1), (2, 2)],
    [(0, 0), (1, 0), (2, 0)],
    [(0, 1), (1, 1), (2, 1)],
    [(0, 2), (1, 2), (2, 2)],
    [(0, 0), (1, 1), (2, 2)],
    [(0, 2), (1, 1), (2, 0)],
]
LINE_ROWS = np.array([[r for r, _ in line] for line in LINES])
LINE_COLS = np.array([[c for _, c in line] for line in LINES])


def board_index(row: int, col: int) -> int:
    """
    Compute the index (0..8) of the 3×3 sub-board containing global cell (row, col).
    """
    return (row // 3) * 3 + (col // 3)


def target_index(row: int, col: int) -> int:
    """
    Index (0..8) of the sub-board selected by the cell's position inside its own sub-board.
    """
    return (row % 3) * 3 + (col % 3)


def line_values(grid) -> np.ndarray:
    """Return an (8, 3) array with the contents of every line of a 3×3 grid."""
    return np.asarray(grid)[LINE_ROWS, LINE_COLS]


def check_3x3_winner(grid) -> int:
    """
    Check a single 3×3 grid for a winner:
     - Returns PLAYER_ONE or PLAYER_TWO if that player holds a full line
     - Returns OPEN if there is no line and some slot is still empty
     - Returns DRAWN when every slot is taken and nobody holds a line

    Used for a sub-board's cells and for the macro status grid alike. A DRAWN
    slot on the macro grid belongs to neither player.
    """
    vals = line_values(grid)
    for player in PLAYERS:
        if (vals == player).all(axis=1).any():
            return player
    if (np.asarray(grid) == OPEN).any():
        return OPEN
    return DRAWN


def _decode(values, expected: int, name: str, allowed: Sequence[int]) -> List[int]:
    if isinstance(values, (str, bytes)):
        raise MalformedInput(f"{name}: expected a sequence of integers, got a string")
    try:
        tokens = list(values)
    except TypeError:
        raise MalformedInput(f"{name}: expected a sequence of integers, got {type(values).__name__}")
    if len(tokens) != expected:
        raise MalformedInput(f"{name}: expected {expected} values, got {len(tokens)}")
    decoded = []
    for i, token in enumerate(tokens):
        if isinstance(token, (bool, float)):
            raise MalformedInput(f"{name}[{i}]: not an integer: {token!r}")
        try:
            value = int(token.strip()) if isinstance(token, str) else int(token)
        except (TypeError, ValueError):
            raise MalformedInput(f"{name}[{i}]: not an integer: {token!r}")
        if value not in allowed:
            raise MalformedInput(f"{name}[{i}]: value {value} out of range")
        decoded.append(value)
    return decoded


class BoardState:
    """
    Represents the full Ultimate Tic-Tac-Toe position:
    - the 9×9 cell grid (EMPTY / PLAYER_ONE / PLAYER_TWO)
    - the 3×3 status grid of sub-boards (OPEN / PLAYER_ONE / PLAYER_TWO / DRAWN)
    - the set of active sub-boards, i.e. legal targets for the next move
    - the macro outcome, which is the status grid run through the same win-check
    """

    def __init__(self) -> None:
        self.cells: np.ndarray = np.zeros((9, 9), dtype=np.int8)
        self.statuses: np.ndarray = np.zeros((3, 3), dtype=np.int8)
        self.outcome: int = OPEN
        self.active: frozenset = ALL_BOARDS
        self.last_move: Optional[Move] = None

    # ------------------------------------------------------------------
    # Construction from protocol payloads
    # ------------------------------------------------------------------
    @classmethod
    def from_sequences(cls, field: Iterable, macroboard: Iterable) -> "BoardState":
        """
        Build a board from the 81 field values (row-major, 0 empty, 1/2 owner)
        and the 9 macroboard values (-1 active, 0 inactive, 1/2 won, 3 drawn).

        A 0 or -1 macro entry whose cells already hold a line or are full is
        taken as decided, since upstream reports drawn sub-boards as 0.
        """
        cells = _decode(field, 81, "field", (EMPTY, PLAYER_ONE, PLAYER_TWO))
        macro = _decode(macroboard, 9, "macroboard", (MACRO_ACTIVE, MACRO_INACTIVE, PLAYER_ONE, PLAYER_TWO, MACRO_DRAWN))

        st = cls()
        st.cells = np.array(cells, dtype=np.int8).reshape(9, 9)
        active = set()
        for bi, value in enumerate(macro):
            br, bc = divmod(bi, 3)
            if value in (PLAYER_ONE, PLAYER_TWO, MACRO_DRAWN):
                st.statuses[br, bc] = value
                continue
            status = check_3x3_winner(st.sub_board(bi))
            st.statuses[br, bc] = status
            if status != OPEN:
                logger.debug("macroboard[%d]=%d but cells show status %d", bi, value, status)
            elif value == MACRO_ACTIVE:
                active.add(bi)
        st.outcome = check_3x3_winner(st.statuses)
        st.active = frozenset(active) if st.outcome == OPEN else frozenset()
        return st

    @classmethod
    def from_strings(cls, field: str, macroboard: str) -> "BoardState":
        """Same as from_sequences, for comma separated payloads (';' may separate field rows)."""
        return cls.from_sequences(field.replace(";", ",").split(","), macroboard.split(","))

    def to_sequences(self) -> Tuple[List[int], List[int]]:
        """Encode back into the (field, macroboard) payload format."""
        field = [int(v) for v in self.cells.flatten()]
        macro = []
        for bi in range(9):
            status = self.status(bi)
            if status != OPEN:
                macro.append(status)
            elif bi in self.active:
                macro.append(MACRO_ACTIVE)
            else:
                macro.append(MACRO_INACTIVE)
        return field, macro

    def clone(self) -> "BoardState":
        """Return a deep copy of this state, including the active set."""
        st = BoardState.__new__(BoardState)
        st.cells = self.cells.copy()
        st.statuses = self.statuses.copy()
        st.outcome = self.outcome
        st.active = self.active
        st.last_move = self.last_move
        return st

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def sub_board(self, bi: int) -> np.ndarray:
        """Return a (3, 3) view of sub-board `bi`."""
        r0, c0 = (bi // 3) * 3, (bi % 3) * 3
        return self.cells[r0:r0 + 3, c0:c0 + 3]

    def status(self, bi: int) -> int:
        return int(self.statuses[bi // 3, bi % 3])

    def open_boards(self) -> List[int]:
        return [bi for bi in range(9) if self.status(bi) == OPEN]

    def cell(self, row: int, col: int) -> int:
        return int(self.cells[row, col])

    def count(self, player: int) -> int:
        return int((self.cells == player).sum())

    @property
    def next_player(self) -> int:
        """Player 1 opens, so with equal counts it is player 1's turn."""
        return PLAYER_ONE if self.count(PLAYER_ONE) <= self.count(PLAYER_TWO) else PLAYER_TWO

    def available_moves(self) -> List[Move]:
        """
        Return all empty cells inside active sub-boards, sub-boards in
        row-major order and cells row-major within each.
        """
        moves: List[Move] = []
        for bi in sorted(self.active):
            r0, c0 = (bi // 3) * 3, (bi % 3) * 3
            for lr, lc in np.argwhere(self.sub_board(bi) == EMPTY):
                moves.append(Move(r0 + int(lr), c0 + int(lc)))
        return moves

    def is_terminal(self) -> bool:
        if self.outcome != OPEN:
            return True
        return not any((self.sub_board(bi) == EMPTY).any() for bi in self.active)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def apply_move(self, move, player: int) -> None:
        """
        Place `player` at global coordinates (row, col). Updates:
         - the cell
         - the status of the sub-board holding it
         - the macro outcome
         - the active set, picked by the cell's position inside its sub-board;
           a decided target opens every undecided sub-board (free move)
        """
        r, c = move
        if player not in PLAYERS:
            raise IllegalMove(f"unknown player {player}")
        if not (0 <= r < 9 and 0 <= c < 9):
            raise IllegalMove(f"({r}, {c}) is off the board")
        bi = board_index(r, c)
        if bi not in self.active:
            raise IllegalMove(f"({r}, {c}) is in sub-board {bi}, active: {sorted(self.active)}")
        if self.cells[r, c] != EMPTY:
            raise IllegalMove(f"({r}, {c}) is already taken by player {self.cells[r, c]}")

        self.cells[r, c] = player
        self.last_move = Move(r, c)

        br, bc = divmod(bi, 3)
        if self.statuses[br, bc] == OPEN:
            self.statuses[br, bc] = check_3x3_winner(self.sub_board(bi))
        self.outcome = check_3x3_winner(self.statuses)

        if self.outcome != OPEN:
            self.active = frozenset()
            return
        target = target_index(r, c)
        if self.status(target) == OPEN:
            self.active = frozenset((target,))
        else:
            self.active = frozenset(self.open_boards())

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------
    def render(self) -> str:
        symbols = {EMPTY: '.', PLAYER_ONE: 'X', PLAYER_TWO: 'O'}
        lines = []
        for big_row in range(3):
            for small_row in range(3):
                row = self.cells[big_row * 3 + small_row]
                chunks = [" ".join(symbols[int(v)] for v in row[c:c + 3]) for c in (0, 3, 6)]
                lines.append("   ".join(chunks))
            if big_row < 2:
                lines.append("")
        return "\n".join(lines)

    def print_board(self) -> None:
        print(self.render())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoardState):
            return NotImplemented
        return (
            np.array_equal(self.cells, other.cells)
            and np.array_equal(self.statuses, other.statuses)
            and self.active == other.active
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"BoardState(outcome={self.outcome}, active={sorted(self.active)}, moves={81 - self.count(EMPTY)})"
