from typing import Optional

import numpy as np

from .board import BoardState, DRAWN, EMPTY, OPEN, PLAYER_ONE, PLAYER_TWO, PLAYERS, line_values
from .config import CONFIG, EvalConfig


def count_two_in_rows(grid, player: int) -> int:
    """
    Count lines (rows, cols, diags) in `grid` where `player` has exactly two marks and one empty.
    Used for heuristic (threat/opportunity counts).
    """
    vals = line_values(grid)
    mine = (vals == player).sum(axis=1)
    empty = (vals == EMPTY).sum(axis=1)
    return int(((mine == 2) & (empty == 1)).sum())


class Evaluator:
    """
    Static evaluation of a BoardState, positive = good for the given player.

    1. Decided macro board: ±win_score, draw 0
    2. Macro grid as a tic-tac-toe position: won sub-boards weighted by
       position (centre > corner > edge) and two-in-a-rows, times macro_weight
    3. Each open sub-board scored the same way, times subboard_weight
    4. Initiative of the side to move, also at sub-board scale:
       • access: best position weight among the sub-boards it may play in
       • tempo: one bonus per open sub-board where it can complete a line

    Everything is computed from player 1's side and negated for player 2.
    """

    def __init__(self, cfg: Optional[EvalConfig] = None) -> None:
        self.cfg = cfg or CONFIG.eval
        self.cfg.validate()
        self.weights = np.array(self.cfg.position_weights, dtype=np.int64)

    def score(self, board: BoardState, player: int) -> int:
        if player not in PLAYERS:
            raise ValueError(f"unknown player {player}")
        value = self._score_player_one(board)
        return value if player == PLAYER_ONE else -value

    def _score_player_one(self, board: BoardState) -> int:
        cfg = self.cfg
        if board.outcome == PLAYER_ONE:
            return cfg.win_score
        if board.outcome == PLAYER_TWO:
            return -cfg.win_score
        if board.outcome == DRAWN:
            return 0

        score = cfg.macro_weight * self.grid_score(board.statuses)
        local = 0
        for bi in range(9):
            if board.status(bi) == OPEN:
                local += self.grid_score(board.sub_board(bi))
        local += self._initiative(board)
        return int(score + cfg.subboard_weight * local)

    def grid_score(self, grid) -> int:
        """Position weights plus two-in-a-rows of one 3×3 grid, from player 1's side."""
        g = np.asarray(grid)
        score = int((self.weights * (g == PLAYER_ONE)).sum() - (self.weights * (g == PLAYER_TWO)).sum())
        score += self.cfg.two_in_row_weight * (
            count_two_in_rows(g, PLAYER_ONE) - count_two_in_rows(g, PLAYER_TWO)
        )
        return score

    def _initiative(self, board: BoardState) -> int:
        mover = board.next_player
        access = max((int(self.weights[bi // 3, bi % 3]) for bi in board.active), default=0)
        threats = sum(1 for bi in board.open_boards() if count_two_in_rows(board.sub_board(bi), mover) > 0)
        value = access + self.cfg.tempo_bonus * threats
        return value if mover == PLAYER_ONE else -value
