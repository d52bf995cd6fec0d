import logging
import time
from typing import Optional, Tuple

import numpy as np

from .board import BoardState, PLAYERS
from .config import CONFIG
from .evaluator import Evaluator
from .move import Move

logger = logging.getLogger(__name__)


class SearchEngine:
    """
    Fixed-depth minimax for one player.

    Every explored move is played on its own clone, so the board passed in is
    never touched. Equal-scoring moves are broken with `rng`, a numpy
    Generator (or a seed for one), which makes results reproducible.
    """

    def __init__(self, player: int, rng=None, evaluator: Optional[Evaluator] = None, depth: Optional[int] = None) -> None:
        if player not in PLAYERS:
            raise ValueError(f"unknown player {player}")
        self.player = player
        self.opponent = 3 - player
        self.rng = np.random.default_rng(CONFIG.search.seed if rng is None else rng)
        self.evaluator = evaluator or Evaluator()
        self.max_depth = CONFIG.search.depth if depth is None else depth
        self.nodes = 0

    def choose_move(self, board: BoardState, depth: Optional[int] = None) -> Optional[Move]:
        """Best move for `self.player`, or None when the search has nothing to play."""
        depth = self.max_depth if depth is None else depth
        self.nodes = 0
        start_time = time.time()

        move, score = self.search(board, depth, True)

        elapsed = time.time() - start_time
        if move.is_sentinel():
            logger.info("depth %d: no move to play (score %d)", depth, score)
            return None
        logger.debug(
            "depth %d score %d nodes %d time %.3fs move %d %d",
            depth, score, self.nodes, elapsed, move.row, move.col,
        )
        return move

    def search(self, board: BoardState, depth: int, maximizing: bool) -> Tuple[Move, int]:
        """
        Depth-limited minimax. Returns the chosen move and its backed-up score;
        at a leaf the move is a sentinel and the score is the static evaluation.
        """
        self.nodes += 1
        moves = board.available_moves()
        if depth <= 0 or not moves:
            score = self.evaluator.score(board, self.player)
            return Move(score=score), score

        mover = self.player if maximizing else self.opponent
        for mv in moves:
            child = board.clone()
            child.apply_move(mv, mover)
            _, mv.score = self.search(child, depth - 1, not maximizing)

        best = max(m.score for m in moves) if maximizing else min(m.score for m in moves)
        candidates = [m for m in moves if m.score == best]
        choice = candidates[int(self.rng.integers(len(candidates)))]
        return choice, choice.score
