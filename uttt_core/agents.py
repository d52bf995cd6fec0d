import numpy as np

from .board import OPEN, check_3x3_winner
from .search import SearchEngine


class RandomAgent:
    def __init__(self, player, rng=None):
        self.player = player
        self.rng = np.random.default_rng(rng)

    def get_move(self, board):
        available_moves = board.available_moves()
        return available_moves[int(self.rng.integers(len(available_moves)))] if available_moves else None


class SimpleStrategyAgent:
    def __init__(self, player, rng=None):
        self.player = player
        self.rng = np.random.default_rng(rng)

    def _pick(self, moves):
        return moves[int(self.rng.integers(len(moves)))]

    def get_move(self, board):
        available_moves = board.available_moves()
        if not available_moves:
            return None

        # First, look for moves that win a sub-board
        for move in available_moves:
            if self.wins_sub_board(board, move, self.player):
                return move

        # Then, look for moves that stop the opponent from winning a sub-board
        opponent = 3 - self.player
        for move in available_moves:
            if self.wins_sub_board(board, move, opponent):
                return move

        # Then, prioritize centre cells of sub-boards
        center_moves = [move for move in available_moves if move.target_index == 4]
        if center_moves:
            return self._pick(center_moves)

        # Then, prioritize the centre sub-board
        center_boards = [move for move in available_moves if move.board_index == 4]
        if center_boards:
            return self._pick(center_boards)

        # Otherwise, choose randomly
        return self._pick(available_moves)

    def wins_sub_board(self, board, move, player):
        """Check if `player` taking this cell would win its sub-board"""
        grid = board.sub_board(move.board_index).copy()
        grid[move.row % 3, move.col % 3] = player
        return check_3x3_winner(grid) == player


class MinimaxAgent:
    def __init__(self, player, depth=None, rng=None):
        self.player = player
        self.engine = SearchEngine(player, rng=rng, depth=depth)

    def get_move(self, board):
        if board.outcome != OPEN:
            return None
        return self.engine.choose_move(board)
