"""
Tests for the static evaluator: decisive scores, symmetry and positional ordering.
"""

import pytest

from uttt_core import BoardState, Evaluator, Move, RandomAgent
from uttt_core.config import EvalConfig


def random_positions(count, seed):
    """Yield positions reached by random play, one per ply."""
    board = BoardState()
    agents = {1: RandomAgent(1, rng=seed), 2: RandomAgent(2, rng=seed + 1)}
    player = 1
    produced = 0
    while produced < count:
        if board.is_terminal():
            board, player = BoardState(), 1
        board.apply_move(agents[player].get_move(board), player)
        player = 3 - player
        produced += 1
        yield board.clone()


class TestDecisive:
    def setup_method(self):
        self.ev = Evaluator()

    def test_macro_win_scores_sentinel(self):
        b = BoardState.from_sequences([0] * 81, [1, 1, 1, 0, 0, 0, 0, 0, 0])
        assert self.ev.score(b, 1) == self.ev.cfg.win_score
        assert self.ev.score(b, 2) == -self.ev.cfg.win_score

    def test_macro_loss(self):
        b = BoardState.from_sequences([0] * 81, [2, 0, 0, 0, 2, 0, 0, 0, 2])
        assert self.ev.score(b, 1) == -self.ev.cfg.win_score

    def test_macro_draw_is_zero(self):
        b = BoardState.from_sequences([0] * 81, [3] * 9)
        assert self.ev.score(b, 1) == 0
        assert self.ev.score(b, 2) == 0

    def test_positional_scores_stay_below_sentinel(self):
        for b in random_positions(300, seed=11):
            if b.outcome == 0:
                assert abs(self.ev.score(b, 1)) < self.ev.cfg.win_score

    def test_unknown_player(self):
        with pytest.raises(ValueError):
            self.ev.score(BoardState(), 0)


class TestSymmetry:
    def test_score_negates_between_players(self):
        ev = Evaluator()
        for b in random_positions(400, seed=21):
            assert ev.score(b, 1) == -ev.score(b, 2)

    def test_returns_int(self):
        assert isinstance(Evaluator().score(BoardState(), 1), int)


class TestPositional:
    def setup_method(self):
        self.ev = Evaluator()

    def test_two_in_a_row_with_the_move(self, field_with):
        # sub-board 0: X X . / O O . / . . . with player 1 to move
        field = field_with({(0, 0): 1, (0, 1): 1, (1, 0): 2, (1, 1): 2})
        b = BoardState.from_sequences(field, [-1] * 9)
        assert self.ev.score(b, 1) > self.ev.score(b, 2)

    def test_two_in_a_row_with_the_move_and_no_active_sub_board(self, field_with):
        field = field_with({(0, 0): 1, (0, 1): 1, (1, 0): 2, (1, 1): 2})
        b = BoardState.from_sequences(field, [0] * 9)
        assert b.active == frozenset()
        assert b.outcome == 0
        assert self.ev.score(b, 1) > self.ev.score(b, 2)

    @pytest.mark.parametrize("active", range(9))
    def test_two_in_a_row_with_the_move_single_active(self, field_with, active):
        field = field_with({(0, 0): 1, (0, 1): 1, (1, 0): 2, (1, 1): 2})
        macro = [0] * 9
        macro[active] = -1
        b = BoardState.from_sequences(field, macro)
        assert b.active == frozenset({active})
        assert self.ev.score(b, 1) > self.ev.score(b, 2)

    def test_grid_weights_centre_corner_edge(self):
        def single(r, c):
            grid = [[0] * 3 for _ in range(3)]
            grid[r][c] = 1
            return self.ev.grid_score(grid)
        assert single(1, 1) > single(0, 0) > single(0, 1)

    def test_two_in_a_row_beats_isolated_marks(self):
        paired = [[1, 1, 0], [0, 0, 0], [0, 0, 0]]
        apart = [[1, 0, 0], [0, 0, 0], [0, 1, 0]]
        assert self.ev.grid_score(paired) > self.ev.grid_score(apart)

    def test_won_sub_board_position_on_macro(self):
        # no active sub-board, so only the macro term differs
        def with_won(bi):
            macro = [0] * 9
            macro[bi] = 1
            return self.ev.score(BoardState.from_sequences([0] * 81, macro), 1)
        assert with_won(4) > with_won(0) > with_won(1) > 0

    def test_macro_term_dominates_sub_boards(self, field_with):
        # player 1 owns an edge sub-board; player 2 has the best local shape
        # it can get in every other open sub-board
        cells = {}
        for bi in (0, 2, 3, 4, 5, 6, 7, 8):
            r0, c0 = (bi // 3) * 3, (bi % 3) * 3
            for dr, dc in ((0, 0), (0, 2), (1, 1), (2, 1)):
                cells[(r0 + dr, c0 + dc)] = 2
        macro = [-1, 1, -1, -1, -1, -1, -1, -1, -1]
        b = BoardState.from_sequences(field_with(cells), macro)
        assert b.outcome == 0
        assert self.ev.score(b, 1) > 0

    def test_every_opening_move_scores_the_same(self):
        scores = set()
        for move in BoardState().available_moves():
            b = BoardState()
            b.apply_move(move, 1)
            scores.add(self.ev.score(b, 1))
        assert len(scores) == 1


class TestEvalConfig:
    def test_defaults_are_valid(self):
        EvalConfig().validate()

    def test_sub_board_weight_must_be_smaller(self):
        with pytest.raises(ValueError):
            EvalConfig(macro_weight=5, subboard_weight=5).validate()

    def test_position_order_enforced(self):
        with pytest.raises(ValueError):
            EvalConfig(position_weights=[[2, 3, 2], [3, 4, 3], [2, 3, 2]]).validate()

    def test_sentinel_must_dominate(self):
        with pytest.raises(ValueError):
            EvalConfig(win_score=1000).validate()

    def test_evaluator_rejects_bad_config(self):
        with pytest.raises(ValueError):
            Evaluator(EvalConfig(macro_weight=1, subboard_weight=2))
