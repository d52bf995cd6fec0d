"""
Tests for the line protocol loop.
"""

import io

import pytest

from game import Bot, run
from uttt_core import BoardState, MalformedInput

EMPTY_FIELD = ",".join(["0"] * 81)
ALL_ACTIVE = ",".join(["-1"] * 9)


def session(*lines, bot=None):
    out = io.StringIO()
    run(io.StringIO("\n".join(lines) + "\n"), out, bot=bot or Bot(depth=1, seed=0))
    return out.getvalue().splitlines()


class TestProtocol:
    def test_move_request(self):
        replies = session(
            "settings your_botid 1",
            f"update game field {EMPTY_FIELD}",
            f"update game macroboard {ALL_ACTIVE}",
            "update game round 1",
            "update game move 1",
            "action move 10000",
        )
        assert len(replies) == 1
        cmd, row, col = replies[0].split()
        assert cmd == "place_move"
        assert 0 <= int(row) <= 8 and 0 <= int(col) <= 8

    def test_reply_is_row_then_column(self):
        # only sub-board 2 is active and only (1, 8) is empty there
        grid = [[1, 2, 1],
                [2, 1, 0],
                [2, 1, 2]]
        field = [0] * 81
        for r in range(3):
            for c in range(3):
                field[r * 9 + 6 + c] = grid[r][c]
        macro = [0, 0, -1, 0, 0, 0, 0, 0, 0]
        board = BoardState.from_sequences(field, macro)
        assert [m.as_tuple() for m in board.available_moves()] == [(1, 8)]

        replies = session(
            "settings your_botid 2",
            "update game field " + ",".join(map(str, field)),
            "update game macroboard " + ",".join(map(str, macro)),
            "action move 500",
        )
        assert replies == ["place_move 1 8"]

    def test_blank_lines_and_other_settings_are_ignored(self):
        replies = session("", "settings timebank 10000", "settings your_bot player1")
        assert replies == []

    def test_non_positive_depth_still_answers(self):
        for depth in (0, -2):
            bot = Bot(depth=depth, seed=0)
            assert bot.depth == 1
            replies = session(
                "settings your_botid 1",
                f"update game field {EMPTY_FIELD}",
                f"update game macroboard {ALL_ACTIVE}",
                "action move 100",
                bot=bot,
            )
            assert len(replies) == 1
            assert replies[0].startswith("place_move ")

    def test_unknown_command(self):
        assert session("hello there") == ["unknown command"]

    def test_action_before_settings(self):
        with pytest.raises(MalformedInput):
            session(f"update game field {EMPTY_FIELD}", f"update game macroboard {ALL_ACTIVE}", "action move 100")

    def test_action_before_field(self):
        with pytest.raises(MalformedInput):
            session("settings your_botid 1", "action move 100")

    def test_malformed_field(self):
        with pytest.raises(MalformedInput):
            session("settings your_botid 1", "update game field 0,0,0", f"update game macroboard {ALL_ACTIVE}",
                    "action move 100")

    def test_malformed_bot_id(self):
        with pytest.raises(MalformedInput):
            session("settings your_botid one")

    def test_finished_board(self):
        with pytest.raises(MalformedInput):
            session("settings your_botid 1", f"update game field {EMPTY_FIELD}",
                    "update game macroboard 1,1,1,0,0,0,0,0,0", "action move 100")
