# Ultimate Tic-Tac-Toe bot: line protocol loop around the uttt_core engine
import logging
import sys
from typing import Optional, TextIO

from uttt_core import BoardState, MalformedInput, SearchEngine
from uttt_core.config import CONFIG

logger = logging.getLogger(__name__)


class Bot:
    """
    Keeps the latest game data sent by the server and answers move requests:
     - settings your_botid <id>
     - update game field|macroboard|round|move <value>
     - action move <time>  → place_move <row> <col>
    """

    def __init__(self, depth: Optional[int] = None, seed: Optional[int] = None) -> None:
        depth = CONFIG.search.depth if depth is None else depth
        # a move request always needs at least one ply
        self.depth = max(1, depth)
        self.seed = CONFIG.search.seed if seed is None else seed
        self.engine: Optional[SearchEngine] = None
        self.field: Optional[str] = None
        self.macroboard: Optional[str] = None
        self.round_nr = 0
        self.move_nr = 0

    def handle(self, line: str) -> Optional[str]:
        """Process one protocol line; return the reply to print, if any."""
        parts = line.split()
        if not parts:
            return None

        if parts[0] == "settings":
            if len(parts) >= 3 and parts[1] == "your_botid":
                self.engine = SearchEngine(_parse_int(parts[2], "your_botid"), rng=self.seed, depth=self.depth)
            return None

        if parts[0] == "update" and len(parts) >= 4 and parts[1] == "game":
            key, value = parts[2], parts[3]
            if key == "field":
                self.field = value
            elif key == "macroboard":
                self.macroboard = value
            elif key == "round":
                self.round_nr = _parse_int(value, "round")
            elif key == "move":
                self.move_nr = _parse_int(value, "move")
            return None

        if parts[0] == "action" and len(parts) >= 2 and parts[1] == "move":
            return self.make_turn()

        return "unknown command"

    def make_turn(self) -> str:
        if self.engine is None:
            raise MalformedInput("move requested before settings your_botid")
        if self.field is None or self.macroboard is None:
            raise MalformedInput("move requested before field and macroboard were sent")
        board = BoardState.from_strings(self.field, self.macroboard)
        move = self.engine.choose_move(board, self.depth)
        if move is None:
            raise MalformedInput(f"move {self.move_nr} requested on a finished board")
        logger.debug("round %d move %d: playing %d %d", self.round_nr, self.move_nr, move.row, move.col)
        return f"place_move {move.row} {move.col}"


def _parse_int(token: str, name: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise MalformedInput(f"{name}: not an integer: {token!r}")


def run(stdin: TextIO = sys.stdin, stdout: TextIO = sys.stdout, bot: Optional[Bot] = None) -> None:
    bot = bot or Bot()
    for line in stdin:
        reply = bot.handle(line.strip())
        if reply is not None:
            print(reply, file=stdout, flush=True)


def main() -> None:
    # stdout is reserved for protocol replies
    logging.basicConfig(stream=sys.stderr, level=CONFIG.log_level)
    run()


if __name__ == "__main__":
    main()
