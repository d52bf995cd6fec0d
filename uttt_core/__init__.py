"""Decision core for an Ultimate Tic-Tac-Toe bot: board model, evaluation and minimax search."""

from .agents import MinimaxAgent, RandomAgent, SimpleStrategyAgent
from .board import BoardState, check_3x3_winner
from .errors import IllegalMove, MalformedInput
from .evaluator import Evaluator
from .move import Move
from .search import SearchEngine

__all__ = [
    "BoardState",
    "Evaluator",
    "IllegalMove",
    "MalformedInput",
    "MinimaxAgent",
    "Move",
    "RandomAgent",
    "SearchEngine",
    "SimpleStrategyAgent",
    "check_3x3_winner",
]
