# uttt_core/config.py
from dataclasses import dataclass, field
from typing import List, Optional
import os
import tomllib

# Centre > corner > edge, shared by the macro grid and every sub-board
POSITION_WEIGHTS = [
    [3, 2, 3],
    [2, 4, 2],
    [3, 2, 3],
]

@dataclass
class SearchConfig:
    depth: int = 3
    seed: Optional[int] = None  # None means fresh entropy per engine

@dataclass
class EvalConfig:
    win_score: int = 10_000_000
    macro_weight: int = 1000
    subboard_weight: int = 1
    two_in_row_weight: int = 10  # line with two marks and one open slot
    tempo_bonus: int = 25  # side to move can complete a line right now
    position_weights: List[List[int]] = field(
        default_factory=lambda: [row[:] for row in POSITION_WEIGHTS]
    )

    def max_grid_score(self) -> int:
        """Upper bound of the positional score of a single 3×3 grid."""
        return sum(sum(row) for row in self.position_weights) + 8 * self.two_in_row_weight

    def validate(self) -> None:
        w = self.position_weights
        centre, corner, edge = w[1][1], w[0][0], w[0][1]
        if not (centre > corner > edge):
            raise ValueError("position weights must rank centre > corner > edge")
        if len({w[0][0], w[0][2], w[2][0], w[2][2]}) != 1 or len({w[0][1], w[1][0], w[1][2], w[2][1]}) != 1:
            raise ValueError("position weights must be the same for every corner and every edge")
        if self.subboard_weight >= self.macro_weight:
            raise ValueError("subboard_weight must be smaller than macro_weight")
        grid = self.max_grid_score()
        positional = grid * self.macro_weight + (9 * grid + centre + 9 * self.tempo_bonus) * self.subboard_weight
        if self.win_score <= positional:
            raise ValueError(f"win_score must exceed every positional score ({positional})")

@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    log_level: str = "WARNING"

    @staticmethod
    def load_from_toml(path: str = "uttt.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("search", "eval"):
            target = getattr(cfg, section)
            for k, v in raw.get(section, {}).items():
                if hasattr(target, k):
                    setattr(target, k, v)
        if "log_level" in raw:
            cfg.log_level = str(raw["log_level"]).upper()
        cfg.eval.validate()
        return cfg

# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("UTTT_CONFIG_TOML", "uttt.toml"))
# allow env override of depth for quick debugging
override_depth = os.environ.get("UTTT_SEARCH_DEPTH")
if override_depth:
    CONFIG.search.depth = int(override_depth)
