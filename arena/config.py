# arena/config.py
from dataclasses import dataclass, field
from typing import Dict
import logging
import os
import tomllib

logger = logging.getLogger(__name__)

# Standard material values, king excluded from material counts.
PIECE_VALUES = {
    "PAWN": 1.0,
    "KNIGHT": 3.0,
    "BISHOP": 3.0,
    "ROOK": 5.0,
    "QUEEN": 9.0,
    "KING": 0.0,
}

@dataclass
class SearchConfig:
    depth: int = 2
    tie_epsilon: float = 0.0001  # scores closer than this are treated as equal

@dataclass
class EvalConfig:
    piece_values: Dict[str, float] = field(default_factory=lambda: PIECE_VALUES.copy())
    checkmate_score: float = -10e20
    check_score: float = -10e10  # also used for stalemate
    insist_offset: float = 10000.0
    insist_threshold: float = 0.0001

@dataclass
class MatchConfig:
    max_plies: int = 400
    white: str = "Random"
    black: str = "Random"

@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    match: MatchConfig = field(default_factory=MatchConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "arena.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("search", "eval", "match"):
            target = getattr(cfg, section)
            for k, v in raw.get(section, {}).items():
                if not hasattr(target, k):
                    continue
                current = getattr(target, k)
                # tables like piece_values are merged, so a partial override keeps the rest
                if isinstance(current, dict) and isinstance(v, dict):
                    current.update(v)
                else:
                    setattr(target, k, v)
        if "log_level" in raw:
            cfg.log_level = raw["log_level"]
        return cfg

# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("ARENA_CONFIG_TOML", "arena.toml"))
# allow env override of depth for quick experiments
override_depth = os.environ.get("ARENA_SEARCH_DEPTH")
if override_depth:
    try:
        CONFIG.search.depth = int(override_depth)
    except ValueError:
        logger.warning("Ignoring non-integer ARENA_SEARCH_DEPTH=%r", override_depth)
