"""Chess Arena: pluggable move-selection algorithms playing against each other.

Modules:
- config: dataclass settings loaded from arena.toml
- core: algorithm contract, evaluators, one-ply and alpha-beta engines
- registry: named player presets
- worker: background move computation with a single-slot handoff
- match: engine-vs-engine games
"""

from .core import ChessAlgorithm, ContractViolation, SingleLookaheadEngine, TreeSearchEngine
from .registry import ALL_PLAYER_TYPES, create_player, player_names
from .match import Match, MatchResult
from .worker import MoveWorker

__all__ = [
    "ChessAlgorithm",
    "ContractViolation",
    "SingleLookaheadEngine",
    "TreeSearchEngine",
    "ALL_PLAYER_TYPES",
    "create_player",
    "player_names",
    "Match",
    "MatchResult",
    "MoveWorker",
]
