"""Named player presets, each building a configured algorithm for one side."""

from typing import Callable, List, Tuple

import chess

from arena.config import CONFIG
from arena.core.algorithm import (
    AlphabeticalChessAlgorithm,
    ChessAlgorithm,
    FirstMoveAlgorithm,
    RandomChessAlgorithm,
)
from arena.core import evaluators
from arena.core.lookahead import SingleLookaheadEngine
from arena.core.tree_search import TreeSearchEngine

PlayerTypeSupplier = Callable[[chess.Color], ChessAlgorithm]

# Opponent-relative evaluators need the opponent to move at the horizon,
# which an even depth guarantees. Pacifist shares it so its check and mate
# sentinels are judged against the opponent, as in the one-ply preset.
EVEN_SEARCH_DEPTH = 2

ALL_PLAYER_TYPES: List[Tuple[str, PlayerTypeSupplier]] = [
    ("Random", lambda _: RandomChessAlgorithm()),
    ("Matching", lambda color: SingleLookaheadEngine(color, evaluators.eval_matching_colors)),
    ("Opposite", lambda color: SingleLookaheadEngine(color, evaluators.eval_opposite_colors)),
    ("Pacifist", lambda color: SingleLookaheadEngine(color, evaluators.eval_pacifist)),
    ("First", lambda _: FirstMoveAlgorithm()),
    ("Alphabetical", lambda _: AlphabeticalChessAlgorithm()),
    ("Huddle", lambda color: SingleLookaheadEngine(color, evaluators.eval_huddle)),
    ("Swarm", lambda color: SingleLookaheadEngine(color, evaluators.eval_swarm)),
    ("Generous", lambda color: SingleLookaheadEngine(color, evaluators.eval_generous)),
    ("I Insist 2", lambda color: SingleLookaheadEngine(color, evaluators.eval_insist_2)),
    ("I Insist 3", lambda color: SingleLookaheadEngine(color, evaluators.eval_insist_3)),
    ("Matching Search", lambda color: TreeSearchEngine(
        color, evaluators.eval_matching_colors, CONFIG.search.depth)),
    ("Huddle Search", lambda color: TreeSearchEngine(
        color, evaluators.eval_huddle, CONFIG.search.depth)),
    ("Swarm Search", lambda color: TreeSearchEngine(
        color, evaluators.eval_swarm, CONFIG.search.depth)),
    ("Pacifist Search", lambda color: TreeSearchEngine(
        color, evaluators.eval_pacifist, EVEN_SEARCH_DEPTH)),
    ("Generous Search", lambda color: TreeSearchEngine(
        color, evaluators.eval_generous, EVEN_SEARCH_DEPTH)),
]


def player_names() -> List[str]:
    return [name for name, _ in ALL_PLAYER_TYPES]


def create_player(name: str, color: chess.Color) -> ChessAlgorithm:
    """Build the preset called ``name`` playing ``color``."""
    for preset, supplier in ALL_PLAYER_TYPES:
        if preset == name:
            return supplier(color)
    raise KeyError(f"Unknown player type {name!r}; choose from {', '.join(player_names())}")
