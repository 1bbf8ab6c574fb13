"""Core move selection: the algorithm contract, evaluators, and the two search engines."""

from .algorithm import (
    AlphabeticalChessAlgorithm,
    ChessAlgorithm,
    ContractViolation,
    FirstMoveAlgorithm,
    RandomChessAlgorithm,
    TiedMoves,
    available_moves,
)
from .evaluators import EVALUATORS, OPPONENT_RELATIVE, Evaluator
from .lookahead import SingleLookaheadEngine
from .tree_search import TreeSearchEngine
