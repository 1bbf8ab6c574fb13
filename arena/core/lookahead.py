"""Greedy one-ply engine: score every immediate successor, keep the best."""

import logging
import random
from typing import Optional

import chess

from arena.core.algorithm import ChessAlgorithm, TiedMoves, require_moves
from arena.core.evaluators import Evaluator, evaluator_name

logger = logging.getLogger(__name__)


class SingleLookaheadEngine(ChessAlgorithm):
    """Plays the move whose resulting position ``evaluator`` scores highest for ``color``."""

    def __init__(self, color: chess.Color, evaluator: Evaluator, rng: Optional[random.Random] = None):
        super().__init__(rng)
        self.color = color
        self.evaluator = evaluator

    def tied_moves(self, board: chess.Board) -> TiedMoves:
        """Score every legal move and return the tie set of the best ones."""
        tied = TiedMoves()
        for move in require_moves(board):
            child = board.copy(stack=False)
            child.push(move)
            tied.offer(move, self.evaluator(child, self.color))
        return tied

    def select_move(self, board: chess.Board) -> chess.Move:
        tied = self.tied_moves(board)
        logger.debug("%r best %s among %d tied moves", self, tied.best_score, len(tied))
        return tied.choose(self.rng())

    def __repr__(self) -> str:
        return f"SingleLookaheadEngine(color={chess.COLOR_NAMES[self.color]}, eval={evaluator_name(self.evaluator)})"
