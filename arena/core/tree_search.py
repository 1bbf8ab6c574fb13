"""Fixed-depth alpha-beta search over the full move tree."""

import logging
import random
from typing import Optional

import chess

from arena.core.algorithm import ChessAlgorithm, TiedMoves, available_moves, require_moves
from arena.core.evaluators import Evaluator, evaluator_name

logger = logging.getLogger(__name__)

INF = float("inf")
NEG_INF = float("-inf")


class TreeSearchEngine(ChessAlgorithm):
    """
    Fixed-depth minimax with fail-hard alpha-beta pruning.

    Every root move is searched ``depth`` further plies, starting with the
    opponent's reply, and the evaluator is only consulted at the horizon.
    Moves are visited in generation order; there is no move ordering, so
    pruning is whatever that order happens to give.

    Arguments:
        - color: side whose evaluator scores are maximized
        - evaluator: function (board, color) -> score
        - depth: plies searched after the root move; 0 behaves like a
            single lookahead
        - rng: optional random source for tie-breaking
    """

    def __init__(self, color: chess.Color, evaluator: Evaluator, depth: int,
                 rng: Optional[random.Random] = None):
        super().__init__(rng)
        if depth < 0:
            raise ValueError(f"search depth must be non-negative, got {depth}")
        self.color = color
        self.evaluator = evaluator
        self.depth = depth
        self.nodes = 0

    def _evaluate(self, board: chess.Board) -> float:
        self.nodes += 1
        return self.evaluator(board, self.color)

    def _alpha_beta_max(self, board: chess.Board, alpha: float, beta: float, depth: int) -> float:
        if depth == 0:
            return self._evaluate(board)

        for move in available_moves(board):
            board.push(move)
            score = self._alpha_beta_min(board, alpha, beta, depth - 1)
            board.pop()

            # beta-cutoff: the minimizer already has something better
            if score >= beta:
                return beta
            if score > alpha:
                alpha = score

        return alpha

    def _alpha_beta_min(self, board: chess.Board, alpha: float, beta: float, depth: int) -> float:
        if depth == 0:
            return self._evaluate(board)

        for move in available_moves(board):
            board.push(move)
            score = self._alpha_beta_max(board, alpha, beta, depth - 1)
            board.pop()

            # alpha-cutoff: the maximizer already has something better
            if score <= alpha:
                return alpha
            if score < beta:
                beta = score

        return beta

    def tied_moves(self, board: chess.Board) -> TiedMoves:
        """Search every root move and return the tie set of the best ones."""
        self.nodes = 0
        tied = TiedMoves()
        # Search on a private copy so the caller's board is never touched.
        search_board = board.copy(stack=False)
        for move in require_moves(search_board):
            search_board.push(move)
            score = self._alpha_beta_min(search_board, NEG_INF, INF, self.depth)
            search_board.pop()
            tied.offer(move, score)
        return tied

    def select_move(self, board: chess.Board) -> chess.Move:
        tied = self.tied_moves(board)
        logger.debug("Eval: %s (%d tied, %d nodes)", tied.best_score, len(tied), self.nodes)
        return tied.choose(self.rng())

    def __repr__(self) -> str:
        return (f"TreeSearchEngine(color={chess.COLOR_NAMES[self.color]}, "
                f"eval={evaluator_name(self.evaluator)}, depth={self.depth})")
