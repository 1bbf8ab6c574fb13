"""Move-selection contract shared by every player algorithm, plus the baseline players."""

import random
from abc import ABC, abstractmethod
from typing import List, Optional

import chess

from arena.config import CONFIG


class ContractViolation(RuntimeError):
    """A caller broke a precondition of the core. Never handled inside arena."""


def available_moves(board: chess.Board) -> List[chess.Move]:
    """Legal moves in python-chess generation order."""
    return list(board.legal_moves)


def require_moves(board: chess.Board) -> List[chess.Move]:
    moves = available_moves(board)
    if not moves:
        raise ContractViolation(f"select_move called on a terminal position: {board.fen()}")
    return moves


class ChessAlgorithm(ABC):
    """
    A strategy that picks one legal move for the side to move.

    select_move must return a member of board.legal_moves and must not
    mutate the board it is given. notify_committed is called once the
    harness has actually played a move for this side; stateless algorithms
    ignore it.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng

    def rng(self) -> random.Random:
        # A fresh generator per call keeps concurrent searches independent.
        return self._rng if self._rng is not None else random.Random()

    @abstractmethod
    def select_move(self, board: chess.Board) -> chess.Move:
        ...

    def notify_committed(self, board: chess.Board, move: chess.Move) -> None:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class TiedMoves:
    """
    Running best score and the moves tied with it.

    A score within epsilon of the best joins the tie set without moving the
    best score; a strictly better score restarts the set.
    """

    def __init__(self, epsilon: Optional[float] = None):
        self.epsilon = CONFIG.search.tie_epsilon if epsilon is None else epsilon
        self.best_score = float("-inf")
        self.moves: List[chess.Move] = []

    def offer(self, move: chess.Move, score: float) -> None:
        # Equality covers infinite scores, whose difference is nan.
        if score == self.best_score or abs(score - self.best_score) < self.epsilon:
            self.moves.append(move)
        elif score > self.best_score:
            self.best_score = score
            self.moves = [move]

    def choose(self, rng: random.Random) -> chess.Move:
        return self.moves[rng.randrange(len(self.moves))]

    def __len__(self) -> int:
        return len(self.moves)


class RandomChessAlgorithm(ChessAlgorithm):
    """Uniformly random legal move."""

    def select_move(self, board: chess.Board) -> chess.Move:
        moves = require_moves(board)
        return moves[self.rng().randrange(len(moves))]


class FirstMoveAlgorithm(ChessAlgorithm):
    """
    Deterministic: the move whose (source, destination) comes first when
    reading the board from the mover's own back rank, rank before file.
    """

    def select_move(self, board: chess.Board) -> chess.Move:
        moves = require_moves(board)
        flip = board.turn == chess.BLACK

        def key(m: chess.Move):
            src_rank = chess.square_rank(m.from_square)
            dst_rank = chess.square_rank(m.to_square)
            if flip:
                src_rank, dst_rank = 7 - src_rank, 7 - dst_rank
            return (
                src_rank,
                chess.square_file(m.from_square),
                dst_rank,
                chess.square_file(m.to_square),
                m.promotion or 0,
            )

        return min(moves, key=key)


class AlphabeticalChessAlgorithm(ChessAlgorithm):
    """Deterministic: alphabetically first move in lower-cased SAN."""

    def select_move(self, board: chess.Board) -> chess.Move:
        moves = require_moves(board)
        return min(moves, key=lambda m: board.san(m).lower())
