"""Engine-vs-engine games played through background workers."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import chess

from arena.config import CONFIG
from arena.core.algorithm import ChessAlgorithm, ContractViolation
from arena.worker import MoveWorker

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    outcome: Optional[chess.Outcome]
    moves: List[str] = field(default_factory=list)  # SAN, in playing order
    final_fen: str = chess.STARTING_FEN

    @property
    def plies(self) -> int:
        return len(self.moves)

    @property
    def result(self) -> str:
        """PGN result string; "*" when the ply limit cut the game short."""
        return self.outcome.result() if self.outcome else "*"


class Match:
    def __init__(self, white: ChessAlgorithm, black: ChessAlgorithm,
                 board: Optional[chess.Board] = None, max_plies: Optional[int] = None):
        self.board = board.copy() if board is not None else chess.Board()
        self.max_plies = CONFIG.match.max_plies if max_plies is None else max_plies
        self.moves: List[str] = []
        self.closed = False
        self.workers = {
            chess.WHITE: MoveWorker(white, name="arena-white"),
            chess.BLACK: MoveWorker(black, name="arena-black"),
        }

    def outcome(self) -> Optional[chess.Outcome]:
        return self.board.outcome(claim_draw=True)

    def step(self) -> chess.Move:
        """Let the side to move pick a move and play it."""
        if self.closed:
            raise RuntimeError("match is closed; start a new Match to play again")
        worker = self.workers[self.board.turn]
        worker.start(self.board)
        move = worker.wait()

        if move not in self.board.legal_moves:
            raise ContractViolation(f"{worker.algorithm!r} returned illegal move {move} in {self.board.fen()}")

        san = self.board.san(move)
        logger.info("Move: %s", san)
        worker.commit(self.board, move)
        self.board.push(move)
        self.moves.append(san)
        return move

    def play(self) -> MatchResult:
        """Play until the game ends or max_plies is reached.

        A match is single-use: the workers are shut down on return.
        """
        try:
            outcome = self.outcome()
            while outcome is None and len(self.moves) < self.max_plies:
                self.step()
                outcome = self.outcome()
        finally:
            self.close()

        if outcome is None:
            logger.info("Stopped after %d plies without a result", len(self.moves))
        elif outcome.winner is None:
            logger.info("Draw! (%s)", outcome.termination.name.lower())
        else:
            logger.info("%s wins!", chess.COLOR_NAMES[outcome.winner].capitalize())

        return MatchResult(outcome=outcome, moves=list(self.moves), final_fen=self.board.fen())

    def close(self) -> None:
        """Shut down both workers. A closed match cannot be stepped again."""
        if self.closed:
            return
        self.closed = True
        for worker in self.workers.values():
            worker.shutdown()
