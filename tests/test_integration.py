"""
Integration tests for the arena.

Tests components working together end-to-end:
- Full games between registered presets
- Background worker handoff (single slot, discard on restart, errors)
- notify_committed plumbing
- Command-line match runner
"""

import random
import threading

import chess
import pytest

from arena.core.algorithm import (
    AlphabeticalChessAlgorithm,
    ChessAlgorithm,
    ContractViolation,
    FirstMoveAlgorithm,
    RandomChessAlgorithm,
)
from arena.core.evaluators import eval_matching_colors
from arena.core.lookahead import SingleLookaheadEngine
from arena.core.tree_search import TreeSearchEngine
from arena.match import Match, MatchResult
from arena.registry import create_player
from arena.worker import MoveWorker
from interface import cli

BACK_RANK = "6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1"
FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"


class ScriptedAlgorithm(ChessAlgorithm):
    """Plays the given UCI moves in order, one per call."""

    def __init__(self, *ucis):
        super().__init__()
        self.ucis = list(ucis)

    def select_move(self, board):
        return chess.Move.from_uci(self.ucis.pop(0))


class GatedAlgorithm(FirstMoveAlgorithm):
    """Blocks inside select_move until released."""

    def __init__(self):
        super().__init__()
        self.release = threading.Event()

    def select_move(self, board):
        self.release.wait(timeout=5)
        return super().select_move(board)


class RecordingAlgorithm(RandomChessAlgorithm):
    def __init__(self):
        super().__init__(rng=random.Random(0))
        self.committed = []
        self.threads = []

    def notify_committed(self, board, move):
        assert move in board.legal_moves
        self.committed.append(move)
        self.threads.append(threading.current_thread().name)


def replay(result: MatchResult, fen: str = chess.STARTING_FEN) -> chess.Board:
    board = chess.Board(fen)
    for san in result.moves:
        board.push_san(san)
    return board


# ════════════════════════════════════════════════════════════════════════════
#  FULL GAMES
# ════════════════════════════════════════════════════════════════════════════

class TestFullGame:
    def test_random_vs_random_completes(self):
        match = Match(
            RandomChessAlgorithm(rng=random.Random(1)),
            RandomChessAlgorithm(rng=random.Random(2)),
            max_plies=400,
        )
        result = match.play()
        assert result.outcome is not None or result.plies == 400
        assert replay(result).fen() == result.final_fen

    def test_deterministic_players_repeat_game(self):
        first = Match(FirstMoveAlgorithm(), AlphabeticalChessAlgorithm(), max_plies=40).play()
        second = Match(FirstMoveAlgorithm(), AlphabeticalChessAlgorithm(), max_plies=40).play()
        assert first.moves == second.moves

    def test_mate_in_one_ends_game(self):
        def mate_seeker(board, color):
            return 1.0 if board.is_checkmate() and board.turn != color else 0.0

        match = Match(
            TreeSearchEngine(chess.WHITE, mate_seeker, 0),
            RandomChessAlgorithm(),
            board=chess.Board(BACK_RANK),
        )
        result = match.play()
        assert result.moves == ["Ra8#"]
        assert result.outcome.termination == chess.Termination.CHECKMATE
        assert result.outcome.winner == chess.WHITE
        assert result.result == "1-0"

    def test_terminal_start_plays_nothing(self):
        result = Match(RandomChessAlgorithm(), RandomChessAlgorithm(), board=chess.Board(FOOLS_MATE)).play()
        assert result.plies == 0
        assert result.result == "0-1"

    def test_ply_limit_leaves_result_open(self):
        result = Match(FirstMoveAlgorithm(), FirstMoveAlgorithm(), max_plies=3).play()
        assert result.plies == 3
        assert result.outcome is None
        assert result.result == "*"

    def test_presets_play_each_other(self):
        match = Match(
            create_player("Swarm", chess.WHITE),
            create_player("I Insist 2", chess.BLACK),
            max_plies=30,
        )
        result = match.play()
        assert replay(result).fen() == result.final_fen

    def test_search_engine_in_game(self):
        match = Match(
            TreeSearchEngine(chess.WHITE, eval_matching_colors, 1, rng=random.Random(4)),
            SingleLookaheadEngine(chess.BLACK, eval_matching_colors, rng=random.Random(5)),
            max_plies=6,
        )
        result = match.play()
        assert result.plies == 6
        assert replay(result).fen() == result.final_fen

    def test_illegal_move_is_fatal(self):
        match = Match(ScriptedAlgorithm("e2e5"), RandomChessAlgorithm())
        with pytest.raises(ContractViolation):
            match.play()

    def test_caller_board_untouched(self):
        board = chess.Board()
        Match(FirstMoveAlgorithm(), FirstMoveAlgorithm(), board=board, max_plies=4).play()
        assert board.fen() == chess.STARTING_FEN

    def test_notify_committed_for_mover_only(self):
        white, black = RecordingAlgorithm(), RecordingAlgorithm()
        result = Match(white, black, max_plies=5).play()
        assert len(white.committed) == 3
        assert len(black.committed) == 2
        assert all(name.startswith("arena-white") for name in white.threads)
        assert replay(result).move_stack[0] == white.committed[0]

    def test_match_is_single_use(self):
        match = Match(FirstMoveAlgorithm(), FirstMoveAlgorithm(), max_plies=2)
        match.play()
        assert match.closed
        with pytest.raises(RuntimeError, match="closed"):
            match.step()
        with pytest.raises(RuntimeError, match="closed"):
            match.play()
        assert len(match.moves) == 2

    def test_close_twice(self):
        match = Match(RandomChessAlgorithm(), RandomChessAlgorithm())
        match.close()
        match.close()
        assert match.closed


# ════════════════════════════════════════════════════════════════════════════
#  WORKER HANDOFF
# ════════════════════════════════════════════════════════════════════════════

class TestMoveWorker:
    def test_poll_without_search(self):
        with MoveWorker(FirstMoveAlgorithm()) as worker:
            assert worker.poll() is None
            assert not worker.thinking

    def test_wait_without_search(self):
        with MoveWorker(FirstMoveAlgorithm()) as worker:
            with pytest.raises(RuntimeError):
                worker.wait()

    def test_start_and_wait(self):
        board = chess.Board()
        with MoveWorker(FirstMoveAlgorithm()) as worker:
            worker.start(board)
            assert worker.wait(timeout=5).uci() == "b1a3"
            assert worker.poll() is None

    def test_poll_before_and_after_completion(self):
        algo = GatedAlgorithm()
        with MoveWorker(algo) as worker:
            worker.start(chess.Board())
            assert worker.poll() is None
            assert worker.thinking
            algo.release.set()
            move = worker.wait(timeout=5)
            assert move.uci() == "b1a3"
            assert not worker.thinking

    def test_restart_discards_unread_result(self):
        board = chess.Board()
        with MoveWorker(ScriptedAlgorithm("e2e4", "d2d4")) as worker:
            worker.start(board)
            worker.start(board)
            assert worker.wait(timeout=5).uci() == "d2d4"
            assert worker.poll() is None

    def test_snapshot_isolated_from_later_moves(self):
        algo = GatedAlgorithm()
        board = chess.Board()
        with MoveWorker(algo) as worker:
            worker.start(board)
            board.push_uci("e2e4")
            algo.release.set()
            # Searched the position as it was when the search started.
            assert worker.wait(timeout=5).uci() == "b1a3"

    def test_search_error_propagates(self):
        with MoveWorker(RandomChessAlgorithm()) as worker:
            worker.start(chess.Board(FOOLS_MATE))
            with pytest.raises(ContractViolation):
                worker.wait(timeout=5)

    def test_commit_runs_on_worker_thread(self):
        algo = RecordingAlgorithm()
        with MoveWorker(algo, name="probe") as worker:
            worker.commit(chess.Board(), chess.Move.from_uci("e2e4"))
        assert algo.committed == [chess.Move.from_uci("e2e4")]
        assert algo.threads[0].startswith("probe")


# ════════════════════════════════════════════════════════════════════════════
#  COMMAND LINE
# ════════════════════════════════════════════════════════════════════════════

class TestCli:
    def test_list(self, capsys):
        assert cli.main(["--list"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert "Random" in out
        assert "I Insist 3" in out

    def test_short_match(self, capsys):
        assert cli.main(["First", "Alphabetical", "--max-plies", "6"]) == 0
        out = capsys.readouterr().out
        assert "First vs Alphabetical: * after 6 plies" in out

    def test_from_fen(self, capsys):
        assert cli.main(["Random", "Random", "--fen", FOOLS_MATE]) == 0
        assert "0-1 after 0 plies" in capsys.readouterr().out

    def test_unknown_preset(self):
        with pytest.raises(SystemExit) as exc:
            cli.main(["Stockfish", "Random"])
        assert exc.value.code == 2

    def test_invalid_fen(self):
        with pytest.raises(SystemExit) as exc:
            cli.main(["Random", "Random", "--fen", "not a fen"])
        assert exc.value.code == 2
