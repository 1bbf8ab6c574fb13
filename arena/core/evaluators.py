"""
Position evaluators.

Every evaluator is a plain function ``(board, perspective) -> float`` that
scores a position for ``perspective``: larger is better for that side. They
are pure and deterministic, so engines may call them from any thread.

Evaluators marked opponent-relative reason about the replies available to
the side to move, and only make sense when that side is the opponent of
``perspective``. Calling them for the side to move raises ContractViolation.
"""

from typing import Callable, Dict

import chess

from arena.config import CONFIG
from arena.core.algorithm import ContractViolation, available_moves

Evaluator = Callable[[chess.Board, chess.Color], float]


def evaluator_name(evaluator: Evaluator) -> str:
    return getattr(evaluator, "__name__", repr(evaluator))


def square_color(square: chess.Square) -> chess.Color:
    """a1 is dark: squares with an even rank+file sum belong to Black."""
    if (chess.square_rank(square) + chess.square_file(square)) % 2 == 0:
        return chess.BLACK
    return chess.WHITE


def piece_value(piece_type: chess.PieceType) -> float:
    return CONFIG.eval.piece_values[chess.piece_name(piece_type).upper()]


def captured_value(board: chess.Board, move: chess.Move) -> float:
    """Value of the piece standing on the move's destination, 0 for quiet moves."""
    victim = board.piece_at(move.to_square)
    return piece_value(victim.piece_type) if victim else 0.0


def _require_opponent(board: chess.Board, color: chess.Color, name: str) -> None:
    if board.turn == color:
        raise ContractViolation(f"{name} evaluator should only be used for the opponent!")


def eval_matching_colors(board: chess.Board, color: chess.Color) -> float:
    score = 0.0
    for sq in chess.SquareSet(board.occupied_co[color]):
        score += 1.0 if square_color(sq) == color else -1.0
    return score


def eval_opposite_colors(board: chess.Board, color: chess.Color) -> float:
    score = 0.0
    for sq in chess.SquareSet(board.occupied_co[color]):
        score += 1.0 if square_color(sq) != color else -1.0
    return score


def _distance_to(board: chess.Board, color: chess.Color, target: chess.Square) -> float:
    # square_distance is the Chebyshev (king-move) distance.
    return float(sum(chess.square_distance(sq, target)
                     for sq in chess.SquareSet(board.occupied_co[color])))


def eval_huddle(board: chess.Board, color: chess.Color) -> float:
    """Pull pieces toward their own king."""
    return -_distance_to(board, color, board.king(color))


def eval_swarm(board: chess.Board, color: chess.Color) -> float:
    """Pull pieces toward the enemy king."""
    return -_distance_to(board, color, board.king(not color))


def eval_pacifist(board: chess.Board, color: chess.Color) -> float:
    """Keep the opponent's material on the board and nobody in check."""
    cfg = CONFIG.eval
    if board.is_checkmate():
        return cfg.checkmate_score
    if board.is_check():
        return cfg.check_score

    opponent_value = 0.0
    for piece in board.piece_map().values():
        if piece.color != color:
            opponent_value += piece_value(piece.piece_type)
    return opponent_value


def eval_generous(board: chess.Board, color: chess.Color) -> float:
    """Total material the opponent could capture, summed over all its replies."""
    _require_opponent(board, color, "Generous")
    return sum((captured_value(board, m) for m in available_moves(board)), 0.0)


def eval_insist_2(board: chess.Board, color: chess.Color) -> float:
    """
    Prefer positions where every reply captures something, ranked by the
    cheapest forced capture. Positions with a quiet reply fall back to
    eval_generous, which always stays below insist_offset.
    """
    _require_opponent(board, color, "Insist 2")
    cfg = CONFIG.eval

    if board.is_checkmate():
        return cfg.checkmate_score
    if board.is_stalemate():
        return cfg.check_score

    score = cfg.insist_offset
    for m in available_moves(board):
        score = min(score, captured_value(board, m))

    if score < cfg.insist_threshold:
        return eval_generous(board, color)
    return cfg.insist_offset + score


def eval_insist_3(board: chess.Board, color: chess.Color) -> float:
    """Average material captured per opponent reply."""
    _require_opponent(board, color, "Insist 3")
    cfg = CONFIG.eval

    if board.is_checkmate():
        return cfg.checkmate_score
    if board.is_stalemate():
        return cfg.check_score

    moves = available_moves(board)
    score = 0.0
    for m in moves:
        score += captured_value(board, m) / len(moves)
    return score


def eval_constant(board: chess.Board, color: chess.Color) -> float:
    """Knows nothing: every position scores 0."""
    return 0.0


EVALUATORS: Dict[str, Evaluator] = {
    "matching-colors": eval_matching_colors,
    "opposite-colors": eval_opposite_colors,
    "huddle": eval_huddle,
    "swarm": eval_swarm,
    "pacifist": eval_pacifist,
    "generous": eval_generous,
    "insist-2": eval_insist_2,
    "insist-3": eval_insist_3,
    "constant": eval_constant,
}

OPPONENT_RELATIVE = frozenset({"generous", "insist-2", "insist-3"})
