from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional

import chess

PIECE_VALUES = MappingProxyType(
    {
        chess.PAWN: 100,
        chess.KNIGHT: 320,
        chess.BISHOP: 330,
        chess.ROOK: 500,
        chess.QUEEN: 900,
        chess.KING: 0,
    }
)

CHECKMATE_SCORE = 10000
CHECK_BONUS = 50
PROMOTION_BONUS = 800
CASTLING_BONUS = 60
CENTER_WEIGHT = 5
HANGING_PENALTY = 20


@dataclass(frozen=True)
class Recommendation:
    san: str
    from_square: str
    to_square: str


def captured_value(board: chess.Board, move: chess.Move) -> int:
    if not board.is_capture(move):
        return 0
    if board.is_en_passant(move):
        return PIECE_VALUES[chess.PAWN]
    piece = board.piece_at(move.to_square)
    return PIECE_VALUES[piece.piece_type] if piece else 0


def center_bonus(square: chess.Square) -> int:
    distance = abs(chess.square_file(square) - 3) + abs(chess.square_rank(square) - 3)
    return max(0, 4 - distance) * CENTER_WEIGHT


def score_candidate(board: chess.Board, move: chess.Move) -> int:
    """One-ply score of ``move`` in ``board``; higher is better for the mover."""
    after = board.copy(stack=False)
    after.push(move)
    if after.is_checkmate():
        return CHECKMATE_SCORE

    is_capture = board.is_capture(move)
    is_castle = board.is_castling(move)
    score = 0
    if after.is_check():
        score += CHECK_BONUS
    score += captured_value(board, move)
    if move.promotion is not None:
        score += PROMOTION_BONUS
    if is_castle:
        score += CASTLING_BONUS
    elif not board.is_en_passant(move):
        score += center_bonus(move.to_square)
    if not is_capture and any(after.is_capture(reply) for reply in after.legal_moves):
        score -= HANGING_PENALTY
    return score


def recommend_alternative(board: chess.Board, played: chess.Move) -> Optional[Recommendation]:
    legal_moves = list(board.legal_moves)
    if len(legal_moves) < 2:
        return None

    candidates = [move for move in legal_moves if move != played]
    # max() keeps the first of equally scored moves, i.e. generation order.
    best = max(candidates, key=lambda move: score_candidate(board, move))
    return Recommendation(
        san=board.san(best),
        from_square=chess.square_name(best.from_square),
        to_square=chess.square_name(best.to_square),
    )
