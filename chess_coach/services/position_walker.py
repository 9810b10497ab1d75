from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

import chess

from chess_coach.core.logging import get_logger

logger = get_logger("chess_coach.analysis")


@dataclass(frozen=True)
class WalkedMove:
    ply: int
    move_number: int
    color: str
    san: str
    move: chess.Move
    board_before: chess.Board
    fen_before: str
    fen_after: str
    is_capture: bool
    is_promotion: bool
    is_castle: bool
    gives_check: bool
    is_checkmate: bool
    legal_move_count: int

    @property
    def is_white(self) -> bool:
        return self.color == "white"

    @property
    def played_from(self) -> str:
        return chess.square_name(self.move.from_square)

    @property
    def played_to(self) -> str:
        return chess.square_name(self.move.to_square)


def parse_token(board: chess.Board, token: str) -> Optional[chess.Move]:
    """Resolve a SAN token in ``board``; ``None`` when unparseable or illegal."""
    try:
        move = board.parse_san(token)
    except ValueError:
        return None
    # Null moves ("Z0", "--") are not playable plies.
    return move or None


def walk_moves(tokens: Iterable[str]) -> Iterator[WalkedMove]:
    board = chess.Board()
    ply = 0
    for token in tokens:
        move = parse_token(board, token)
        if move is None:
            logger.debug(
                "analysis.token_skipped",
                extra={"event": "analysis.token_skipped", "token": token, "ply": ply},
            )
            continue

        board_before = board.copy(stack=False)
        color = "white" if board.turn == chess.WHITE else "black"
        move_number = board.fullmove_number
        legal_move_count = board.legal_moves.count()
        is_capture = board.is_capture(move)
        is_castle = board.is_castling(move)
        fen_before = board.fen()

        board.push(move)

        yield WalkedMove(
            ply=ply,
            move_number=move_number,
            color=color,
            san=token,
            move=move,
            board_before=board_before,
            fen_before=fen_before,
            fen_after=board.fen(),
            is_capture=is_capture,
            is_promotion=move.promotion is not None,
            is_castle=is_castle,
            gives_check=board.is_check(),
            is_checkmate=board.is_checkmate(),
            legal_move_count=legal_move_count,
        )
        ply += 1
