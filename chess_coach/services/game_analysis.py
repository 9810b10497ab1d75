from __future__ import annotations

from typing import Optional

from chess_coach.core.logging import bind_game_id, get_logger
from chess_coach.services.analysis_types import (
    WEAK_CLASSIFICATIONS,
    GameAnalysis,
    MoveRecord,
)
from chess_coach.services.comments import generate_comment
from chess_coach.services.key_moments import select_key_moments
from chess_coach.services.move_classifier import INITIAL_EVAL, classify_move, update_eval
from chess_coach.services.opening_book import count_book_moves, detect_opening
from chess_coach.services.pgn import (
    extract_date,
    extract_opening_name,
    format_end_time,
    split_move_tokens,
)
from chess_coach.services.position_walker import WalkedMove, walk_moves
from chess_coach.services.recommender import Recommendation, recommend_alternative
from chess_coach.services.summary import summarize_moves

logger = get_logger("chess_coach.analysis")


class AnalysisError(Exception):
    pass


def _build_record(
    walked: WalkedMove,
    book_moves: int,
    total_plies: int,
    score: float,
) -> tuple[MoveRecord, float]:
    classification = classify_move(walked, book_moves, total_plies)
    score = update_eval(score, classification, walked.is_white)

    recommendation: Optional[Recommendation] = None
    if classification in WEAK_CLASSIFICATIONS:
        recommendation = recommend_alternative(walked.board_before, walked.move)

    record = MoveRecord(
        ply=walked.ply,
        move_number=walked.move_number,
        color=walked.color,
        san=walked.san,
        classification=classification,
        comment=generate_comment(classification, walked.san, walked.color, walked.move_number),
        is_book_move=walked.ply < book_moves,
        fen_before=walked.fen_before,
        fen_after=walked.fen_after,
        played_from=walked.played_from,
        played_to=walked.played_to,
        best_move_san=recommendation.san if recommendation else None,
        best_from=recommendation.from_square if recommendation else None,
        best_to=recommendation.to_square if recommendation else None,
        eval_score=round(score, 2),
    )
    return record, score


def analyze_game(
    move_text: str,
    white: str,
    black: str,
    result: str,
    time_control: str,
    time_class: str,
    game_id: str,
    end_time: int,
) -> GameAnalysis:
    """Annotate every legal ply of a finished game.

    Unparseable or illegal tokens are skipped. Any other failure inside the
    rules engine aborts the whole analysis with ``AnalysisError``.
    """
    with bind_game_id(game_id):
        tokens = split_move_tokens(move_text)
        total_plies = len(tokens)
        book_moves = count_book_moves(tokens)
        logger.info(
            "analysis.start",
            extra={"event": "analysis.start", "tokens": total_plies, "book_moves": book_moves},
        )

        records: list[MoveRecord] = []
        score = INITIAL_EVAL
        try:
            for walked in walk_moves(tokens):
                record, score = _build_record(walked, book_moves, total_plies, score)
                records.append(record)
        except Exception as exc:
            logger.exception("analysis.failed", extra={"event": "analysis.failed"})
            raise AnalysisError(f"Rules engine failure: {exc}") from exc

        opening_name = extract_opening_name(move_text) or detect_opening(tokens)
        summary = summarize_moves(records, opening_name)
        key_moments = select_key_moments(records)
        logger.info(
            "analysis.complete",
            extra={
                "event": "analysis.complete",
                "moves": len(records),
                "skipped": total_plies - len(records),
                "accuracy": summary.accuracy,
            },
        )

        return GameAnalysis(
            game_id=game_id,
            white=white,
            black=black,
            result=result,
            time_control=time_control,
            time_class=time_class,
            date=extract_date(move_text) or format_end_time(end_time),
            pgn=move_text,
            moves=tuple(records),
            summary=summary,
            key_moments=tuple(key_moments),
        )
