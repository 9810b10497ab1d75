from __future__ import annotations

from typing import Optional

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.orm import Session

from chess_coach.core.constants import ANALYSIS_VERSION
from chess_coach.core.logging import get_logger
from chess_coach.db import models
from chess_coach.schemas.analysis import GameAnalysisOut
from chess_coach.services.analysis_types import GameAnalysis
from chess_coach.services.game_analysis import analyze_game

logger = get_logger("chess_coach.analysis")


def serialize_analysis(analysis: GameAnalysis) -> str:
    return GameAnalysisOut.model_validate(analysis).model_dump_json()


def _get_cache_row(db: Session, game_id: str) -> Optional[models.AnalysisCache]:
    stmt = select(models.AnalysisCache).where(models.AnalysisCache.game_url == game_id)
    return db.execute(stmt).scalars().first()


def load_cached_analysis(db: Session, game_id: str) -> Optional[str]:
    row = _get_cache_row(db, game_id)
    if not row or row.analysis_version != ANALYSIS_VERSION:
        return None
    return row.analysis_json


def store_cached_analysis(db: Session, game_id: str, serialized: str) -> None:
    row = _get_cache_row(db, game_id)
    if row:
        row.analysis_json = serialized
        row.analysis_version = ANALYSIS_VERSION
        return
    db.add(
        models.AnalysisCache(
            game_url=game_id,
            analysis_version=ANALYSIS_VERSION,
            analysis_json=serialized,
        )
    )


def get_or_create_analysis(
    db: Session,
    *,
    pgn: str,
    white: str,
    black: str,
    result: str,
    time_control: str,
    time_class: str,
    game_id: str,
    end_time: int,
    force: bool = False,
) -> tuple[GameAnalysisOut, bool]:
    """Return the cached analysis for ``game_id`` or compute and store it."""
    if not force:
        cached = load_cached_analysis(db, game_id)
        if cached is not None:
            try:
                analysis = GameAnalysisOut.model_validate_json(cached)
            except ValidationError:
                logger.warning(
                    "analysis.cache_invalid",
                    extra={"event": "analysis.cache_invalid", "game_url": game_id},
                )
            else:
                logger.info(
                    "analysis.cache_hit",
                    extra={"event": "analysis.cache_hit", "game_url": game_id},
                )
                return analysis, True

    analysis = GameAnalysisOut.model_validate(
        analyze_game(pgn, white, black, result, time_control, time_class, game_id, end_time)
    )
    store_cached_analysis(db, game_id, analysis.model_dump_json())
    db.commit()
    return analysis, False
