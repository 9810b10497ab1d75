from typing import Optional

import httpx
from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from chess_coach.core.config import get_settings
from chess_coach.core.constants import ANALYSIS_VERSION
from chess_coach.db.session import get_session
from chess_coach.schemas.analysis import AnalyzeSavedGameRequest, GameAnalysisResponse
from chess_coach.schemas.games import FetchGamesRequest, GameCountResponse, GameOut, GamePgnOut
from chess_coach.services.analysis_cache import get_or_create_analysis
from chess_coach.services.chesscom import ChesscomClient, get_chesscom_client
from chess_coach.services.game_analysis import AnalysisError
from chess_coach.services.games import (
    count_saved_games,
    fetch_recent_games,
    game_result,
    get_game_by_id,
    get_saved_games,
)

router = APIRouter(tags=["games"])


@router.post("/games/fetch", response_model=list[GameOut])
def fetch_games(
    payload: FetchGamesRequest,
    db: Session = Depends(get_session),
    client: ChesscomClient = Depends(get_chesscom_client),
) -> list[GameOut]:
    limit = payload.limit or get_settings().recent_games_limit
    try:
        games = fetch_recent_games(db, payload.username, client, limit)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except httpx.HTTPError as exc:
        raise HTTPException(status_code=502, detail=f"chess.com request failed: {exc}") from exc
    return [GameOut.model_validate(game) for game in games]


@router.get("/games", response_model=list[GameOut])
def list_games(
    username: str = Query(..., min_length=1),
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_session),
) -> list[GameOut]:
    try:
        games = get_saved_games(db, username, limit)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return [GameOut.model_validate(game) for game in games]


@router.get("/games/count", response_model=GameCountResponse)
def games_count(
    username: str = Query(..., min_length=1),
    db: Session = Depends(get_session),
) -> GameCountResponse:
    try:
        count = count_saved_games(db, username)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return GameCountResponse(username=username.strip().lower(), count=count)


@router.get("/games/{game_id}", response_model=GamePgnOut)
def get_game(game_id: int, db: Session = Depends(get_session)) -> GamePgnOut:
    game = get_game_by_id(db, game_id)
    if not game:
        raise HTTPException(status_code=404, detail="Game not found.")
    return GamePgnOut.model_validate(game)


@router.post("/games/{game_id}/analysis", response_model=GameAnalysisResponse)
def analyze_saved_game(
    game_id: int,
    payload: Optional[AnalyzeSavedGameRequest] = Body(default=None),
    db: Session = Depends(get_session),
) -> GameAnalysisResponse:
    game = get_game_by_id(db, game_id)
    if not game:
        raise HTTPException(status_code=404, detail="Game not found.")
    if not game.pgn:
        raise HTTPException(status_code=400, detail="Game has no PGN.")

    force = payload.force if payload else False
    try:
        analysis, cached = get_or_create_analysis(
            db,
            pgn=game.pgn,
            white=game.white_username,
            black=game.black_username,
            result=game_result(game.white_result, game.black_result),
            time_control=game.time_control or "",
            time_class=game.time_class or "",
            game_id=game.url,
            end_time=game.end_time or 0,
            force=force,
        )
    except AnalysisError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return GameAnalysisResponse(
        status="ok", analysis_version=ANALYSIS_VERSION, cached=cached, analysis=analysis
    )
