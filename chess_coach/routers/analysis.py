from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from chess_coach.core.constants import ANALYSIS_VERSION
from chess_coach.db.session import get_session
from chess_coach.schemas.analysis import AnalyzeGameRequest, GameAnalysisResponse
from chess_coach.services.analysis_cache import get_or_create_analysis
from chess_coach.services.game_analysis import AnalysisError

router = APIRouter(tags=["analysis"])


@router.post("/analysis", response_model=GameAnalysisResponse)
def analyze(payload: AnalyzeGameRequest, db: Session = Depends(get_session)) -> GameAnalysisResponse:
    try:
        analysis, cached = get_or_create_analysis(
            db,
            pgn=payload.pgn,
            white=payload.white,
            black=payload.black,
            result=payload.result,
            time_control=payload.time_control,
            time_class=payload.time_class,
            game_id=payload.game_url,
            end_time=payload.end_time,
            force=payload.force,
        )
    except AnalysisError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return GameAnalysisResponse(
        status="ok", analysis_version=ANALYSIS_VERSION, cached=cached, analysis=analysis
    )
