from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from chess_coach.core.constants import COACH_PROMPT_VERSION
from chess_coach.db.session import get_session
from chess_coach.schemas.coach import CoachCommentRequest, CoachCommentResponse
from chess_coach.services.coach import CoachCli, CoachCommentError, get_coach_cli, get_coach_comment

router = APIRouter(tags=["coach"])


@router.post("/coach/comment", response_model=CoachCommentResponse)
def coach_comment(
    payload: CoachCommentRequest,
    db: Session = Depends(get_session),
    cli: CoachCli = Depends(get_coach_cli),
) -> CoachCommentResponse:
    try:
        comment, cached = get_coach_comment(
            db,
            cli,
            payload.game_url,
            payload.move_index,
            payload.fen,
            payload.played_move,
            payload.best_move,
            payload.classification,
            payload.color,
            payload.move_number,
            force=payload.force,
        )
    except CoachCommentError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return CoachCommentResponse(
        status="ok", cached=cached, prompt_version=COACH_PROMPT_VERSION, comment=comment
    )
