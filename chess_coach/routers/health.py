from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from chess_coach.db.session import get_session
from chess_coach.schemas.health import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health(db: Session = Depends(get_session)) -> HealthResponse:
    db.execute(text("SELECT 1"))
    return HealthResponse(status="ok", db="ok")
