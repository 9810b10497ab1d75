from typing import Literal, Optional

from pydantic import BaseModel, Field


class CoachCommentRequest(BaseModel):
    game_url: str = Field(min_length=1, max_length=255)
    move_index: int = Field(ge=0)
    fen: str = Field(min_length=1)
    played_move: str = Field(min_length=1)
    best_move: Optional[str] = None
    classification: str
    color: Literal["white", "black"]
    move_number: int = Field(ge=1)
    force: bool = False


class CoachCommentResponse(BaseModel):
    status: str
    cached: bool
    prompt_version: str
    comment: str
