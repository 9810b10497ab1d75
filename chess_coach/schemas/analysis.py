from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from chess_coach.services.analysis_types import Classification


class MoveRecordOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    ply: int = Field(ge=0)
    move_number: int = Field(ge=1)
    color: Literal["white", "black"]
    san: str
    classification: Classification
    comment: Optional[str] = None
    is_book_move: bool
    fen_before: str
    fen_after: str
    played_from: str
    played_to: str
    best_move_san: Optional[str] = None
    best_from: Optional[str] = None
    best_to: Optional[str] = None
    eval_score: float = Field(ge=-10.0, le=10.0)


class GameSummaryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_moves: int = Field(ge=0)
    brilliancies: int = Field(ge=0)
    great_moves: int = Field(ge=0)
    best_moves: int = Field(ge=0)
    good_moves: int = Field(ge=0)
    inaccuracies: int = Field(ge=0)
    mistakes: int = Field(ge=0)
    blunders: int = Field(ge=0)
    accuracy: float = Field(ge=0.0, le=100.0)
    opening_name: Optional[str] = None


class KeyMomentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    ply: int = Field(ge=0)
    move_number: int = Field(ge=1)
    san: str
    color: Literal["white", "black"]
    classification: str
    description: str
    severity: Literal["critical", "major", "notable"]


class GameAnalysisOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    game_id: str
    white: str
    black: str
    result: str
    time_control: str
    time_class: str
    date: str
    pgn: str
    moves: list[MoveRecordOut]
    summary: GameSummaryOut
    key_moments: list[KeyMomentOut] = Field(default_factory=list, max_length=7)


class AnalyzeGameRequest(BaseModel):
    pgn: str
    game_url: str = Field(min_length=1, max_length=255)
    white: str = ""
    black: str = ""
    result: str = ""
    time_control: str = ""
    time_class: str = ""
    end_time: int = Field(default=0, ge=0)
    force: bool = False


class AnalyzeSavedGameRequest(BaseModel):
    force: bool = False


class GameAnalysisResponse(BaseModel):
    status: str
    analysis_version: str
    cached: bool
    analysis: GameAnalysisOut
