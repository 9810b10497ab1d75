from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GameOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    url: str
    time_control: Optional[str] = None
    time_class: Optional[str] = None
    rated: Optional[bool] = None
    rules: Optional[str] = None
    end_time: Optional[int] = None
    white_username: str
    white_rating: Optional[int] = None
    white_result: str
    black_username: str
    black_rating: Optional[int] = None
    black_result: str
    created_at: datetime


class GamePgnOut(GameOut):
    pgn: Optional[str] = None


class FetchGamesRequest(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    limit: Optional[int] = Field(default=None, ge=1, le=500)


class GameCountResponse(BaseModel):
    username: str
    count: int = Field(ge=0)
