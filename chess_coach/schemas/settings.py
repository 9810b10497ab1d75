from typing import Optional

from pydantic import BaseModel, Field


class SettingUpdate(BaseModel):
    value: str


class SettingOut(BaseModel):
    key: str = Field(min_length=1, max_length=64)
    value: Optional[str] = None
