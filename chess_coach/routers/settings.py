from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from chess_coach.db.session import get_session
from chess_coach.schemas.settings import SettingOut, SettingUpdate
from chess_coach.services.settings_store import get_setting, set_setting

router = APIRouter(tags=["settings"])


@router.get("/settings/{key}", response_model=SettingOut)
def read_setting(key: str, db: Session = Depends(get_session)) -> SettingOut:
    return SettingOut(key=key, value=get_setting(db, key))


@router.put("/settings/{key}", response_model=SettingOut)
def write_setting(
    key: str, payload: SettingUpdate, db: Session = Depends(get_session)
) -> SettingOut:
    set_setting(db, key, payload.value)
    return SettingOut(key=key, value=payload.value)
