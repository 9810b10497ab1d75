from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from chess_coach.db import models


def get_setting(db: Session, key: str) -> Optional[str]:
    stmt = select(models.AppSetting.value).where(models.AppSetting.key == key)
    return db.execute(stmt).scalars().first()


def set_setting(db: Session, key: str, value: str) -> None:
    existing = db.get(models.AppSetting, key)
    if existing:
        existing.value = value
    else:
        db.add(models.AppSetting(key=key, value=value))
    db.commit()
