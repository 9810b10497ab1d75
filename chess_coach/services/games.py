from typing import Any, Optional

from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from chess_coach.core.constants import INGEST_VERSION
from chess_coach.core.logging import get_logger
from chess_coach.db import models
from chess_coach.services.chesscom import ChesscomClient

logger = get_logger("chess_coach.games")

DRAW_RESULTS = {
    "agreed",
    "repetition",
    "stalemate",
    "insufficient",
    "50move",
    "timevsinsufficient",
}


def normalize_username(username: str) -> str:
    normalized = username.strip().lower()
    if not normalized:
        raise ValueError("Username is required.")
    return normalized


def get_or_create_player(db: Session, username: str) -> models.Player:
    normalized = normalize_username(username)
    stmt = select(models.Player).where(models.Player.username == normalized)
    player = db.execute(stmt).scalars().first()
    if not player:
        player = models.Player(username=normalized)
        db.add(player)
        db.commit()
        db.refresh(player)
    return player


def build_game(player_id: int, payload: dict[str, Any]) -> Optional[models.Game]:
    url = payload.get("url")
    if not url:
        return None

    white = payload.get("white") or {}
    black = payload.get("black") or {}
    end_time = payload.get("end_time")

    return models.Game(
        player_id=player_id,
        url=url,
        pgn=payload.get("pgn"),
        time_control=payload.get("time_control"),
        time_class=payload.get("time_class"),
        rated=payload.get("rated"),
        rules=payload.get("rules"),
        end_time=end_time if isinstance(end_time, int) else None,
        white_username=white.get("username") or "",
        white_rating=white.get("rating"),
        white_result=white.get("result") or "",
        black_username=black.get("username") or "",
        black_rating=black.get("rating"),
        black_result=black.get("result") or "",
        ingest_version=INGEST_VERSION,
    )


def save_games(db: Session, player_id: int, payloads: list[dict[str, Any]]) -> int:
    urls = [payload.get("url") for payload in payloads if payload.get("url")]
    existing: set[str] = set()
    if urls:
        stmt = select(models.Game.url).where(models.Game.url.in_(urls))
        existing = set(db.execute(stmt).scalars().all())

    saved = 0
    for payload in payloads:
        game = build_game(player_id, payload)
        if game is None or game.url in existing:
            continue
        db.add(game)
        existing.add(game.url)
        saved += 1
    db.commit()
    return saved


def get_latest_end_time(db: Session, player_id: int) -> Optional[int]:
    stmt = select(func.max(models.Game.end_time)).where(models.Game.player_id == player_id)
    return db.execute(stmt).scalar()


def _player_games_stmt(username: str):
    return (
        select(models.Game)
        .join(models.Player, models.Game.player_id == models.Player.id)
        .where(models.Player.username == normalize_username(username))
    )


def get_saved_games(db: Session, username: str, limit: int) -> list[models.Game]:
    stmt = (
        _player_games_stmt(username)
        .order_by(desc(models.Game.end_time), desc(models.Game.id))
        .limit(limit)
    )
    return list(db.execute(stmt).scalars().all())


def count_saved_games(db: Session, username: str) -> int:
    stmt = (
        select(func.count(models.Game.id))
        .join(models.Player, models.Game.player_id == models.Player.id)
        .where(models.Player.username == normalize_username(username))
    )
    return db.execute(stmt).scalar_one()


def get_game_by_id(db: Session, game_id: int) -> Optional[models.Game]:
    return db.get(models.Game, game_id)


def game_result(white_result: str, black_result: str) -> str:
    if white_result == "win":
        return "1-0"
    if black_result == "win":
        return "0-1"
    if white_result in DRAW_RESULTS or black_result in DRAW_RESULTS:
        return "1/2-1/2"
    return "*"


def fetch_recent_games(
    db: Session, username: str, client: ChesscomClient, limit: int
) -> list[models.Game]:
    player = get_or_create_player(db, username)
    latest = get_latest_end_time(db, player.id)
    payloads = client.fetch_recent_games(player.username, limit)
    if latest is not None:
        payloads = [payload for payload in payloads if (payload.get("end_time") or 0) > latest]

    saved = save_games(db, player.id, payloads)
    logger.info(
        "games.fetch",
        extra={
            "event": "games.fetch",
            "username": player.username,
            "fetched": len(payloads),
            "saved": saved,
        },
    )
    return get_saved_games(db, player.username, limit)
