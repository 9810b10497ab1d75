import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _resolve_database_url(url: str) -> str:
    prefix = "sqlite:///./"
    if url.startswith(prefix):
        relative_path = url[len(prefix) :]
        project_root = Path(__file__).resolve().parents[2]
        absolute_path = (project_root / relative_path).resolve()
        return f"sqlite:///{absolute_path.as_posix()}"
    return url


@dataclass(frozen=True)
class Settings:
    database_url: str
    cors_origins: str
    chesscom_base_url: str
    chesscom_user_agent: str
    chesscom_timeout: float
    recent_games_limit: int
    coach_command: str
    coach_timeout: float
    log_level: str


def get_settings() -> Settings:
    return Settings(
        database_url=_resolve_database_url(
            os.getenv("DATABASE_URL", "sqlite:///./chess_coach.db")
        ),
        cors_origins=os.getenv("CORS_ORIGINS", "http://localhost:1420"),
        chesscom_base_url=os.getenv("CHESSCOM_BASE_URL", "https://api.chess.com"),
        chesscom_user_agent=os.getenv("CHESSCOM_USER_AGENT", "ChessCoach/1.0"),
        chesscom_timeout=_get_float("CHESSCOM_TIMEOUT", 10.0),
        recent_games_limit=_get_int("RECENT_GAMES_LIMIT", 50),
        coach_command=os.getenv("COACH_COMMAND", "gemini"),
        coach_timeout=_get_float("COACH_TIMEOUT", 120.0),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
