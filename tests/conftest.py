import os
from pathlib import Path

import httpx
import pytest

# Ensure tests never touch the local dev database.
test_db_path = Path(__file__).resolve().parents[1] / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{test_db_path.as_posix()}"

from chess_coach.db.base import Base  # noqa: E402
from chess_coach.db.session import engine  # noqa: E402
from chess_coach.services.chesscom import ChesscomClient  # noqa: E402

CHESSCOM_BASE_URL = "https://api.chess.test"
SAMPLE_PGN = "\n".join(
    [
        '[Event "Live Chess"]',
        '[White "tester"]',
        '[Black "rival"]',
        "",
        "1. e4 {[%clk 0:09:58]} 1... e5 {[%clk 0:09:57]} 2. Nf3 Nc6 3. Bc4 1-0",
        "",
    ]
)


def make_game_payload(number: int, end_time: int, white_result: str, black_result: str) -> dict:
    return {
        "url": f"https://www.chess.com/game/live/{number}",
        "pgn": SAMPLE_PGN,
        "time_control": "600",
        "time_class": "rapid",
        "rated": True,
        "rules": "chess",
        "end_time": end_time,
        "white": {"username": "tester", "rating": 1500 + number, "result": white_result},
        "black": {"username": "rival", "rating": 1480, "result": black_result},
    }


ARCHIVE_GAMES = {
    "/pub/player/tester/games/2024/01": [
        make_game_payload(1, 1704200000, "win", "checkmated"),
        make_game_payload(2, 1704300000, "resigned", "win"),
    ],
    "/pub/player/tester/games/2024/02": [
        make_game_payload(3, 1707000000, "agreed", "agreed"),
        make_game_payload(4, 1707100000, "win", "timeout"),
    ],
}


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)


@pytest.fixture
def chesscom_requests() -> list[str]:
    return []


@pytest.fixture
def chesscom_client(chesscom_requests) -> ChesscomClient:
    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        chesscom_requests.append(path)
        if path == "/pub/player/tester":
            return httpx.Response(200, json={"username": "tester", "player_id": 42})
        if path == "/pub/player/tester/stats":
            return httpx.Response(200, json={"chess_rapid": {"last": {"rating": 1504}}})
        if path == "/pub/player/tester/games/archives":
            archives = [f"{CHESSCOM_BASE_URL}{archive}" for archive in ARCHIVE_GAMES]
            return httpx.Response(200, json={"archives": archives})
        if path in ARCHIVE_GAMES:
            return httpx.Response(200, json={"games": ARCHIVE_GAMES[path]})
        return httpx.Response(404, json={"code": 0, "message": "User not found."})

    transport = httpx.MockTransport(handler)
    return ChesscomClient(base_url=CHESSCOM_BASE_URL, client=httpx.Client(transport=transport))
