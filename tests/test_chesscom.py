import httpx
import pytest

from chess_coach.services.chesscom import ChesscomClient


def game_urls(games: list[dict]) -> list[str]:
    return [game["url"].rsplit("/", 1)[-1] for game in games]


def test_fetch_recent_games_stops_at_limit(chesscom_client, chesscom_requests):
    games = chesscom_client.fetch_recent_games("Tester", 2)

    assert game_urls(games) == ["4", "3"]
    assert chesscom_requests == [
        "/pub/player/tester/games/archives",
        "/pub/player/tester/games/2024/02",
    ]


def test_fetch_recent_games_walks_older_archives(chesscom_client, chesscom_requests):
    assert game_urls(chesscom_client.fetch_recent_games("tester", 3)) == ["4", "3", "2"]
    assert "/pub/player/tester/games/2024/01" in chesscom_requests

    assert game_urls(chesscom_client.fetch_recent_games("tester", 50)) == ["4", "3", "2", "1"]


def test_profile_and_stats_lowercase_username(chesscom_client, chesscom_requests):
    assert chesscom_client.fetch_profile(" TESTER ")["player_id"] == 42
    assert chesscom_client.fetch_stats("Tester")["chess_rapid"]["last"]["rating"] == 1504
    assert chesscom_requests == ["/pub/player/tester", "/pub/player/tester/stats"]


def test_unknown_player_raises_http_error(chesscom_client):
    with pytest.raises(httpx.HTTPStatusError):
        chesscom_client.fetch_profile("ghost")


def test_malformed_payloads_raise_value_error():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/archives"):
            return httpx.Response(200, json={"archives": "nope"})
        return httpx.Response(200, json={"games": None})

    client = ChesscomClient(
        base_url="https://api.chess.test",
        client=httpx.Client(transport=httpx.MockTransport(handler)),
    )
    with pytest.raises(ValueError):
        client.fetch_archives("tester")
    with pytest.raises(ValueError):
        client.fetch_archive_games("https://api.chess.test/pub/player/tester/games/2024/01")


def test_default_client_sends_user_agent():
    client = ChesscomClient(base_url="https://api.chess.test/", user_agent="CoachTest/2.0")
    assert client.base_url == "https://api.chess.test"
    assert client._client.headers["User-Agent"] == "CoachTest/2.0"
    client._client.close()
