import pytest
from sqlalchemy.orm import Session

from chess_coach.db import models
from chess_coach.db.session import engine
from chess_coach.services.games import (
    build_game,
    count_saved_games,
    fetch_recent_games,
    game_result,
    get_game_by_id,
    get_latest_end_time,
    get_or_create_player,
    get_saved_games,
    save_games,
)


def payload(number: int, end_time: int) -> dict:
    return {
        "url": f"https://www.chess.com/game/live/{number}",
        "pgn": "1. e4 e5 *",
        "end_time": end_time,
        "white": {"username": "tester", "rating": 1500, "result": "win"},
        "black": {"username": "rival", "rating": 1490, "result": "resigned"},
    }


def test_get_or_create_player_normalizes_username():
    with Session(engine) as session:
        first = get_or_create_player(session, "  Tester ")
        second = get_or_create_player(session, "tester")
        assert first.id == second.id
        assert first.username == "tester"

        with pytest.raises(ValueError):
            get_or_create_player(session, "   ")


def test_build_game_maps_payload():
    game = build_game(7, payload(1, 1704200000))
    assert game.player_id == 7
    assert game.url == "https://www.chess.com/game/live/1"
    assert game.white_rating == 1500
    assert game.black_result == "resigned"
    assert game.ingest_version == "v0.1"

    assert build_game(7, {"pgn": "1. e4"}) is None
    assert build_game(7, {**payload(2, 0), "end_time": "soon"}).end_time is None


def test_save_games_ignores_known_urls():
    with Session(engine) as session:
        player = get_or_create_player(session, "tester")
        assert save_games(session, player.id, [payload(1, 100), payload(1, 100), payload(2, 200)]) == 2
        assert save_games(session, player.id, [payload(2, 200), payload(3, 300)]) == 1
        assert count_saved_games(session, "Tester") == 3
        assert get_latest_end_time(session, player.id) == 300

        saved = get_saved_games(session, "tester", limit=2)
        assert [game.end_time for game in saved] == [300, 200]


def test_fetch_recent_games_only_stores_newer_games(chesscom_client):
    with Session(engine) as session:
        games = fetch_recent_games(session, "Tester", chesscom_client, 3)
        assert [game.url.rsplit("/", 1)[-1] for game in games] == ["4", "3", "2"]

        games = fetch_recent_games(session, "tester", chesscom_client, 10)
        assert len(games) == 3
        assert count_saved_games(session, "tester") == 3
        assert session.query(models.Player).count() == 1


def test_get_game_by_id():
    with Session(engine) as session:
        player = get_or_create_player(session, "tester")
        save_games(session, player.id, [payload(1, 100)])
        game = get_saved_games(session, "tester", limit=1)[0]
        assert get_game_by_id(session, game.id).url == game.url
        assert get_game_by_id(session, game.id + 100) is None


def test_game_result_mapping():
    assert game_result("win", "checkmated") == "1-0"
    assert game_result("timeout", "win") == "0-1"
    assert game_result("agreed", "agreed") == "1/2-1/2"
    assert game_result("stalemate", "stalemate") == "1/2-1/2"
    assert game_result("", "") == "*"
