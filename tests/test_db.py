import pytest
from chess_coach.db.base import Base
from chess_coach.db.models import AnalysisCache, AppSetting, CoachComment, Game, Player
from chess_coach.db.session import get_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session


def test_game_persists_with_player():
    engine = get_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(engine)

    with Session(engine) as session:
        player = Player(username="tester")
        session.add(player)
        session.commit()
        session.refresh(player)

        game = Game(
            player_id=player.id,
            url="https://www.chess.com/game/live/123",
            pgn='[Event "Test"]\n1. e4 e5 1/2-1/2',
            end_time=1709942400,
            white_username="tester",
            white_result="agreed",
            black_username="rival",
            black_result="agreed",
            ingest_version="v0.1",
        )
        session.add(game)
        session.commit()
        session.refresh(game)
        assert game.id is not None
        assert game.created_at is not None


def test_cache_and_settings_persist():
    engine = get_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(engine)

    with Session(engine) as session:
        session.add(
            AnalysisCache(
                game_url="https://www.chess.com/game/live/123",
                analysis_version="heuristic-v1",
                analysis_json="{}",
            )
        )
        session.add(AppSetting(key="username", value="tester"))
        session.commit()
        assert session.get(AppSetting, "username").value == "tester"


def test_coach_comment_unique_per_move():
    engine = get_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(engine)

    with Session(engine) as session:
        for comment in ("first", "second"):
            session.add(
                CoachComment(
                    game_url="game-1", move_index=3, comment=comment, prompt_version="coach-v1"
                )
            )
        with pytest.raises(IntegrityError):
            session.commit()
