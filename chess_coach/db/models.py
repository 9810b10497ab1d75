from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)

from chess_coach.db.base import Base


class Player(Base):
    __tablename__ = "players"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(64), unique=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class Game(Base):
    __tablename__ = "games"

    id = Column(Integer, primary_key=True, index=True)
    player_id = Column(Integer, ForeignKey("players.id"), nullable=False, index=True)
    url = Column(String(255), unique=True, nullable=False)
    pgn = Column(Text, nullable=True)
    time_control = Column(String(32), nullable=True)
    time_class = Column(String(32), nullable=True)
    rated = Column(Boolean, nullable=True)
    rules = Column(String(16), nullable=True)
    # Epoch seconds, as reported by chess.com.
    end_time = Column(BigInteger, nullable=True, index=True)
    white_username = Column(String(64), nullable=False)
    white_rating = Column(Integer, nullable=True)
    white_result = Column(String(32), nullable=False)
    black_username = Column(String(64), nullable=False)
    black_rating = Column(Integer, nullable=True)
    black_result = Column(String(32), nullable=False)
    ingest_version = Column(String(32), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class AnalysisCache(Base):
    __tablename__ = "analysis_cache"

    id = Column(Integer, primary_key=True, index=True)
    game_url = Column(String(255), unique=True, nullable=False)
    analysis_version = Column(String(32), nullable=False)
    analysis_json = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


class CoachComment(Base):
    __tablename__ = "coach_comments"
    __table_args__ = (
        UniqueConstraint("game_url", "move_index", name="uq_coach_comments_game_move"),
    )

    id = Column(Integer, primary_key=True, index=True)
    game_url = Column(String(255), nullable=False, index=True)
    move_index = Column(Integer, nullable=False)
    comment = Column(Text, nullable=False)
    prompt_version = Column(String(32), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class AppSetting(Base):
    __tablename__ = "app_settings"

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
