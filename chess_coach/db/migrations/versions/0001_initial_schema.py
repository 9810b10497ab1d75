"""initial schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "players",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(length=64), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_players_id", "players", ["id"], unique=False)
    op.create_index("ix_players_username", "players", ["username"], unique=True)

    op.create_table(
        "games",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("player_id", sa.Integer(), nullable=False),
        sa.Column("url", sa.String(length=255), nullable=False),
        sa.Column("pgn", sa.Text(), nullable=True),
        sa.Column("time_control", sa.String(length=32), nullable=True),
        sa.Column("time_class", sa.String(length=32), nullable=True),
        sa.Column("rated", sa.Boolean(), nullable=True),
        sa.Column("rules", sa.String(length=16), nullable=True),
        sa.Column("end_time", sa.BigInteger(), nullable=True),
        sa.Column("white_username", sa.String(length=64), nullable=False),
        sa.Column("white_rating", sa.Integer(), nullable=True),
        sa.Column("white_result", sa.String(length=32), nullable=False),
        sa.Column("black_username", sa.String(length=64), nullable=False),
        sa.Column("black_rating", sa.Integer(), nullable=True),
        sa.Column("black_result", sa.String(length=32), nullable=False),
        sa.Column("ingest_version", sa.String(length=32), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["player_id"], ["players.id"]),
        sa.UniqueConstraint("url"),
    )
    op.create_index("ix_games_id", "games", ["id"], unique=False)
    op.create_index("ix_games_player_id", "games", ["player_id"], unique=False)
    op.create_index("ix_games_end_time", "games", ["end_time"], unique=False)

    op.create_table(
        "analysis_cache",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("game_url", sa.String(length=255), nullable=False),
        sa.Column("analysis_version", sa.String(length=32), nullable=False),
        sa.Column("analysis_json", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.UniqueConstraint("game_url"),
    )
    op.create_index("ix_analysis_cache_id", "analysis_cache", ["id"], unique=False)

    op.create_table(
        "coach_comments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("game_url", sa.String(length=255), nullable=False),
        sa.Column("move_index", sa.Integer(), nullable=False),
        sa.Column("comment", sa.Text(), nullable=False),
        sa.Column("prompt_version", sa.String(length=32), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.UniqueConstraint("game_url", "move_index", name="uq_coach_comments_game_move"),
    )
    op.create_index("ix_coach_comments_id", "coach_comments", ["id"], unique=False)
    op.create_index("ix_coach_comments_game_url", "coach_comments", ["game_url"], unique=False)

    op.create_table(
        "app_settings",
        sa.Column("key", sa.String(length=64), primary_key=True),
        sa.Column("value", sa.Text(), nullable=False),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )


def downgrade() -> None:
    op.drop_table("app_settings")
    op.drop_index("ix_coach_comments_game_url", table_name="coach_comments")
    op.drop_index("ix_coach_comments_id", table_name="coach_comments")
    op.drop_table("coach_comments")
    op.drop_index("ix_analysis_cache_id", table_name="analysis_cache")
    op.drop_table("analysis_cache")
    op.drop_index("ix_games_end_time", table_name="games")
    op.drop_index("ix_games_player_id", table_name="games")
    op.drop_index("ix_games_id", table_name="games")
    op.drop_table("games")
    op.drop_index("ix_players_username", table_name="players")
    op.drop_index("ix_players_id", table_name="players")
    op.drop_table("players")
