import shlex
import sys

import pytest
from sqlalchemy import select
from sqlalchemy.orm import Session

from chess_coach.core.constants import COACH_PROMPT_VERSION
from chess_coach.db import models
from chess_coach.db.session import engine
from chess_coach.services.coach import (
    DEFAULT_CONTEXT,
    CoachCli,
    CoachCommentError,
    build_coach_prompt,
    get_coach_comment,
    request_coach_comment,
)

FEN = "r1bqkbnr/pppp1ppp/2n5/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R b KQkq - 3 3"


def python_command(script: str) -> str:
    return shlex.join([sys.executable, "-c", script])


class FakeCli:
    def __init__(self, reply: str) -> None:
        self.reply = reply
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.reply


def test_build_coach_prompt_includes_position_and_context():
    prompt = build_coach_prompt(FEN, "Nf6", "Bc5", "Blunder", "black", 3)

    assert f"Position (FEN): {FEN}" in prompt
    assert "Move played: 3. Nf6 (black)" in prompt
    assert "The best move was: Bc5\n" in prompt
    assert "Classification: Blunder" in prompt
    assert "This was a BLUNDER" in prompt
    assert "WHY the played move is blunder" in prompt


def test_build_coach_prompt_without_best_move_or_known_classification():
    prompt = build_coach_prompt(FEN, "Nf6", None, "Good", "black", 3)
    assert "The best move was" not in prompt
    assert DEFAULT_CONTEXT in prompt


def test_cli_passes_prompt_on_stdin():
    cli = CoachCli(python_command("import sys; print(sys.stdin.read().strip().upper())"), 30)
    assert cli.generate("develop your pieces") == "DEVELOP YOUR PIECES"


def test_cli_reports_first_stderr_line_on_failure():
    script = "import sys; sys.stderr.write('quota exceeded\\nretry later'); sys.exit(3)"
    cli = CoachCli(python_command(script), 30)
    with pytest.raises(CoachCommentError, match="quota exceeded"):
        cli.generate("prompt")


def test_cli_rejects_empty_output():
    cli = CoachCli(python_command("print('   ')"), 30)
    with pytest.raises(CoachCommentError, match="empty response"):
        cli.generate("prompt")


def test_cli_missing_command():
    cli = CoachCli("chess-coach-missing-binary-xyz", 30)
    with pytest.raises(CoachCommentError, match="not found"):
        cli.generate("prompt")


def test_cli_timeout():
    cli = CoachCli(python_command("import time; time.sleep(5)"), 0.5)
    with pytest.raises(CoachCommentError, match="timed out"):
        cli.generate("prompt")


def test_request_coach_comment_builds_prompt():
    cli = FakeCli("Control the center before attacking.")
    comment = request_coach_comment(cli, FEN, "Nf6", "Bc5", "Mistake", "black", 3)
    assert comment == "Control the center before attacking."
    assert "This was a MISTAKE" in cli.prompts[0]


def test_get_coach_comment_caches_per_move():
    cli = FakeCli("Watch the f7 square.")
    args = (FEN, "Nf6", "Bc5", "Inaccuracy", "black", 3)
    with Session(engine) as session:
        comment, cached = get_coach_comment(session, cli, "game-1", 5, *args)
        assert (comment, cached) == ("Watch the f7 square.", False)

        comment, cached = get_coach_comment(session, cli, "game-1", 5, *args)
        assert (comment, cached) == ("Watch the f7 square.", True)
        assert len(cli.prompts) == 1

        cli.reply = "Castle early."
        comment, cached = get_coach_comment(session, cli, "game-1", 5, *args, force=True)
        assert (comment, cached) == ("Castle early.", False)

        rows = session.execute(select(models.CoachComment)).scalars().all()
        assert len(rows) == 1
        assert rows[0].comment == "Castle early."
        assert rows[0].prompt_version == COACH_PROMPT_VERSION


def test_coach_errors_are_not_cached():
    class FailingCli:
        def generate(self, prompt: str) -> str:
            raise CoachCommentError("Coach command failed: offline")

    with Session(engine) as session:
        with pytest.raises(CoachCommentError):
            get_coach_comment(session, FailingCli(), "game-2", 0, FEN, "e4", None, "Best", "white", 1)
        assert session.execute(select(models.CoachComment)).scalars().first() is None
