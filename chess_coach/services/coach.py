import shlex
import subprocess
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from chess_coach.core.config import get_settings
from chess_coach.core.constants import COACH_PROMPT_VERSION
from chess_coach.core.logging import get_logger
from chess_coach.db import models

logger = get_logger("chess_coach.coach")

CLASSIFICATION_CONTEXT = {
    "Blunder": "This was a BLUNDER, a serious mistake that significantly worsens the position.",
    "Mistake": "This was a MISTAKE. It gives away a meaningful advantage.",
    "Inaccuracy": "This was an INACCURACY, a slightly imprecise move that misses a better option.",
    "Brilliant": "This was a BRILLIANT move, an exceptional and hard-to-find move!",
    "Great": "This was a GREAT move, strong and well-calculated.",
}
DEFAULT_CONTEXT = "Analyze this chess move."

COACH_PROMPT_TEMPLATE = """You are a friendly chess coach helping a player improve. Analyze this specific moment:

Position (FEN): {fen}
Move played: {move_number}. {played_move} ({color})
{best_info}Classification: {classification}

{context}

Give a short, educational explanation (2-3 sentences max) in a warm coaching tone. Focus on:
- WHY the played move is {classification_lower} (what does it miss or achieve?)
- WHAT the better alternative does (if applicable)
- A practical TIP the player can remember

Keep it concise, specific to this position, and avoid generic advice. Do NOT include the FEN or move notation in your response, the player already sees those. Do NOT use markdown formatting."""


class CoachCommentError(Exception):
    pass


def build_coach_prompt(
    fen: str,
    played_move: str,
    best_move: Optional[str],
    classification: str,
    color: str,
    move_number: int,
) -> str:
    best_info = f"The best move was: {best_move}\n" if best_move else ""
    return COACH_PROMPT_TEMPLATE.format(
        fen=fen,
        move_number=move_number,
        played_move=played_move,
        color=color,
        best_info=best_info,
        classification=classification,
        context=CLASSIFICATION_CONTEXT.get(classification, DEFAULT_CONTEXT),
        classification_lower=classification.lower(),
    )


class CoachCli:
    """Runs an external text-generation command with the prompt on stdin."""

    def __init__(self, command: Optional[str] = None, timeout: Optional[float] = None) -> None:
        settings = get_settings()
        self.command = command or settings.coach_command
        self.timeout = timeout if timeout is not None else settings.coach_timeout

    def generate(self, prompt: str) -> str:
        args = shlex.split(self.command)
        if not args:
            raise CoachCommentError("Coach command is not configured.")
        try:
            completed = subprocess.run(
                args,
                input=prompt,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise CoachCommentError(f"Coach command not found: {args[0]}") from exc
        except subprocess.TimeoutExpired as exc:
            raise CoachCommentError(
                f"Coach command timed out after {self.timeout:g} seconds."
            ) from exc

        if completed.returncode != 0:
            stderr_lines = completed.stderr.strip().splitlines()
            detail = stderr_lines[0] if stderr_lines else f"exit code {completed.returncode}"
            raise CoachCommentError(f"Coach command failed: {detail}")

        response = completed.stdout.strip()
        if not response:
            raise CoachCommentError("Coach command returned an empty response.")
        return response


def request_coach_comment(
    cli: CoachCli,
    fen: str,
    played_move: str,
    best_move: Optional[str],
    classification: str,
    color: str,
    move_number: int,
) -> str:
    prompt = build_coach_prompt(fen, played_move, best_move, classification, color, move_number)
    return cli.generate(prompt)


def get_coach_comment(
    db: Session,
    cli: CoachCli,
    game_url: str,
    move_index: int,
    fen: str,
    played_move: str,
    best_move: Optional[str],
    classification: str,
    color: str,
    move_number: int,
    force: bool = False,
) -> tuple[str, bool]:
    stmt = select(models.CoachComment).where(
        models.CoachComment.game_url == game_url,
        models.CoachComment.move_index == move_index,
    )
    existing = db.execute(stmt).scalars().first()
    if existing and not force and existing.prompt_version == COACH_PROMPT_VERSION:
        return existing.comment, True

    comment = request_coach_comment(
        cli, fen, played_move, best_move, classification, color, move_number
    )
    if existing:
        existing.comment = comment
        existing.prompt_version = COACH_PROMPT_VERSION
    else:
        db.add(
            models.CoachComment(
                game_url=game_url,
                move_index=move_index,
                comment=comment,
                prompt_version=COACH_PROMPT_VERSION,
            )
        )
    db.commit()
    logger.info(
        "coach.comment",
        extra={"event": "coach.comment", "game_url": game_url, "move_index": move_index},
    )
    return comment, False


def get_coach_cli() -> CoachCli:
    return CoachCli()
