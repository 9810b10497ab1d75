from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Classification(str, Enum):
    BRILLIANT = "Brilliant"
    GREAT = "Great"
    BEST = "Best"
    GOOD = "Good"
    BOOK = "Book"
    INACCURACY = "Inaccuracy"
    MISTAKE = "Mistake"
    BLUNDER = "Blunder"
    FORCED_MOVE = "ForcedMove"

    @property
    def label(self) -> str:
        if self is Classification.FORCED_MOVE:
            return "Forced"
        return self.value


WEAK_CLASSIFICATIONS = frozenset(
    {Classification.INACCURACY, Classification.MISTAKE, Classification.BLUNDER}
)


@dataclass(frozen=True)
class MoveRecord:
    ply: int
    move_number: int
    color: str
    san: str
    classification: Classification
    comment: Optional[str]
    is_book_move: bool
    fen_before: str
    fen_after: str
    played_from: str
    played_to: str
    best_move_san: Optional[str]
    best_from: Optional[str]
    best_to: Optional[str]
    eval_score: float


@dataclass(frozen=True)
class GameSummary:
    total_moves: int
    brilliancies: int
    great_moves: int
    best_moves: int
    good_moves: int
    inaccuracies: int
    mistakes: int
    blunders: int
    accuracy: float
    opening_name: Optional[str]


@dataclass(frozen=True)
class KeyMoment:
    ply: int
    move_number: int
    san: str
    color: str
    classification: str
    description: str
    severity: str


@dataclass(frozen=True)
class GameAnalysis:
    game_id: str
    white: str
    black: str
    result: str
    time_control: str
    time_class: str
    date: str
    pgn: str
    moves: tuple[MoveRecord, ...]
    summary: GameSummary
    key_moments: tuple[KeyMoment, ...]
