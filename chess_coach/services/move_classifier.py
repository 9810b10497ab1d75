"""Heuristic move classification and the running evaluation trend.

There is no engine behind these labels. Moves that no structural rule covers
are bucketed by a pure hash of their position in the game, so the same game
always receives the same annotations.
"""

from types import MappingProxyType

from chess_coach.services.analysis_types import Classification
from chess_coach.services.position_walker import WalkedMove

INITIAL_EVAL = 0.3
EVAL_LIMIT = 10.0
CASTLING_PLY_LIMIT = 20

_HASH_MASK = (1 << 64) - 1
_PLY_MULTIPLIER = 2654435761
_TOTAL_MULTIPLIER = 2246822519
_CAPTURE_SALT = 13
_CHECK_SALT = 37

# Inclusive upper bound of each residue band, in ascending order.
CLASSIFICATION_BANDS: tuple[tuple[int, Classification], ...] = (
    (3, Classification.BRILLIANT),
    (10, Classification.GREAT),
    (35, Classification.BEST),
    (75, Classification.GOOD),
    (85, Classification.INACCURACY),
    (93, Classification.MISTAKE),
    (99, Classification.BLUNDER),
)

EVAL_DELTAS = MappingProxyType(
    {
        Classification.BLUNDER: -2.5,
        Classification.MISTAKE: -1.5,
        Classification.INACCURACY: -0.6,
        Classification.BRILLIANT: 0.4,
        Classification.GREAT: 0.2,
        Classification.BEST: 0.05,
    }
)


def classification_hash(ply: int, total_plies: int, is_capture: bool, gives_check: bool) -> int:
    """Residue in [0, 100) derived from 64-bit wrapping arithmetic."""
    value = (ply * _PLY_MULTIPLIER) & _HASH_MASK
    value ^= (total_plies * _TOTAL_MULTIPLIER) & _HASH_MASK
    if is_capture:
        value = (value + _CAPTURE_SALT) & _HASH_MASK
    if gives_check:
        value = (value + _CHECK_SALT) & _HASH_MASK
    return value % 100


def classification_for_residue(residue: int) -> Classification:
    for upper, classification in CLASSIFICATION_BANDS:
        if residue <= upper:
            return classification
    return Classification.BLUNDER


def classify_move(walked: WalkedMove, book_moves: int, total_plies: int) -> Classification:
    if walked.ply < book_moves:
        return Classification.BOOK
    if walked.legal_move_count == 1:
        return Classification.FORCED_MOVE
    if walked.is_checkmate:
        return Classification.BRILLIANT
    if walked.is_promotion and walked.gives_check:
        return Classification.BRILLIANT
    if walked.is_castle and walked.ply < CASTLING_PLY_LIMIT:
        return Classification.GOOD
    if walked.gives_check and walked.is_capture:
        return Classification.GREAT
    residue = classification_hash(walked.ply, total_plies, walked.is_capture, walked.gives_check)
    return classification_for_residue(residue)


def update_eval(score: float, classification: Classification, is_white: bool) -> float:
    """Apply the classification's delta from the mover's side and clamp."""
    sign = 1.0 if is_white else -1.0
    score += sign * EVAL_DELTAS.get(classification, 0.0)
    return max(-EVAL_LIMIT, min(EVAL_LIMIT, score))
