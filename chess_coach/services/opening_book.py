from typing import Iterator, Optional, Sequence

from chess_coach.services.pgn import strip_decorations

# Plies credited as theory beyond the longest fully matched line.
THEORY_BONUS_PLIES = 2
DEFAULT_BOOK_PLIES = 2

OPENING_BOOK: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Italian Game", ("e4", "e5", "Nf3", "Nc6", "Bc4")),
    ("Ruy Lopez", ("e4", "e5", "Nf3", "Nc6", "Bb5")),
    ("Sicilian Defense", ("e4", "c5", "Nf3", "d6", "d4", "cxd4", "Nxd4")),
    ("French Defense", ("e4", "e6", "d4", "d5")),
    ("Caro-Kann Defense", ("e4", "c6", "d4", "d5")),
    ("Queen's Gambit", ("d4", "d5", "c4")),
    ("King's Indian Defense", ("d4", "Nf6", "c4", "g6")),
    ("English Opening", ("c4", "e5")),
    ("Scotch Game", ("e4", "e5", "Nf3", "Nc6", "d4")),
    ("Pirc Defense", ("e4", "d6", "d4", "Nf6")),
    ("London System", ("d4", "d5", "Bf4")),
    ("Scandinavian Defense", ("e4", "d5")),
)


def _full_matches(tokens: Sequence[str]) -> Iterator[tuple[str, int]]:
    moves = tuple(strip_decorations(token) for token in tokens)
    for name, line in OPENING_BOOK:
        if len(line) <= len(moves) and moves[: len(line)] == line:
            yield name, len(line)


def count_book_moves(tokens: Sequence[str]) -> int:
    """Number of leading plies treated as opening theory."""
    longest = max((length for _, length in _full_matches(tokens)), default=0)
    if longest:
        return longest + THEORY_BONUS_PLIES
    return min(DEFAULT_BOOK_PLIES, len(tokens))


def detect_opening(tokens: Sequence[str]) -> Optional[str]:
    best_name: Optional[str] = None
    best_length = 0
    for name, length in _full_matches(tokens):
        if length > best_length:
            best_name, best_length = name, length
    return best_name
