"""Move-text extraction for chess.com style PGN records.

The tokenizer is deliberately forgiving: anything that cannot be a SAN move
(move numbers, results, comments, clock annotations) is dropped here, and
tokens that only look like moves are rejected later by the rules engine.
"""

from datetime import datetime, timezone
from typing import Iterator, Optional

RESULT_TOKENS = frozenset({"1-0", "0-1", "1/2-1/2", "*"})
CASTLING_TOKENS = frozenset({"O-O", "O-O-O"})
DECORATIONS = "+#"


def extract_move_text(pgn: str) -> str:
    """Return the move section of a PGN record, trimmed.

    The move section starts at the first non-empty, non-tag line seen after at
    least one tag line. Without such a boundary the whole input is move text.
    """
    seen_header = False
    offset = 0
    for line in pgn.splitlines(keepends=True):
        stripped = line.strip()
        if stripped.startswith("["):
            seen_header = True
        elif seen_header and stripped:
            return pgn[offset:].strip()
        offset += len(line)
    return pgn.strip()


def _is_move_candidate(token: str) -> bool:
    if token.endswith(".") or token in RESULT_TOKENS:
        return False
    if token.startswith("{") or token.endswith("}"):
        return False
    if token.startswith("%") or token.startswith("[%"):
        return False
    first = token[0]
    return (first.isascii() and first.isalpha()) or token in CASTLING_TOKENS


def tokenize_moves(move_text: str) -> Iterator[str]:
    for token in move_text.split():
        if _is_move_candidate(token):
            yield token


def split_move_tokens(pgn: str) -> list[str]:
    return list(tokenize_moves(extract_move_text(pgn)))


def strip_decorations(token: str) -> str:
    return token.rstrip(DECORATIONS)


def _header_value(line: str) -> Optional[str]:
    start = line.find('"')
    end = line.rfind('"')
    if start == -1 or start >= end:
        return None
    return line[start + 1 : end]


def extract_opening_name(pgn: str) -> Optional[str]:
    for line in pgn.splitlines():
        stripped = line.strip()
        if stripped.startswith("[ECOUrl "):
            value = _header_value(stripped)
            if value is not None:
                return value.rstrip("/").split("/")[-1].replace("-", " ")
        elif stripped.startswith("[Opening "):
            value = _header_value(stripped)
            if value is not None:
                return value
    return None


def extract_date(pgn: str) -> Optional[str]:
    for line in pgn.splitlines():
        stripped = line.strip()
        if stripped.startswith("[Date ") or stripped.startswith("[UTCDate "):
            value = _header_value(stripped)
            if value is not None:
                return value
    return None


def format_end_time(end_time: int) -> str:
    return datetime.fromtimestamp(end_time, tz=timezone.utc).strftime("%Y.%m.%d")


def extract_header(pgn: str, name: str) -> Optional[str]:
    prefix = f"[{name} "
    for line in pgn.splitlines():
        stripped = line.strip()
        if stripped.startswith(prefix):
            return _header_value(stripped)
    return None
