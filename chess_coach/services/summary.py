from collections import Counter
from typing import Optional, Sequence

from chess_coach.services.analysis_types import Classification, GameSummary, MoveRecord

ACCURATE_CLASSIFICATIONS = frozenset(
    {
        Classification.BRILLIANT,
        Classification.GREAT,
        Classification.BEST,
        Classification.GOOD,
    }
)


def summarize_moves(records: Sequence[MoveRecord], opening_name: Optional[str]) -> GameSummary:
    counts = Counter(record.classification for record in records)
    total = len(records)
    accurate = sum(counts[classification] for classification in ACCURATE_CLASSIFICATIONS)
    accuracy = min(100.0, accurate / total * 100.0) if total else 0.0

    return GameSummary(
        total_moves=total,
        brilliancies=counts[Classification.BRILLIANT],
        great_moves=counts[Classification.GREAT],
        best_moves=counts[Classification.BEST],
        good_moves=counts[Classification.GOOD],
        inaccuracies=counts[Classification.INACCURACY],
        mistakes=counts[Classification.MISTAKE],
        blunders=counts[Classification.BLUNDER],
        accuracy=round(accuracy, 1),
        opening_name=opening_name,
    )
