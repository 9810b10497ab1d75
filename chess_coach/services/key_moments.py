from types import MappingProxyType
from typing import Optional, Sequence

from chess_coach.services.analysis_types import (
    WEAK_CLASSIFICATIONS,
    Classification,
    KeyMoment,
    MoveRecord,
)

MAX_KEY_MOMENTS = 7

SEVERITY_CRITICAL = "critical"
SEVERITY_MAJOR = "major"
SEVERITY_NOTABLE = "notable"

SEVERITY_RANK = MappingProxyType(
    {SEVERITY_CRITICAL: 0, SEVERITY_MAJOR: 1, SEVERITY_NOTABLE: 2}
)


def _describe(
    record: MoveRecord, following: Optional[MoveRecord]
) -> Optional[tuple[str, str]]:
    prefix = f"{record.move_number}. {record.san}"
    if record.classification is Classification.BLUNDER:
        return SEVERITY_CRITICAL, f"{prefix} - a blunder that significantly changed the game."
    if record.classification is Classification.MISTAKE:
        return SEVERITY_MAJOR, f"{prefix} - a mistake that gave away advantage."
    if record.classification is Classification.BRILLIANT:
        return SEVERITY_NOTABLE, f"{prefix} - a brilliant find!"
    if (
        record.classification is Classification.INACCURACY
        and following is not None
        and following.classification in WEAK_CLASSIFICATIONS
    ):
        return SEVERITY_NOTABLE, f"{prefix} - inaccuracy leading to further trouble."
    return None


def select_key_moments(records: Sequence[MoveRecord]) -> list[KeyMoment]:
    """Pick the most severe moments, then present them in game order."""
    candidates: list[KeyMoment] = []
    for index, record in enumerate(records):
        following = records[index + 1] if index + 1 < len(records) else None
        described = _describe(record, following)
        if described is None:
            continue
        severity, description = described
        candidates.append(
            KeyMoment(
                ply=record.ply,
                move_number=record.move_number,
                san=record.san,
                color=record.color,
                classification=record.classification.value,
                description=description,
                severity=severity,
            )
        )

    ranked = sorted(candidates, key=lambda moment: (SEVERITY_RANK[moment.severity], moment.ply))
    return sorted(ranked[:MAX_KEY_MOMENTS], key=lambda moment: moment.ply)
