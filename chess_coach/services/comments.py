from types import MappingProxyType
from typing import Optional

from chess_coach.services.analysis_types import Classification

# Best and Good moves carry no annotation.
COMMENT_TEMPLATES = MappingProxyType(
    {
        Classification.BRILLIANT: "Brilliant move! {move_number}. {san} is an exceptional find.",
        Classification.GREAT: "Great move by {color}. {san} maintains strong pressure.",
        Classification.BOOK: "Theory move.",
        Classification.INACCURACY: (
            "Inaccuracy. {color} could have played a more precise move here."
        ),
        Classification.MISTAKE: (
            "Mistake! {move_number}. {san} gives away part of {color}'s advantage."
        ),
        Classification.BLUNDER: (
            "Blunder! {move_number}. {san} is a serious error that changes the evaluation "
            "significantly."
        ),
        Classification.FORCED_MOVE: "Only legal move.",
    }
)


def generate_comment(
    classification: Classification, san: str, color: str, move_number: int
) -> Optional[str]:
    template = COMMENT_TEMPLATES.get(classification)
    if template is None:
        return None
    color_name = "White" if color == "white" else "Black"
    return template.format(move_number=move_number, san=san, color=color_name)
