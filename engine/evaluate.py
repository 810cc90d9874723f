"""
Static material evaluation.

Every piece on the board counts its full value, every piece in hand counts
80% of its value (integer arithmetic, truncated per piece). Pieces owned by
First add to the score and pieces owned by Second subtract from it, so the
score is always from First's point of view: positive favours First.

This is deliberately material-only. The starting position is symmetric and
scores exactly 0.
"""

from engine.board import BoardState
from engine.constants import (
    HAND_VALUE_DENOMINATOR,
    HAND_VALUE_NUMERATOR,
    PIECE_VALUES,
    Player,
)


def _sign(player: Player) -> int:
    return 1 if player is Player.FIRST else -1


def evaluate(state: BoardState) -> int:
    """
    Material score of ``state`` from First's perspective.

    Args:
        state: The position to score. Not modified.

    Returns:
        Sum of board values (+First, -Second) plus 80% of hand values.

    Example:
        >>> from engine.board import BoardState
        >>> evaluate(BoardState.initial())
        0
    """
    score = 0

    for _, _, piece in state.pieces():
        score += _sign(piece.owner) * PIECE_VALUES[piece.kind]

    for player, hand in state.hands.items():
        for kind, count in hand.items():
            in_hand = PIECE_VALUES[kind] * HAND_VALUE_NUMERATOR // HAND_VALUE_DENOMINATOR
            score += _sign(player) * in_hand * count

    return score
