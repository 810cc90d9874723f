"""
Engine constants: piece kinds, movement tables, piece values, search parameters.

Everything static about the game lives here so the rest of the engine never
hard-codes a direction list or a magic number. The tables are built once at
import time and never mutated afterwards.

Coordinates are (row, col) with row 0 at the top of the board (Second's back
rank) and row 4 at the bottom (First's back rank). First therefore moves
"up" (row - 1) and Second moves "down" (row + 1).
"""

from dataclasses import dataclass
from enum import Enum, IntEnum


# ---------------------------------------------------------------------------
# Board geometry
# ---------------------------------------------------------------------------

BOARD_SIZE: int = 5


# ---------------------------------------------------------------------------
# Pieces and players
# ---------------------------------------------------------------------------


class PieceKind(IntEnum):
    KING = 1
    GOLD = 2
    SILVER = 3
    BISHOP = 4
    ROOK = 5
    PAWN = 6
    PROMOTED_SILVER = 7
    PROMOTED_BISHOP = 8
    PROMOTED_ROOK = 9
    PROMOTED_PAWN = 10


class Player(Enum):
    FIRST = "first"
    SECOND = "second"

    @property
    def opponent(self) -> "Player":
        return Player.SECOND if self is Player.FIRST else Player.FIRST


# Kinds that may promote, and what they become. King and Gold never promote.
PROMOTES_TO: dict[PieceKind, PieceKind] = {
    PieceKind.SILVER: PieceKind.PROMOTED_SILVER,
    PieceKind.BISHOP: PieceKind.PROMOTED_BISHOP,
    PieceKind.ROOK:   PieceKind.PROMOTED_ROOK,
    PieceKind.PAWN:   PieceKind.PROMOTED_PAWN,
}

# Demotion map: a captured promoted piece goes to the hand as its base kind.
BASE_KIND: dict[PieceKind, PieceKind] = {v: k for k, v in PROMOTES_TO.items()}


def base_kind(kind: PieceKind) -> PieceKind:
    """Return the unpromoted form of ``kind`` (itself if already unpromoted)."""
    return BASE_KIND.get(kind, kind)


# ---------------------------------------------------------------------------
# Promotion zone
# ---------------------------------------------------------------------------
# A one-rank zone: the farthest row from each player's own side. This is also
# the row where a pawn may never be dropped.

FARTHEST_ROW: dict[Player, int] = {
    Player.FIRST:  0,
    Player.SECOND: BOARD_SIZE - 1,
}


# ---------------------------------------------------------------------------
# Movement geometry
# ---------------------------------------------------------------------------
# Offsets are written from First's point of view (forward = row - 1). Kinds
# whose move set is not front/back symmetric get mirrored for Second by
# negating the row offset; symmetric sets are shared as-is.

_KING_STEPS = ((-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1))
_GOLD_STEPS = ((-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, 0))
_SILVER_STEPS = ((-1, -1), (-1, 0), (-1, 1), (1, -1), (1, 1))
_PAWN_STEPS = ((-1, 0),)
_DIAGONALS = ((-1, -1), (-1, 1), (1, -1), (1, 1))
_ORTHOGONALS = ((-1, 0), (1, 0), (0, -1), (0, 1))
_ORTHOGONAL_STEPS = ((-1, 0), (0, -1), (0, 1), (1, 0))


@dataclass(frozen=True)
class Movement:
    """
    How one (kind, owner) pair moves.

    Attributes:
        steps:  Single-step offsets; the destination must be empty or enemy.
        slides: Ray directions; the piece travels until the board edge or the
                first occupied cell, which is included only if enemy-owned.
    """

    steps: tuple[tuple[int, int], ...] = ()
    slides: tuple[tuple[int, int], ...] = ()


def _mirror(offsets: tuple[tuple[int, int], ...]) -> tuple[tuple[int, int], ...]:
    return tuple((-dr, dc) for dr, dc in offsets)


def _build_movement_table() -> dict[tuple[PieceKind, Player], Movement]:
    gold_like = {PieceKind.GOLD, PieceKind.PROMOTED_SILVER, PieceKind.PROMOTED_PAWN}
    table: dict[tuple[PieceKind, Player], Movement] = {}

    for owner in Player:
        orient = _mirror if owner is Player.SECOND else (lambda offsets: offsets)
        for kind in PieceKind:
            if kind is PieceKind.KING:
                movement = Movement(steps=_KING_STEPS)
            elif kind in gold_like:
                movement = Movement(steps=orient(_GOLD_STEPS))
            elif kind is PieceKind.SILVER:
                movement = Movement(steps=orient(_SILVER_STEPS))
            elif kind is PieceKind.PAWN:
                movement = Movement(steps=orient(_PAWN_STEPS))
            elif kind is PieceKind.BISHOP:
                movement = Movement(slides=_DIAGONALS)
            elif kind is PieceKind.PROMOTED_BISHOP:
                movement = Movement(steps=_ORTHOGONAL_STEPS, slides=_DIAGONALS)
            elif kind is PieceKind.ROOK:
                movement = Movement(slides=_ORTHOGONALS)
            else:  # PROMOTED_ROOK
                movement = Movement(steps=_DIAGONALS, slides=_ORTHOGONALS)
            table[(kind, owner)] = movement

    return table


MOVEMENT: dict[tuple[PieceKind, Player], Movement] = _build_movement_table()


# ---------------------------------------------------------------------------
# Piece values
# ---------------------------------------------------------------------------
# The king's value dwarfs everything else so that losing it dominates any
# material count; the game ends when a king is captured.

PIECE_VALUES: dict[PieceKind, int] = {
    PieceKind.KING:            10_000,
    PieceKind.GOLD:            600,
    PieceKind.SILVER:          500,
    PieceKind.BISHOP:          800,
    PieceKind.ROOK:            900,
    PieceKind.PAWN:            100,
    PieceKind.PROMOTED_SILVER: 600,
    PieceKind.PROMOTED_BISHOP: 1_000,
    PieceKind.PROMOTED_ROOK:   1_100,
    PieceKind.PROMOTED_PAWN:   600,
}

# A piece in hand is worth 80% of its board value (integer arithmetic).
HAND_VALUE_NUMERATOR: int = 8
HAND_VALUE_DENOMINATOR: int = 10


# ---------------------------------------------------------------------------
# Search parameters
# ---------------------------------------------------------------------------

# Fixed search depth in plies for the AI player.
SEARCH_DEPTH: int = 3

# Alpha-beta window sentinels. Larger than any reachable evaluation
# (two kings plus every other piece is well under 30 000).
SCORE_BOUND: int = 999_999

# Upper limit accepted from external callers (web requests, USI "go depth").
MAX_REQUEST_DEPTH: int = 4
